"""
공부 세션 데이터 모델
"""

from datetime import date as date_type
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from study_tracker.date_utils import check_input_date, format_date, format_date_for_input


def _validate_subject(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("과목명은 필수입니다.")
    return value


def _validate_duration(value: int) -> int:
    if value < 1:
        raise ValueError("공부 시간은 1분 이상이어야 합니다.")
    return value


class StudySession(BaseModel):
    """공부 세션 모델 (DB 레코드)"""
    id: str
    user_id: str
    subject: str
    duration: int  # 분 단위
    date: datetime  # 현지 자정에 해당하는 UTC 시각
    memo: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StudySessionCreate(BaseModel):
    """세션 생성 요청 모델"""
    subject: str = Field(description="과목명")
    duration: int = Field(description="공부 시간 (분)")
    date: Optional[date_type] = Field(default=None, description="공부한 날짜 (생략 시 오늘)")
    memo: Optional[str] = None

    @field_validator("subject")
    @classmethod
    def check_subject(cls, value: str) -> str:
        return _validate_subject(value)

    @field_validator("duration")
    @classmethod
    def check_duration(cls, value: int) -> int:
        return _validate_duration(value)

    @field_validator("date")
    @classmethod
    def check_date(cls, value: Optional[date_type]) -> Optional[date_type]:
        return None if value is None else check_input_date(value)


class StudySessionUpdate(BaseModel):
    """세션 수정 요청 모델 (지정한 필드만 변경)"""
    subject: Optional[str] = None
    duration: Optional[int] = None
    date: Optional[date_type] = None
    memo: Optional[str] = None

    @field_validator("subject")
    @classmethod
    def check_subject(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _validate_subject(value)

    @field_validator("duration")
    @classmethod
    def check_duration(cls, value: Optional[int]) -> Optional[int]:
        return None if value is None else _validate_duration(value)

    @field_validator("date")
    @classmethod
    def check_date(cls, value: Optional[date_type]) -> Optional[date_type]:
        return None if value is None else check_input_date(value)


class StudySessionResponse(BaseModel):
    """세션 응답 모델"""
    id: str
    subject: str
    duration: int
    date: str
    local_date: str
    display_date: str
    memo: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_session(cls, session: StudySession) -> "StudySessionResponse":
        return cls(
            id=session.id,
            subject=session.subject,
            duration=session.duration,
            date=session.date.isoformat(),
            local_date=format_date_for_input(session.date),
            display_date=format_date(session.date),
            memo=session.memo,
            created_at=session.created_at.isoformat() if session.created_at else None,
            updated_at=session.updated_at.isoformat() if session.updated_at else None,
        )
