"""
사용자 프로필 및 시험 목표 데이터 모델
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from study_tracker.date_utils import check_input_date


class AuthUser(BaseModel):
    """인증된 사용자 (Supabase Auth에서 확인된 정보)"""
    id: str
    email: Optional[str] = None


class ExamGoal(BaseModel):
    """시험 목표 설정

    네 항목이 모두 설정된 경우에만 존재합니다.
    """
    exam_code: str
    exam_date: datetime
    weekday_hours: float
    weekend_hours: float


class UserProfile(BaseModel):
    """사용자 프로필 (profiles 테이블)"""
    id: str
    email: Optional[str] = None
    nickname: Optional[str] = None
    target_exam: Optional[str] = None
    exam_date: Optional[datetime] = None
    weekday_study_hours: Optional[float] = None
    weekend_study_hours: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def exam_goal(self) -> Optional[ExamGoal]:
        """시험 목표 (일부 항목만 설정된 경우 목표 없음으로 취급)"""
        if (
            self.target_exam is None
            or self.exam_date is None
            or self.weekday_study_hours is None
            or self.weekend_study_hours is None
        ):
            return None
        return ExamGoal(
            exam_code=self.target_exam,
            exam_date=self.exam_date,
            weekday_hours=self.weekday_study_hours,
            weekend_hours=self.weekend_study_hours,
        )


class ExamSettingsUpdate(BaseModel):
    """시험 설정 변경 요청"""
    target_exam: str
    exam_date: date
    weekday_study_hours: float = Field(ge=0, le=24)
    weekend_study_hours: float = Field(ge=0, le=24)

    @field_validator("exam_date")
    @classmethod
    def check_exam_date(cls, value: date) -> date:
        return check_input_date(value)


class NicknameUpdate(BaseModel):
    """닉네임 변경 요청"""
    nickname: str

    @field_validator("nickname")
    @classmethod
    def check_nickname(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("닉네임은 1자 이상 입력해주세요.")
        if len(value) > 50:
            raise ValueError("닉네임은 50자 이내로 입력해주세요.")
        return value
