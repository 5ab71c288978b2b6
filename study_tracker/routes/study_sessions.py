"""
공부 세션 관련 API 라우트
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from study_tracker.auth import get_current_user
from study_tracker.date_utils import check_input_date, convert_local_date_to_utc, local_midnight
from study_tracker.errors import InvalidFieldError, NotFoundError
from study_tracker.models.database import (
    create_study_session,
    delete_study_session,
    get_study_session,
    get_user_sessions,
    update_study_session,
)
from study_tracker.models.study_session import (
    StudySessionCreate,
    StudySessionResponse,
    StudySessionUpdate,
)
from study_tracker.models.user import AuthUser

router = APIRouter()

SESSION_NOT_FOUND = "공부 기록을 찾을 수 없습니다."


def _query_date(name: str, value: Optional[date]) -> Optional[date]:
    if value is None:
        return None
    try:
        return check_input_date(value)
    except ValueError as e:
        raise InvalidFieldError(name, str(e), location="query")


@router.post("/sessions", response_model=StudySessionResponse, status_code=201)
def create_session(
    data: StudySessionCreate,
    user: AuthUser = Depends(get_current_user),
):
    """공부 기록 생성"""
    session = create_study_session(user.id, data)
    return StudySessionResponse.from_session(session)


@router.get("/sessions", response_model=List[StudySessionResponse])
def get_sessions(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    limit: int = Query(default=100, ge=1, le=1000),
    user: AuthUser = Depends(get_current_user),
):
    """로그인 사용자의 공부 기록 목록 (날짜 내림차순)

    start_date/end_date는 현지 날짜 기준이며 양 끝을 포함합니다.
    """
    start_date = _query_date("start_date", start_date)
    end_date = _query_date("end_date", end_date)
    start = convert_local_date_to_utc(start_date.isoformat()) if start_date else None
    end = None
    if end_date:
        # 종료일 당일 전체를 포함
        end = local_midnight(end_date).replace(hour=23, minute=59, second=59)

    sessions = get_user_sessions(user.id, start, end)
    return [StudySessionResponse.from_session(s) for s in sessions[:limit]]


@router.get("/sessions/{session_id}", response_model=StudySessionResponse)
def get_session(session_id: str, user: AuthUser = Depends(get_current_user)):
    """공부 기록 1건 조회"""
    session = get_study_session(user.id, session_id)
    if session is None:
        raise NotFoundError(SESSION_NOT_FOUND)
    return StudySessionResponse.from_session(session)


@router.patch("/sessions/{session_id}", response_model=StudySessionResponse)
def update_session(
    session_id: str,
    data: StudySessionUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """공부 기록 수정 (본인 기록만)"""
    session = update_study_session(user.id, session_id, data)
    if session is None:
        raise NotFoundError(SESSION_NOT_FOUND)
    return StudySessionResponse.from_session(session)


@router.delete("/sessions/{session_id}")
def delete_session(session_id: str, user: AuthUser = Depends(get_current_user)):
    """공부 기록 삭제 (본인 기록만)"""
    if not delete_study_session(user.id, session_id):
        raise NotFoundError(SESSION_NOT_FOUND)
    return {"success": True}
