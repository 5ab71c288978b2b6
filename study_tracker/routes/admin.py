"""
관리자 전용 API 라우트
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from study_tracker.auth import require_admin
from study_tracker.config import get_logger
from study_tracker.errors import NotFoundError
from study_tracker.models.database import (
    delete_user_account,
    get_admin_stats,
    get_user_profile,
    get_user_sessions,
    list_user_profiles,
)
from study_tracker.models.study_session import StudySessionResponse
from study_tracker.models.user import AuthUser

logger = get_logger(__name__)

router = APIRouter()


class AdminUserSummary(BaseModel):
    id: str
    email: Optional[str] = None
    nickname: Optional[str] = None
    session_count: int


class AdminUserDetail(BaseModel):
    id: str
    email: Optional[str] = None
    nickname: Optional[str] = None
    study_sessions: List[StudySessionResponse]


class AdminStats(BaseModel):
    user_count: int
    session_count: int
    total_duration: int


@router.get("/admin/users", response_model=List[AdminUserSummary])
def get_all_users(admin: AuthUser = Depends(require_admin)):
    """전체 사용자 목록"""
    return list_user_profiles()


@router.get("/admin/users/{user_id}", response_model=AdminUserDetail)
def get_user_details(user_id: str, admin: AuthUser = Depends(require_admin)):
    """특정 사용자의 상세 정보 (공부 기록 포함)"""
    profile = get_user_profile(user_id)
    if profile is None:
        raise NotFoundError("사용자를 찾을 수 없습니다.")

    sessions = get_user_sessions(user_id)
    return AdminUserDetail(
        id=profile.id,
        email=profile.email,
        nickname=profile.nickname,
        study_sessions=[StudySessionResponse.from_session(s) for s in sessions],
    )


@router.delete("/admin/users/{user_id}")
def delete_user(user_id: str, admin: AuthUser = Depends(require_admin)):
    """관리자에 의한 사용자 삭제"""
    if user_id == admin.id:
        raise HTTPException(status_code=400, detail="자기 자신은 삭제할 수 없습니다.")

    if get_user_profile(user_id) is None:
        raise NotFoundError("사용자를 찾을 수 없습니다.")

    delete_user_account(user_id)
    logger.info("관리자 %s가 사용자 %s를 삭제했습니다.", admin.email, user_id)
    return {"success": True}


@router.get("/admin/stats", response_model=AdminStats)
def get_stats(admin: AuthUser = Depends(require_admin)):
    """관리자 통계"""
    return get_admin_stats()
