"""
사용자 프로필 관련 API 라우트
"""

from fastapi import APIRouter, Depends

from study_tracker.auth import get_current_user
from study_tracker.errors import NotFoundError
from study_tracker.models.database import (
    delete_user_account,
    get_or_create_profile,
    update_user_profile,
)
from study_tracker.models.user import AuthUser, NicknameUpdate, UserProfile

router = APIRouter()


@router.get("/users/me", response_model=UserProfile)
def get_profile(user: AuthUser = Depends(get_current_user)):
    """로그인 사용자의 프로필"""
    return get_or_create_profile(user)


@router.put("/users/me/nickname", response_model=UserProfile)
def update_nickname(data: NicknameUpdate, user: AuthUser = Depends(get_current_user)):
    get_or_create_profile(user)
    profile = update_user_profile(user.id, {"nickname": data.nickname})
    if profile is None:
        raise NotFoundError("사용자를 찾을 수 없습니다.")
    return profile


@router.delete("/users/me/nickname", response_model=UserProfile)
def clear_nickname(user: AuthUser = Depends(get_current_user)):
    get_or_create_profile(user)
    profile = update_user_profile(user.id, {"nickname": None})
    if profile is None:
        raise NotFoundError("사용자를 찾을 수 없습니다.")
    return profile


@router.delete("/users/me")
def delete_account(user: AuthUser = Depends(get_current_user)):
    """계정 완전 삭제 (공부 기록 포함)"""
    delete_user_account(user.id)
    return {"success": True}
