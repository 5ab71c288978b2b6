"""
인증 및 관리자 권한 확인

클라이언트는 Supabase Auth의 access token을 Bearer 토큰으로 전송합니다.
"""

from typing import Iterable, Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import AuthError

from study_tracker.config import Settings, get_logger, get_settings
from study_tracker.errors import AdminAccessDenied
from study_tracker.models.database import get_db
from study_tracker.models.user import AuthUser

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthUser:
    """Bearer 토큰으로 로그인 사용자 확인"""
    if credentials is None:
        raise HTTPException(status_code=401, detail="로그인이 필요합니다.")

    try:
        response = get_db().auth.get_user(credentials.credentials)
    except AuthError as e:
        logger.warning("토큰 검증 실패: %s", e)
        raise HTTPException(status_code=401, detail="인증 정보가 유효하지 않습니다.")

    if response is None or response.user is None:
        raise HTTPException(status_code=401, detail="인증 정보가 유효하지 않습니다.")

    return AuthUser(id=response.user.id, email=response.user.email)


def check_admin_access(email: Optional[str], admin_emails: Iterable[str]) -> None:
    """관리자 허용 목록 확인

    Args:
        email: 인증된 사용자의 이메일
        admin_emails: 관리자 이메일 허용 목록
    """
    allowed = [e.strip() for e in admin_emails if e and e.strip()]
    if not allowed:
        raise AdminAccessDenied("관리자 권한 설정이 없습니다.")
    if not email or email not in allowed:
        raise AdminAccessDenied(f"관리자 권한이 필요합니다. (current: {email})")


def require_admin(
    user: AuthUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> AuthUser:
    """관리자 전용 엔드포인트 의존성"""
    try:
        check_admin_access(user.email, settings.admin_emails)
    except AdminAccessDenied:
        logger.warning("관리자 접근 거부: %s", user.email)
        raise
    return user
