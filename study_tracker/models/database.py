"""
Supabase 데이터베이스 연동 모듈
"""

from collections import Counter
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from supabase import Client, create_client

from study_tracker.config import get_logger, get_settings
from study_tracker.date_utils import convert_local_date_to_utc, now_local, to_utc_iso
from study_tracker.models.study_session import StudySession, StudySessionCreate, StudySessionUpdate
from study_tracker.models.user import AuthUser, UserProfile

logger = get_logger(__name__)

SESSIONS_TABLE = "study_sessions"
PROFILES_TABLE = "profiles"
DELETE_ACCOUNT_FUNCTION = "delete_user_account"

# PostgREST 기본 최대 반환 행 수 (db-max-rows)
PAGE_SIZE = 1000

PROFILE_COLUMNS = (
    "id, email, nickname, target_exam, exam_date, "
    "weekday_study_hours, weekend_study_hours, created_at, updated_at"
)

# Supabase 초기화 플래그
_supabase_initialized = False
_supabase_client: Optional[Client] = None


def init_supabase():
    """Supabase 초기화"""
    global _supabase_initialized, _supabase_client

    if _supabase_initialized:
        return

    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_key:
        raise ValueError(
            "SUPABASE_URL과 SUPABASE_KEY 환경 변수를 설정해주세요.\n"
            "Supabase 프로젝트 설정에서 URL과 service role key를 확인할 수 있습니다."
        )

    _supabase_client = create_client(settings.supabase_url, settings.supabase_key)
    _supabase_initialized = True
    logger.info("Supabase가 초기화되었습니다.")


def get_db() -> Client:
    """Supabase 클라이언트 인스턴스 반환"""
    if not _supabase_initialized:
        init_supabase()
    return _supabase_client


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _date_value(day) -> str:
    """날짜 입력값을 현지 자정 기준 UTC ISO 문자열로 변환"""
    return to_utc_iso(convert_local_date_to_utc(day.isoformat()))


def _fetch_all(build_query: Callable[[], Any]) -> List[Dict[str, Any]]:
    """최대 반환 행 수를 넘는 결과를 .range() 페이지 단위로 모두 읽음

    build_query는 호출할 때마다 같은 조건의 새 쿼리를 만들어야 합니다.
    짧은 페이지가 돌아오면 마지막 페이지로 판단합니다.
    """
    rows: List[Dict[str, Any]] = []
    offset = 0
    while True:
        response = build_query().range(offset, offset + PAGE_SIZE - 1).execute()
        page = response.data or []
        rows.extend(page)
        if len(page) < PAGE_SIZE:
            return rows
        offset += PAGE_SIZE


# ---------------------------------------------------------------------------
# 공부 세션
# ---------------------------------------------------------------------------
def create_study_session(user_id: str, data: StudySessionCreate) -> StudySession:
    """공부 세션을 Supabase에 저장"""
    db = get_db()

    day = data.date or now_local().date()
    now = _utc_now()
    session_record = {
        "user_id": user_id,
        "subject": data.subject,
        "duration": data.duration,
        "date": _date_value(day),
        "memo": data.memo,
        "created_at": now,
        "updated_at": now,
    }

    response = db.table(SESSIONS_TABLE).insert(session_record).execute()

    if response.data:
        session = StudySession.model_validate(response.data[0])
        logger.info("세션 저장: 사용자 %s, %s %d분", user_id, session.subject, session.duration)
        return session
    raise RuntimeError("세션 저장 실패")


def get_user_sessions(user_id: str, start_date: Optional[datetime] = None,
                      end_date: Optional[datetime] = None) -> List[StudySession]:
    """사용자의 공부 세션 목록 조회 (날짜 내림차순)"""
    db = get_db()

    def build_query():
        query = db.table(SESSIONS_TABLE).select("*").eq("user_id", user_id)
        if start_date:
            query = query.gte("date", to_utc_iso(start_date))
        if end_date:
            query = query.lte("date", to_utc_iso(end_date))
        # 페이지 경계에서 순서가 바뀌지 않도록 id로 2차 정렬
        return query.order("date", desc=True).order("id")

    return [StudySession.model_validate(row) for row in _fetch_all(build_query)]


def get_study_session(user_id: str, session_id: str) -> Optional[StudySession]:
    """본인 소유의 세션 1건 조회"""
    db = get_db()

    response = db.table(SESSIONS_TABLE)\
        .select("*")\
        .eq("id", session_id)\
        .eq("user_id", user_id)\
        .limit(1)\
        .execute()

    if response.data:
        return StudySession.model_validate(response.data[0])
    return None


def update_study_session(user_id: str, session_id: str,
                         data: StudySessionUpdate) -> Optional[StudySession]:
    """본인 소유의 세션 수정 (없으면 None)"""
    db = get_db()

    changes: Dict[str, Any] = {}
    fields = data.model_dump(exclude_unset=True)
    for key in ("subject", "duration"):
        if fields.get(key) is not None:
            changes[key] = fields[key]
    if fields.get("date") is not None:
        changes["date"] = _date_value(fields["date"])
    if "memo" in fields:
        changes["memo"] = fields["memo"]

    if not changes:
        return get_study_session(user_id, session_id)

    changes["updated_at"] = _utc_now()
    response = db.table(SESSIONS_TABLE)\
        .update(changes)\
        .eq("id", session_id)\
        .eq("user_id", user_id)\
        .execute()

    if response.data:
        return StudySession.model_validate(response.data[0])
    return None


def delete_study_session(user_id: str, session_id: str) -> bool:
    """본인 소유의 세션 삭제 (삭제된 행이 없으면 False)"""
    db = get_db()

    response = db.table(SESSIONS_TABLE)\
        .delete()\
        .eq("id", session_id)\
        .eq("user_id", user_id)\
        .execute()

    deleted = bool(response.data)
    if deleted:
        logger.info("세션 삭제: 사용자 %s, 세션 %s", user_id, session_id)
    return deleted


# ---------------------------------------------------------------------------
# 사용자 프로필
# ---------------------------------------------------------------------------
def get_user_profile(user_id: str) -> Optional[UserProfile]:
    db = get_db()

    response = db.table(PROFILES_TABLE)\
        .select(PROFILE_COLUMNS)\
        .eq("id", user_id)\
        .limit(1)\
        .execute()

    if response.data:
        return UserProfile.model_validate(response.data[0])
    return None


def get_or_create_profile(user: AuthUser) -> UserProfile:
    """프로필 조회, 없으면 생성 (첫 로그인)"""
    profile = get_user_profile(user.id)
    if profile is not None:
        return profile

    now = _utc_now()
    response = get_db().table(PROFILES_TABLE).insert({
        "id": user.id,
        "email": user.email,
        "created_at": now,
        "updated_at": now,
    }).execute()

    if response.data:
        logger.info("프로필 생성: 사용자 %s", user.id)
        return UserProfile.model_validate(response.data[0])
    raise RuntimeError("프로필 생성 실패")


def update_user_profile(user_id: str, changes: Dict[str, Any]) -> Optional[UserProfile]:
    """프로필 필드 변경 (변경할 필드를 한 번의 update로 반영)"""
    db = get_db()

    record = dict(changes)
    record["updated_at"] = _utc_now()
    response = db.table(PROFILES_TABLE).update(record).eq("id", user_id).execute()

    if response.data:
        return UserProfile.model_validate(response.data[0])
    return None


def delete_user_account(user_id: str) -> None:
    """계정 삭제

    세션, 프로필, 인증 사용자를 DB 함수 하나에서 단일 트랜잭션으로 삭제합니다.
    """
    get_db().rpc(DELETE_ACCOUNT_FUNCTION, {"target_user_id": user_id}).execute()
    logger.info("계정 삭제: 사용자 %s", user_id)


# ---------------------------------------------------------------------------
# 관리자
# ---------------------------------------------------------------------------
def list_user_profiles() -> List[Dict[str, Any]]:
    """전체 사용자 목록 (세션 수 포함)"""
    db = get_db()

    profiles = _fetch_all(
        lambda: db.table(PROFILES_TABLE).select("id, email, nickname").order("id", desc=True)
    )
    sessions = _fetch_all(
        lambda: db.table(SESSIONS_TABLE).select("id, user_id").order("id")
    )

    counts = Counter(row["user_id"] for row in sessions)
    return [
        {**profile, "session_count": counts.get(profile["id"], 0)}
        for profile in profiles
    ]


def _count_rows(table: str) -> int:
    """테이블 전체 행 수 (count=exact, 행 데이터는 1건만 전송)"""
    response = get_db().table(table).select("id", count="exact").limit(1).execute()
    return response.count or 0


def get_admin_stats() -> Dict[str, int]:
    """전체 사용자 수, 세션 수, 총 공부 시간(분)"""
    db = get_db()

    durations = _fetch_all(
        lambda: db.table(SESSIONS_TABLE).select("id, duration").order("id")
    )

    return {
        "user_count": _count_rows(PROFILES_TABLE),
        "session_count": _count_rows(SESSIONS_TABLE),
        "total_duration": sum(row["duration"] for row in durations),
    }
