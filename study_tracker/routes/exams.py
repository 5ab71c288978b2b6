"""
IPA 시험 설정 및 학습 계획 관련 API 라우트
"""

from datetime import datetime, timezone
from typing import List, Optional, Union

from fastapi import APIRouter, Depends

from study_tracker.auth import get_current_user
from study_tracker.config import get_logger
from study_tracker.date_utils import convert_local_date_to_utc, to_utc_iso
from study_tracker.errors import InvalidFieldError, NotFoundError
from study_tracker.models.database import (
    get_or_create_profile,
    get_user_sessions,
    update_user_profile,
)
from study_tracker.models.exam_master import (
    IPA_EXAMS,
    ExamDefinition,
    ExamLevel,
    get_exam_by_code,
    get_exams_by_level,
)
from study_tracker.models.stats import ExamPassed, StudyPlan
from study_tracker.models.user import AuthUser, ExamSettingsUpdate, UserProfile
from study_tracker.services.aggregator import total_minutes
from study_tracker.services.study_plan import compute_study_plan

logger = get_logger(__name__)

router = APIRouter()

GOAL_FIELDS = ("target_exam", "exam_date", "weekday_study_hours", "weekend_study_hours")


class ExamSettings(UserProfile):
    exam_info: ExamDefinition


@router.get("/exams", response_model=List[ExamDefinition])
def get_all_exams(level: Optional[ExamLevel] = None):
    """시험 목록 (레벨 지정 시 해당 레벨만)"""
    if level is not None:
        return get_exams_by_level(level)
    return IPA_EXAMS


@router.get("/exams/{code}", response_model=ExamDefinition)
def get_exam(code: str):
    exam = get_exam_by_code(code)
    if exam is None:
        raise NotFoundError("시험을 찾을 수 없습니다.")
    return exam


@router.get("/exam/settings", response_model=Optional[ExamSettings])
def get_exam_settings(user: AuthUser = Depends(get_current_user)):
    """로그인 사용자의 시험 설정 (미설정이면 null)"""
    profile = get_or_create_profile(user)
    if profile.target_exam is None:
        return None

    exam = get_exam_by_code(profile.target_exam)
    if exam is None:
        return None
    return ExamSettings(exam_info=exam, **profile.model_dump())


@router.put("/exam/settings", response_model=UserProfile)
def update_exam_settings(
    data: ExamSettingsUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """시험 설정 변경"""
    if get_exam_by_code(data.target_exam) is None:
        raise InvalidFieldError("target_exam", "유효하지 않은 시험 코드입니다.")

    exam_date = convert_local_date_to_utc(data.exam_date.isoformat())
    if exam_date < datetime.now(timezone.utc):
        raise InvalidFieldError("exam_date", "시험일은 미래 날짜로 설정해주세요.")

    get_or_create_profile(user)
    profile = update_user_profile(user.id, {
        "target_exam": data.target_exam,
        "exam_date": to_utc_iso(exam_date),
        "weekday_study_hours": data.weekday_study_hours,
        "weekend_study_hours": data.weekend_study_hours,
    })
    if profile is None:
        raise NotFoundError("사용자를 찾을 수 없습니다.")

    logger.info("시험 설정 변경: 사용자 %s, 시험 %s", user.id, data.target_exam)
    return profile


@router.delete("/exam/settings", response_model=UserProfile)
def clear_exam_settings(user: AuthUser = Depends(get_current_user)):
    """시험 설정 초기화 (네 항목을 한 번에 null로)"""
    get_or_create_profile(user)
    profile = update_user_profile(user.id, {field: None for field in GOAL_FIELDS})
    if profile is None:
        raise NotFoundError("사용자를 찾을 수 없습니다.")
    return profile


@router.get("/exam/study-plan", response_model=Optional[Union[StudyPlan, ExamPassed]])
def get_study_plan(user: AuthUser = Depends(get_current_user)):
    """학습 계획 계산 (시험 설정이 없으면 null)"""
    profile = get_or_create_profile(user)
    goal = profile.exam_goal
    if goal is None:
        return None

    sessions = get_user_sessions(user.id)
    return compute_study_plan(
        goal.exam_code,
        goal.exam_date,
        goal.weekday_hours,
        goal.weekend_hours,
        total_minutes(sessions),
        datetime.now(timezone.utc),
    )
