"""
대시보드 통계 관련 API 라우트
"""

from datetime import datetime, timezone
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query

from study_tracker.auth import get_current_user
from study_tracker.config import Settings, get_settings
from study_tracker.date_utils import month_window, now_local, week_window, year_window
from study_tracker.models.database import get_or_create_profile, get_user_sessions
from study_tracker.models.stats import ExamProgress, MonthlyProgress, SessionSummary, YearlyStats
from study_tracker.models.user import AuthUser
from study_tracker.services.aggregator import aggregate_sessions, monthly_breakdown
from study_tracker.services.study_plan import compute_goal_progress

router = APIRouter()


class MonthlyStats(SessionSummary):
    year: int
    month: int


@router.get("/dashboard/monthly", response_model=MonthlyStats)
def get_monthly_stats(
    year: Optional[int] = Query(default=None, ge=1970, le=9999),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    user: AuthUser = Depends(get_current_user),
):
    """월별 통계 (기본값: 이번 달)"""
    today = now_local()
    target_year = year or today.year
    target_month = month or today.month

    window = month_window(target_year, target_month)
    sessions = get_user_sessions(user.id, window.start, window.end)
    summary = aggregate_sessions(sessions, window)

    return MonthlyStats(year=target_year, month=target_month, **summary.model_dump())


@router.get("/dashboard/weekly", response_model=SessionSummary)
def get_weekly_stats(user: AuthUser = Depends(get_current_user)):
    """이번 주(일요일 시작) 통계"""
    window = week_window(datetime.now(timezone.utc))
    sessions = get_user_sessions(user.id, window.start, window.end)
    return aggregate_sessions(sessions, window)


@router.get("/dashboard/yearly", response_model=YearlyStats)
def get_yearly_stats(
    year: Optional[int] = Query(default=None, ge=1970, le=9999),
    user: AuthUser = Depends(get_current_user),
):
    """연간 월별 통계 (기본값: 올해)"""
    target_year = year or now_local().year
    window = year_window(target_year)
    sessions = get_user_sessions(user.id, window.start, window.end)
    return monthly_breakdown(sessions, target_year)


@router.get("/dashboard/goal-progress", response_model=Union[ExamProgress, MonthlyProgress])
def get_goal_progress(
    user: AuthUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    """학습 목표 진행률 (시험 설정이 없으면 월간 목표)"""
    profile = get_or_create_profile(user)
    sessions = get_user_sessions(user.id)
    return compute_goal_progress(
        profile,
        sessions,
        datetime.now(timezone.utc),
        settings.monthly_target_minutes,
    )
