"""
시험 목표 기반 학습 계획 및 진행률 계산

시험 코드, 시험일, 평일/주말 공부 가능 시간과 지금까지의 공부 기록을 바탕으로
남은 일수, 공부 가능 시간, 주간 목표, 진행률을 계산합니다.
"""

import math
from datetime import datetime, timedelta
from typing import Iterable, Tuple, Union

from study_tracker.date_utils import (
    days_in_month,
    is_weekend,
    month_window,
    parse_timestamp,
    to_local,
    week_window,
)
from study_tracker.errors import ExamNotFoundError
from study_tracker.models.exam_master import ExamDefinition, get_exam_by_code
from study_tracker.models.stats import (
    ExamPassed,
    ExamProgress,
    MonthlyProgress,
    StudyPlan,
    WeeklyGoal,
)
from study_tracker.models.study_session import StudySession
from study_tracker.models.user import UserProfile
from study_tracker.services.aggregator import filter_sessions, total_minutes

SECONDS_PER_DAY = 24 * 60 * 60


def resolve_exam(exam_code: str) -> ExamDefinition:
    """시험 코드를 시험 정보로 변환 (없으면 ExamNotFoundError)"""
    exam = get_exam_by_code(exam_code)
    if exam is None:
        raise ExamNotFoundError(exam_code)
    return exam


def days_until(exam_date: datetime, now: datetime) -> int:
    """시험일까지 남은 일수 (올림)"""
    delta = parse_timestamp(exam_date) - parse_timestamp(now)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def count_weekdays_and_weekends(days: int, now: datetime) -> Tuple[int, int]:
    """오늘부터 days일 동안의 평일/주말 일수

    7일 단위는 평일 5일 + 주말 2일로 계산하고, 나머지 일수만 실제 요일로 판정합니다.
    """
    weeks, remainder = divmod(days, 7)
    weekdays = weeks * 5
    weekends = weeks * 2

    today = to_local(now).date()
    for offset in range(remainder):
        if is_weekend(today + timedelta(days=offset)):
            weekends += 1
        else:
            weekdays += 1
    return weekdays, weekends


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def compute_study_plan(
    exam_code: str,
    exam_date: datetime,
    weekday_hours: float,
    weekend_hours: float,
    completed_minutes: int,
    now: datetime,
) -> Union[StudyPlan, ExamPassed]:
    """학습 계획 계산

    Args:
        exam_code: 시험 코드 (시험 마스터에 존재해야 함)
        exam_date: 시험일 (현지 자정에 해당하는 시각)
        weekday_hours: 평일 공부 가능 시간
        weekend_hours: 주말 공부 가능 시간
        completed_minutes: 전체 기간의 공부 시간 합계 (분)
        now: 현재 시각
    """
    exam = resolve_exam(exam_code)
    exam_date = parse_timestamp(exam_date)

    days_until_exam = days_until(exam_date, now)
    if days_until_exam <= 0:
        return ExamPassed(exam_info=exam, exam_date=exam_date)

    weeks, remaining_days = divmod(days_until_exam, 7)
    total_weekdays, total_weekends = count_weekdays_and_weekends(days_until_exam, now)

    total_available_hours = total_weekdays * weekday_hours + total_weekends * weekend_hours
    # 1주 미만이면 남은 기간 전체를 한 주로 취급
    weekly_average_hours = total_available_hours / weeks if weeks > 0 else total_available_hours

    recommended = exam.recommended_hours
    completed_hours = completed_minutes / 60
    remaining_hours = max(recommended - completed_hours, 0)
    progress_percentage = min(max(completed_hours / recommended * 100, 0), 100)

    return StudyPlan(
        exam_info=exam,
        exam_date=exam_date,
        days_until_exam=days_until_exam,
        weeks=weeks,
        remaining_days=remaining_days,
        total_weekdays=total_weekdays,
        total_weekends=total_weekends,
        weekday_study_hours=weekday_hours,
        weekend_study_hours=weekend_hours,
        total_available_hours=total_available_hours,
        weekly_average_hours=weekly_average_hours,
        completed_hours=completed_hours,
        remaining_hours=remaining_hours,
        progress_percentage=progress_percentage,
        is_on_track=total_available_hours >= remaining_hours,
    )


def compute_weekly_goal(
    sessions: Iterable[StudySession],
    weekday_hours: float,
    weekend_hours: float,
    now: datetime,
) -> WeeklyGoal:
    """이번 주(일요일 시작) 공부 시간과 주간 목표 비교"""
    this_week = filter_sessions(sessions, week_window(now))
    this_week_hours = total_minutes(this_week) / 60
    weekly_target_hours = weekday_hours * 5 + weekend_hours * 2

    if weekly_target_hours > 0:
        percentage = min(round_half_up(this_week_hours / weekly_target_hours * 100), 100)
    else:
        percentage = 0

    return WeeklyGoal(
        this_week_hours=this_week_hours,
        weekly_target_hours=weekly_target_hours,
        weekly_progress_percentage=percentage,
    )


def compute_monthly_progress(
    sessions: Iterable[StudySession],
    now: datetime,
    monthly_target_minutes: int,
) -> MonthlyProgress:
    local_now = to_local(now)
    window = month_window(local_now.year, local_now.month)
    this_month_duration = total_minutes(filter_sessions(sessions, window))

    if monthly_target_minutes > 0:
        percentage = min(round_half_up(this_month_duration / monthly_target_minutes * 100), 100)
    else:
        percentage = 0

    return MonthlyProgress(
        this_month_duration=this_month_duration,
        monthly_target_minutes=monthly_target_minutes,
        progress_percentage=percentage,
        days_in_month=days_in_month(local_now.year, local_now.month),
        current_day=local_now.day,
    )


def compute_goal_progress(
    profile: UserProfile,
    all_sessions: Iterable[StudySession],
    now: datetime,
    monthly_target_minutes: int,
) -> Union[MonthlyProgress, ExamProgress]:
    """목표 진행률 계산

    시험 목표가 설정되어 있으면 시험 기준 진행률을, 없으면 월간 목표 진행률을 반환합니다.
    """
    sessions = list(all_sessions)
    goal = profile.exam_goal
    if goal is None:
        return compute_monthly_progress(sessions, now, monthly_target_minutes)

    exam = resolve_exam(goal.exam_code)
    days_until_exam = days_until(goal.exam_date, now)

    total_studied_hours = total_minutes(sessions) / 60
    target_hours = exam.recommended_hours
    progress_percentage = min(round_half_up(total_studied_hours / target_hours * 100), 100)
    remaining_hours = max(target_hours - total_studied_hours, 0)

    weekly = compute_weekly_goal(sessions, goal.weekday_hours, goal.weekend_hours, now)

    return ExamProgress(
        exam_info=exam,
        exam_date=goal.exam_date,
        days_until_exam=max(days_until_exam, 0),
        is_exam_passed=days_until_exam <= 0,
        total_studied_hours=total_studied_hours,
        target_hours=target_hours,
        progress_percentage=progress_percentage,
        remaining_hours=remaining_hours,
        this_week_hours=weekly.this_week_hours,
        weekly_target_hours=weekly.weekly_target_hours,
        weekly_progress_percentage=weekly.weekly_progress_percentage,
        weekday_study_hours=goal.weekday_hours,
        weekend_study_hours=goal.weekend_hours,
    )
