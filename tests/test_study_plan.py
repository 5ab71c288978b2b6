from datetime import datetime, timedelta, timezone

import pytest

from study_tracker.date_utils import convert_local_date_to_utc
from study_tracker.errors import ExamNotFoundError
from study_tracker.models.stats import ExamPassed, ExamProgress, MonthlyProgress, StudyPlan
from study_tracker.models.study_session import StudySession
from study_tracker.models.user import UserProfile
from study_tracker.services.study_plan import (
    compute_goal_progress,
    compute_study_plan,
    compute_weekly_goal,
    count_weekdays_and_weekends,
    days_until,
)

# 2025-01-06 (월) 12:00 JST
NOW = datetime(2025, 1, 6, 3, 0, tzinfo=timezone.utc)


def make_session(duration, day, subject="수학"):
    return StudySession(
        id=day + subject,
        user_id="user-1",
        subject=subject,
        duration=duration,
        date=convert_local_date_to_utc(day),
    )


def test_exam_today_is_passed():
    exam_date = convert_local_date_to_utc("2025-01-06")
    plan = compute_study_plan("FE", exam_date, 2, 4, 0, NOW)
    assert isinstance(plan, ExamPassed)
    assert plan.is_exam_passed is True


def test_exam_at_exactly_now_is_passed():
    plan = compute_study_plan("FE", NOW, 2, 4, 0, NOW)
    assert isinstance(plan, ExamPassed)


def test_two_full_weeks():
    plan = compute_study_plan("FE", NOW + timedelta(days=14), 2, 4, 0, NOW)
    assert isinstance(plan, StudyPlan)
    assert plan.days_until_exam == 14
    assert plan.weeks == 2
    assert plan.remaining_days == 0
    assert plan.total_weekdays == 10
    assert plan.total_weekends == 4


def test_partial_day_rounds_up():
    assert days_until(NOW + timedelta(hours=1), NOW) == 1
    assert days_until(NOW + timedelta(days=2, minutes=1), NOW) == 3


def test_progress_is_clamped():
    plan = compute_study_plan("IP", NOW + timedelta(days=30), 1, 1, 999 * 60, NOW)
    assert plan.completed_hours == 999
    assert plan.progress_percentage == 100
    assert plan.remaining_hours == 0
    assert plan.is_on_track is True


@pytest.mark.parametrize("start_offset", range(7))
@pytest.mark.parametrize("days", range(1, 15))
def test_weekday_weekend_split_covers_every_day(start_offset, days):
    now = NOW + timedelta(days=start_offset)
    weekdays, weekends = count_weekdays_and_weekends(days, now)
    assert weekdays + weekends == days


def test_remainder_days_use_actual_weekdays():
    # 월요일부터 6일: 월~금 + 토
    assert count_weekdays_and_weekends(6, NOW) == (5, 1)
    # 토요일부터 2일: 토, 일
    saturday = NOW + timedelta(days=5)
    assert count_weekdays_and_weekends(2, saturday) == (0, 2)


def test_fe_scenario():
    plan = compute_study_plan("FE", NOW + timedelta(days=100), 2, 4, 6000, NOW)
    assert plan.completed_hours == 100
    assert plan.remaining_hours == 150
    assert plan.progress_percentage == pytest.approx(40)
    assert plan.weeks == 14
    assert plan.remaining_days == 2
    assert plan.total_weekdays == 72
    assert plan.total_weekends == 28
    assert plan.total_available_hours == 256
    assert plan.weekly_average_hours == pytest.approx(256 / 14)
    assert plan.is_on_track is True
    assert plan.exam_info.code == "FE"


def test_short_plan_uses_total_as_weekly_average():
    plan = compute_study_plan("FE", NOW + timedelta(days=3), 2, 4, 0, NOW)
    assert plan.weeks == 0
    assert plan.weekly_average_hours == plan.total_available_hours == 6


def test_not_on_track_when_capacity_is_short():
    plan = compute_study_plan("IP", NOW + timedelta(days=1), 1, 1, 0, NOW)
    assert plan.total_available_hours == 1
    assert plan.is_on_track is False


def test_unknown_exam_code_is_rejected():
    with pytest.raises(ExamNotFoundError):
        compute_study_plan("XX", NOW + timedelta(days=10), 2, 4, 0, NOW)


def test_weekly_goal_only_counts_this_week():
    sessions = [
        make_session(60, "2025-01-05"),  # 일 (이번 주)
        make_session(60, "2025-01-06"),  # 월 (이번 주)
        make_session(180, "2025-01-04"),  # 토 (지난 주)
    ]
    weekly = compute_weekly_goal(sessions, 1, 2, NOW)
    assert weekly.this_week_hours == 2
    assert weekly.weekly_target_hours == 9
    assert weekly.weekly_progress_percentage == 22


def test_weekly_goal_with_zero_target():
    weekly = compute_weekly_goal([make_session(60, "2025-01-06")], 0, 0, NOW)
    assert weekly.weekly_progress_percentage == 0


def test_goal_progress_without_goal_is_monthly():
    profile = UserProfile(id="user-1")
    sessions = [make_session(60, "2025-01-02"), make_session(30, "2024-12-31")]
    progress = compute_goal_progress(profile, sessions, NOW, 3000)
    assert isinstance(progress, MonthlyProgress)
    assert progress.type == "monthly"
    assert progress.this_month_duration == 60
    assert progress.progress_percentage == 2
    assert progress.days_in_month == 31
    assert progress.current_day == 6


def test_partial_goal_falls_back_to_monthly():
    profile = UserProfile(id="user-1", target_exam="FE", weekday_study_hours=2)
    progress = compute_goal_progress(profile, [], NOW, 3000)
    assert isinstance(progress, MonthlyProgress)


def test_goal_progress_with_exam_goal():
    profile = UserProfile(
        id="user-1",
        target_exam="FE",
        exam_date=NOW + timedelta(days=30),
        weekday_study_hours=1,
        weekend_study_hours=2,
    )
    sessions = [
        make_session(60, "2025-01-05"),
        make_session(60, "2025-01-06"),
        make_session(180, "2025-01-04"),
    ]
    progress = compute_goal_progress(profile, sessions, NOW, 3000)
    assert isinstance(progress, ExamProgress)
    assert progress.type == "exam"
    assert progress.days_until_exam == 30
    assert progress.is_exam_passed is False
    assert progress.total_studied_hours == 5
    assert progress.target_hours == 250
    assert progress.progress_percentage == 2
    assert progress.remaining_hours == 245
    assert progress.this_week_hours == 2
    assert progress.weekly_target_hours == 9
    assert progress.weekly_progress_percentage == 22


def test_goal_progress_after_exam_date():
    profile = UserProfile(
        id="user-1",
        target_exam="AP",
        exam_date=NOW - timedelta(days=3),
        weekday_study_hours=1,
        weekend_study_hours=2,
    )
    progress = compute_goal_progress(profile, [], NOW, 3000)
    assert progress.is_exam_passed is True
    assert progress.days_until_exam == 0


def test_goal_progress_with_unknown_exam_code():
    profile = UserProfile(
        id="user-1",
        target_exam="XX",
        exam_date=NOW + timedelta(days=3),
        weekday_study_hours=1,
        weekend_study_hours=2,
    )
    with pytest.raises(ExamNotFoundError):
        compute_goal_progress(profile, [], NOW, 3000)
