"""
공부 세션 집계
"""

from typing import Dict, Iterable, List, Optional

from study_tracker.date_utils import DateWindow, format_date_for_input, local_date_of
from study_tracker.models.stats import MonthStat, SessionSummary, SubjectStat, YearlyStats
from study_tracker.models.study_session import StudySession

RECENT_SESSIONS_LIMIT = 5


def filter_sessions(sessions: Iterable[StudySession], window: DateWindow) -> List[StudySession]:
    """기간에 포함되는 세션만 반환 (양 끝 포함)"""
    return [s for s in sessions if window.contains(s.date)]


def aggregate_sessions(
    sessions: Iterable[StudySession],
    window: Optional[DateWindow] = None,
) -> SessionSummary:
    """세션 목록의 합계, 과목별 통계, 일별 합계, 최근 세션을 계산합니다.

    Args:
        sessions: 사용자의 공부 세션
        window: 지정하면 해당 기간의 세션만 집계
    """
    sessions = list(sessions)
    if window is not None:
        sessions = filter_sessions(sessions, window)

    if not sessions:
        return SessionSummary()

    total_duration = sum(s.duration for s in sessions)
    total_sessions = len(sessions)

    # 과목별 집계 (처음 등장한 순서 유지)
    subject_stats: Dict[str, SubjectStat] = {}
    for session in sessions:
        stat = subject_stats.get(session.subject)
        if stat is None:
            stat = subject_stats[session.subject] = SubjectStat(
                subject=session.subject, sessions=0, duration=0
            )
        stat.sessions += 1
        stat.duration += session.duration

    # 일별 집계 (현지 날짜 기준)
    daily_stats: Dict[str, int] = {}
    for session in sessions:
        key = format_date_for_input(session.date)
        daily_stats[key] = daily_stats.get(key, 0) + session.duration

    recent = sorted(sessions, key=lambda s: s.date, reverse=True)[:RECENT_SESSIONS_LIMIT]

    return SessionSummary(
        total_duration=total_duration,
        total_sessions=total_sessions,
        average_duration=total_duration // total_sessions,
        subjects=list(subject_stats),
        subject_stats=sorted(subject_stats.values(), key=lambda s: s.duration, reverse=True),
        daily_stats=dict(sorted(daily_stats.items())),
        recent_sessions=recent,
    )


def monthly_breakdown(sessions: Iterable[StudySession], year: int) -> YearlyStats:
    """연도별 통계: 현지 달력 월 기준 12개월 집계"""
    months = {m: MonthStat(month=m, sessions=0, duration=0) for m in range(1, 13)}
    total_duration = 0
    total_sessions = 0
    for session in sessions:
        day = local_date_of(session.date)
        if day.year != year:
            continue
        stat = months[day.month]
        stat.sessions += 1
        stat.duration += session.duration
        total_duration += session.duration
        total_sessions += 1

    return YearlyStats(
        year=year,
        monthly_stats=list(months.values()),
        total_duration=total_duration,
        total_sessions=total_sessions,
    )


def total_minutes(sessions: Iterable[StudySession]) -> int:
    return sum(s.duration for s in sessions)
