"""
통계 및 학습 계획 응답 모델
"""

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from study_tracker.models.exam_master import ExamDefinition
from study_tracker.models.study_session import StudySession


class SubjectStat(BaseModel):
    """과목별 통계"""
    subject: str
    sessions: int
    duration: int


class SessionSummary(BaseModel):
    """세션 집계 결과"""
    total_duration: int = 0
    total_sessions: int = 0
    average_duration: int = 0
    subjects: List[str] = Field(default_factory=list)
    subject_stats: List[SubjectStat] = Field(default_factory=list)
    daily_stats: Dict[str, int] = Field(default_factory=dict)
    recent_sessions: List[StudySession] = Field(default_factory=list)


class MonthStat(BaseModel):
    month: int
    sessions: int
    duration: int


class YearlyStats(BaseModel):
    year: int
    monthly_stats: List[MonthStat]
    total_duration: int
    total_sessions: int


class StudyPlan(BaseModel):
    """시험일까지의 학습 계획"""
    exam_info: ExamDefinition
    exam_date: datetime
    is_exam_passed: Literal[False] = False
    days_until_exam: int
    weeks: int
    remaining_days: int
    total_weekdays: int
    total_weekends: int
    weekday_study_hours: float
    weekend_study_hours: float
    total_available_hours: float
    weekly_average_hours: float
    completed_hours: float
    remaining_hours: float
    progress_percentage: float
    is_on_track: bool


class ExamPassed(BaseModel):
    """시험일이 이미 지난 경우"""
    exam_info: ExamDefinition
    exam_date: datetime
    is_exam_passed: Literal[True] = True
    days_until_exam: int = 0
    message: str = "시험일이 지났습니다."


class WeeklyGoal(BaseModel):
    """이번 주 목표 대비 진행률"""
    this_week_hours: float
    weekly_target_hours: float
    weekly_progress_percentage: int


class MonthlyProgress(BaseModel):
    """시험 목표가 없을 때의 월간 목표 진행률"""
    type: Literal["monthly"] = "monthly"
    has_exam_settings: Literal[False] = False
    this_month_duration: int
    monthly_target_minutes: int
    progress_percentage: int
    days_in_month: int
    current_day: int


class ExamProgress(BaseModel):
    """시험 목표 대비 진행률"""
    type: Literal["exam"] = "exam"
    has_exam_settings: Literal[True] = True
    exam_info: ExamDefinition
    exam_date: datetime
    days_until_exam: int
    is_exam_passed: bool
    total_studied_hours: float
    target_hours: int
    progress_percentage: int
    remaining_hours: float
    this_week_hours: float
    weekly_target_hours: float
    weekly_progress_percentage: int
    weekday_study_hours: Optional[float] = None
    weekend_study_hours: Optional[float] = None
