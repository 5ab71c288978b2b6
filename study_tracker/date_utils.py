"""
고정 시간대(기본값: Asia/Tokyo) 기준 날짜 처리 유틸리티

모든 사용자의 날짜 경계를 동일하게 유지하기 위해, 날짜 입력/표시/기간 계산은
보는 사람의 로컬 시간대와 관계없이 설정된 하나의 시간대를 기준으로 합니다.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

from study_tracker.config import get_settings

Timestamp = Union[datetime, str]

# 어느 시간대의 자정이든 UTC로 변환 가능한 날짜 범위
MIN_INPUT_DATE = date.min + timedelta(days=1)
MAX_INPUT_DATE = date.max - timedelta(days=1)


@dataclass(frozen=True)
class DateWindow:
    """양 끝을 포함하는 기간 [start, end]"""
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


def get_timezone() -> ZoneInfo:
    """설정된 시간대 반환"""
    return ZoneInfo(get_settings().app_timezone)


def parse_timestamp(value: Timestamp) -> datetime:
    """datetime 또는 ISO 형식 문자열을 aware datetime으로 변환

    시간대 정보가 없는 값은 UTC로 간주합니다.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_date_string(date_string: str) -> date:
    """YYYY-MM-DD 형식 문자열을 date로 변환"""
    return date.fromisoformat(date_string.strip())


def check_input_date(day: date) -> date:
    """입력 날짜가 저장 가능한 범위인지 확인 (범위 밖이면 ValueError)"""
    if not MIN_INPUT_DATE <= day <= MAX_INPUT_DATE:
        raise ValueError(
            f"날짜는 {MIN_INPUT_DATE.isoformat()} ~ {MAX_INPUT_DATE.isoformat()} 범위로 입력해주세요."
        )
    return day


def local_midnight(day: date, tz: Optional[ZoneInfo] = None) -> datetime:
    """해당 날짜의 현지 자정(aware datetime)"""
    return datetime.combine(day, time.min, tzinfo=tz or get_timezone())


def convert_local_date_to_utc(date_string: str, tz: Optional[ZoneInfo] = None) -> datetime:
    """날짜 입력값을 설정 시간대의 자정으로 해석하여 UTC 시각으로 변환"""
    day = check_input_date(parse_date_string(date_string))
    return local_midnight(day, tz).astimezone(timezone.utc)


def to_local(value: Timestamp, tz: Optional[ZoneInfo] = None) -> datetime:
    return parse_timestamp(value).astimezone(tz or get_timezone())


def local_date_of(value: Timestamp, tz: Optional[ZoneInfo] = None) -> date:
    """시각이 설정 시간대에서 속하는 날짜"""
    return to_local(value, tz).date()


def format_date_for_input(value: Timestamp, tz: Optional[ZoneInfo] = None) -> str:
    """UTC 시각을 설정 시간대 기준 YYYY-MM-DD 문자열로 변환 (날짜 입력 폼용)"""
    return local_date_of(value, tz).isoformat()


def format_date(value: Timestamp, tz: Optional[ZoneInfo] = None) -> str:
    """표시용 날짜 (YYYY/MM/DD)"""
    return to_local(value, tz).strftime("%Y/%m/%d")


def format_datetime(value: Timestamp, tz: Optional[ZoneInfo] = None) -> str:
    """표시용 날짜와 시각 (YYYY/MM/DD HH:MM)"""
    return to_local(value, tz).strftime("%Y/%m/%d %H:%M")


def now_local(tz: Optional[ZoneInfo] = None) -> datetime:
    """설정 시간대 기준 현재 시각"""
    return datetime.now(tz or get_timezone())


def month_window(year: int, month: int, tz: Optional[ZoneInfo] = None) -> DateWindow:
    """월간 기간: 1일 00:00:00 ~ 말일 23:59:59 (현지 시간)"""
    tz = tz or get_timezone()
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1, tzinfo=tz)
    end = datetime(year, month, last_day, 23, 59, 59, tzinfo=tz)
    return DateWindow(start, end)


def year_window(year: int, tz: Optional[ZoneInfo] = None) -> DateWindow:
    """연간 기간: 1월 1일 00:00:00 ~ 12월 31일 23:59:59 (현지 시간)"""
    tz = tz or get_timezone()
    return DateWindow(
        datetime(year, 1, 1, tzinfo=tz),
        datetime(year, 12, 31, 23, 59, 59, tzinfo=tz),
    )


def week_window(now: datetime, tz: Optional[ZoneInfo] = None) -> DateWindow:
    """주간 기간: 일요일 00:00 ~ 토요일 23:59:59.999999 (현지 시간)"""
    tz = tz or get_timezone()
    today = now.astimezone(tz).date()
    # weekday(): 월=0 ... 일=6, 일요일을 주의 시작으로 함
    start_day = today - timedelta(days=(today.weekday() + 1) % 7)
    start = local_midnight(start_day, tz)
    end = datetime.combine(start_day + timedelta(days=6), time.max, tzinfo=tz)
    return DateWindow(start, end)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def is_weekend(day: date) -> bool:
    """토요일/일요일 여부"""
    return day.weekday() >= 5


def to_utc_iso(value: datetime) -> str:
    """DB 저장용 UTC ISO 문자열"""
    return parse_timestamp(value).astimezone(timezone.utc).isoformat()
