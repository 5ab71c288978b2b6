"""
환경 설정 및 로깅 모듈
.env 파일과 환경 변수를 읽어 애플리케이션 설정을 구성합니다.
"""

import logging
import sys
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode

# .env 파일 검색 위치 (뒤쪽 파일의 값이 우선)
_current_file = Path(__file__).resolve()
ENV_FILES = (
    Path.cwd() / ".env",                    # 현재 작업 디렉토리
    _current_file.parent / ".env",          # study_tracker/.env
    _current_file.parent.parent / ".env",  # 프로젝트 루트
)

DEFAULT_TIMEZONE = "Asia/Tokyo"
DEFAULT_MONTHLY_TARGET_MINUTES = 3000


def parse_csv(raw: Any) -> Tuple[str, ...]:
    """쉼표로 구분된 문자열(또는 목록)을 공백 제거된 튜플로 변환합니다."""
    if not raw:
        return ()
    items = raw.split(",") if isinstance(raw, str) else raw
    return tuple(item.strip() for item in items if item and item.strip())


class Settings(BaseSettings):
    """애플리케이션 설정 (환경 변수 / .env)"""

    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""

    # 관리자 이메일 허용 목록 (ADMIN_EMAILS, 쉼표 구분)
    admin_emails: Annotated[Tuple[str, ...], NoDecode] = ()

    # 날짜 경계 기준 시간대 (APP_TIMEZONE)
    app_timezone: str = DEFAULT_TIMEZONE
    # 시험 목표가 없을 때의 월간 목표 (분)
    monthly_target_minutes: int = Field(default=DEFAULT_MONTHLY_TARGET_MINUTES, ge=0)

    log_level: str = "INFO"
    cors_origins: Annotated[Tuple[str, ...], NoDecode] = ("*",)

    model_config = {
        "env_file": tuple(str(path) for path in ENV_FILES),
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "frozen": True,
    }

    @field_validator("admin_emails", "cors_origins", mode="before")
    @classmethod
    def split_comma_separated(cls, value: Any) -> Tuple[str, ...]:
        return parse_csv(value)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """캐시된 설정 인스턴스를 반환합니다."""
    return Settings()


# 로깅 설정
_LOG_FORMAT = "%(asctime)s | %(name)-36s | %(levelname)-7s | %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None) -> None:
    """루트 로거 설정

    Args:
        level: 로그 레벨 (None이면 Settings.log_level 사용)
    """
    effective_level = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.INFO),
        format=_LOG_FORMAT,
        datefmt=_LOG_DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # 외부 라이브러리 로그는 경고 이상만 출력
    for noisy in ("httpx", "httpcore", "hpack", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """study_tracker 네임스페이스 로거 반환"""
    if name.startswith("study_tracker"):
        return logging.getLogger(name)
    return logging.getLogger(f"study_tracker.{name}")
