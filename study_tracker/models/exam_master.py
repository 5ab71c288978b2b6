"""
IPA 정보처리 시험 마스터 데이터
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ExamLevel(str, Enum):
    """시험 레벨"""
    BASIC = "basic"
    ADVANCED = "advanced"
    EXPERT = "expert"


class ExamDefinition(BaseModel):
    """시험 정보 (불변)"""
    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    short_name: str
    level: ExamLevel
    min_hours: int
    max_hours: int
    recommended_hours: int
    description: str
    exam_times: str  # 연 2회, 연 1회 등


IPA_EXAMS: List[ExamDefinition] = [
    ExamDefinition(
        code="IP",
        name="ITパスポート試験",
        short_name="ITパスポート",
        level=ExamLevel.BASIC,
        min_hours=100,
        max_hours=150,
        recommended_hours=120,
        description="ITの基礎知識を問う国家試験",
        exam_times="年間を通じて実施",
    ),
    ExamDefinition(
        code="FE",
        name="基本情報技術者試験",
        short_name="基本情報",
        level=ExamLevel.BASIC,
        min_hours=200,
        max_hours=300,
        recommended_hours=250,
        description="ITエンジニアの登竜門",
        exam_times="年2回（春期・秋期）",
    ),
    ExamDefinition(
        code="AP",
        name="応用情報技術者試験",
        short_name="応用情報",
        level=ExamLevel.ADVANCED,
        min_hours=300,
        max_hours=500,
        recommended_hours=400,
        description="ワンランク上のITエンジニアを目指す",
        exam_times="年2回（春期・秋期）",
    ),
    ExamDefinition(
        code="SC",
        name="情報処理安全確保支援士試験",
        short_name="情報処理安全確保支援士",
        level=ExamLevel.EXPERT,
        min_hours=500,
        max_hours=700,
        recommended_hours=600,
        description="サイバーセキュリティ分野の国家資格",
        exam_times="年2回（春期・秋期）",
    ),
    ExamDefinition(
        code="SA",
        name="システムアーキテクト試験",
        short_name="システムアーキテクト",
        level=ExamLevel.EXPERT,
        min_hours=600,
        max_hours=800,
        recommended_hours=700,
        description="システム設計・アーキテクチャの専門家",
        exam_times="年1回（秋期）",
    ),
    ExamDefinition(
        code="PM",
        name="プロジェクトマネージャ試験",
        short_name="プロジェクトマネージャ",
        level=ExamLevel.EXPERT,
        min_hours=500,
        max_hours=700,
        recommended_hours=600,
        description="プロジェクト管理の専門家",
        exam_times="年1回（春期）",
    ),
    ExamDefinition(
        code="DB",
        name="データベーススペシャリスト試験",
        short_name="データベーススペシャリスト",
        level=ExamLevel.EXPERT,
        min_hours=500,
        max_hours=700,
        recommended_hours=600,
        description="データベース分野の専門家",
        exam_times="年1回（春期）",
    ),
    ExamDefinition(
        code="NW",
        name="ネットワークスペシャリスト試験",
        short_name="ネットワークスペシャリスト",
        level=ExamLevel.EXPERT,
        min_hours=500,
        max_hours=700,
        recommended_hours=600,
        description="ネットワーク分野の専門家",
        exam_times="年1回（秋期）",
    ),
]

_LEVEL_LABELS = {
    ExamLevel.BASIC: "基本レベル",
    ExamLevel.ADVANCED: "応用レベル",
    ExamLevel.EXPERT: "高度レベル",
}


def get_exam_by_code(code: Optional[str]) -> Optional[ExamDefinition]:
    """시험 코드로 시험 정보 조회 (없으면 None)"""
    if not code:
        return None
    for exam in IPA_EXAMS:
        if exam.code == code:
            return exam
    return None


def get_exams_by_level(level: ExamLevel) -> List[ExamDefinition]:
    return [exam for exam in IPA_EXAMS if exam.level == level]


def get_level_label(level: ExamLevel) -> str:
    return _LEVEL_LABELS.get(level, "")
