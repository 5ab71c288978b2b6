"""
도메인 예외 정의
main.py의 예외 핸들러가 각 예외를 HTTP 응답으로 변환합니다.
"""


class StudyTrackerError(Exception):
    """모든 도메인 예외의 기본 클래스"""


class InvalidFieldError(StudyTrackerError):
    """요청 필드 값이 유효하지 않음 (422)"""

    def __init__(self, field: str, message: str, location: str = "body"):
        super().__init__(message)
        self.field = field
        self.location = location
        self.message = message


class NotFoundError(StudyTrackerError):
    """대상 레코드가 없거나 호출자 소유가 아님 (404)"""


class AdminAccessDenied(StudyTrackerError):
    """관리자 허용 목록에 없는 사용자 (403)"""


class ExamNotFoundError(StudyTrackerError):
    """시험 마스터에 없는 시험 코드 (설정 오류)"""

    def __init__(self, code: str):
        super().__init__(f"유효하지 않은 시험 코드입니다: {code}")
        self.code = code
