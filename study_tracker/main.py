"""
FastAPI 서버 메인 파일
공부 기록을 Supabase에 저장하고 통계/학습 계획 API를 제공합니다.
"""

from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from study_tracker.config import get_logger, get_settings, setup_logging
from study_tracker.errors import (
    AdminAccessDenied,
    ExamNotFoundError,
    InvalidFieldError,
    NotFoundError,
)
from study_tracker.models.database import init_supabase
from study_tracker.routes import admin, dashboard, exams, study_sessions, users

setup_logging()
logger = get_logger(__name__)

app = FastAPI(title="Study Tracker API", version="1.0.0")

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 라우터 등록
app.include_router(study_sessions.router, prefix="/api", tags=["study-sessions"])
app.include_router(dashboard.router, prefix="/api", tags=["dashboard"])
app.include_router(exams.router, prefix="/api", tags=["exams"])
app.include_router(users.router, prefix="/api", tags=["users"])
app.include_router(admin.router, prefix="/api", tags=["admin"])


@app.exception_handler(InvalidFieldError)
async def invalid_field_handler(request: Request, exc: InvalidFieldError):
    """요청 검증 오류와 같은 형식으로 필드별 오류 반환"""
    return JSONResponse(
        status_code=422,
        content={"detail": [{"loc": [exc.location, exc.field], "msg": exc.message, "type": "value_error"}]},
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(AdminAccessDenied)
async def admin_denied_handler(request: Request, exc: AdminAccessDenied):
    return JSONResponse(status_code=403, content={"detail": str(exc)})


@app.exception_handler(ExamNotFoundError)
async def exam_not_found_handler(request: Request, exc: ExamNotFoundError):
    """저장된 시험 설정이 시험 마스터와 맞지 않는 경우"""
    logger.error("시험 설정 오류: %s", exc)
    return JSONResponse(status_code=500, content={"detail": str(exc), "code": exc.code})


@app.on_event("startup")
async def startup_event():
    """서버 시작 시 Supabase 초기화"""
    init_supabase()
    logger.info("서버가 시작되었습니다.")


@app.get("/")
async def root():
    """루트 엔드포인트"""
    return {"message": "Study Tracker API", "status": "running"}


@app.get("/health")
async def health_check():
    """헬스 체크"""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
