"""
애플리케이션 진입점
백엔드 서버를 실행합니다.

사용법:
    python app.py
    또는
    uvicorn study_tracker.main:app --reload
"""

import os

if __name__ == "__main__":
    import uvicorn
    from study_tracker.main import app

    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8000")))
