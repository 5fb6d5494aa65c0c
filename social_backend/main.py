import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Type

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from fastapi.staticfiles import StaticFiles

from social_backend.core.config import settings
from social_backend.core.database import init_db
from social_backend.routers.auth_router import router as auth_router
from social_backend.routers.chat_router import router as chat_router
from social_backend.routers.feed_router import router as feed_router
from social_backend.routers.follow_router import router as follow_router
from social_backend.routers.user_router import router as user_router
from social_backend.utils.exceptions import (
    ApiError, BadRequestError, ConflictError, ForbiddenError,
    NotFoundError, StorageError, UnauthorizedError,
)

# ─── 로그 설정 ─────────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

# SQL 로그는 경고 이상만
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
# passlib이 bcrypt 버전 정보를 읽지 못할 때 남기는 경고 억제
logging.getLogger("passlib").setLevel(logging.ERROR)


# ─── 애플리케이션 수명 주기 이벤트 핸들러 정의 ─────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    앱 시작 시 DB 초기화 및 업로드 디렉토리 생성
    """
    # DB 테이블 자동 생성
    await init_db()

    # 첨부파일 저장 경로
    Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
    logger.info("서버 시작: upload_dir=%s", settings.UPLOAD_DIR)

    yield


# ─── FastAPI 애플리케이션 인스턴스 생성 ─────────────────────────────────────
app = FastAPI(
    title="Social Backend API",
    description="사용자/팔로우/피드/댓글/리액션/채팅 기능을 제공하는 소셜 네트워크 백엔드",
    version="1.0.0",
    lifespan=lifespan,
)

# ─── CORS 설정 ─────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ─── 예외 클래스 → Status Code 매핑 ───────────────────────────────────────
EXCEPTION_STATUS_MAP: dict[Type[Exception], int] = {
    BadRequestError: 400,
    UnauthorizedError: 401,
    ForbiddenError: 403,
    NotFoundError: 404,
    ConflictError: 409,
    StorageError: 500,
}


def status_for(exc: Exception) -> int:
    """
    예외 타입(상위 클래스 포함)에 매핑된 상태 코드, 없으면 500
    """
    for klass in type(exc).__mro__:
        if klass in EXCEPTION_STATUS_MAP:
            return EXCEPTION_STATUS_MAP[klass]
    return 500


@app.get("/health")
async def health_check() -> dict:
    """
    서비스 상태 확인용 엔드포인트
    """
    return {"status": "ok"}


@app.middleware("http")
async def ensure_utf8(request: Request, call_next):
    """
    모든 JSON 응답에 UTF-8 charset을 명시적으로 추가
    """
    resp = await call_next(request)
    ctype = resp.headers.get("Content-Type", "")
    if ctype.startswith("application/json") and "charset" not in ctype.lower():
        resp.headers["Content-Type"] = "application/json; charset=utf-8"
    return resp


# ─── 예외 처리 핸들러 등록───────────────────────────────────────────────────
@app.exception_handler(ApiError)
async def handle_api_error(request: Request, exc: ApiError):
    """
    커스텀 ApiError를 일괄 처리
    EXCEPTION_STATUS_MAP에 매핑된 상태 코드로 {"detail": 메시지} 반환
    """
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s %s 처리 실패: %s", request.method, request.url.path, exc.message)
    return ORJSONResponse(status_code=status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    """
    요청 형식 검증 실패는 400으로 통일
    """
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "잘못된 요청입니다.")
    return ORJSONResponse(
        status_code=400,
        content={"detail": f"{field}: {message}" if field else message},
    )


# ─── 라우터 등록 ───────────────────────────────────────────────────────
app.include_router(auth_router,   prefix="/api")
app.include_router(user_router,   prefix="/api")
app.include_router(follow_router, prefix="/api")
app.include_router(feed_router,   prefix="/api")
app.include_router(chat_router,   prefix="/api")

# ─── 정적 파일 (/public) ───────────────────────────────────────────────
app.mount("/public", StaticFiles(directory=settings.PUBLIC_DIR, check_dir=False), name="public")

if __name__ == "__main__":
    uvicorn.run(
        "social_backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
