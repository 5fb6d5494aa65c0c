import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base

from social_backend.core.config import settings

logger = logging.getLogger(__name__)


def build_database_urls() -> tuple[str, str]:
    """
    settings.DATABASE_URL로부터 비동기 및 동기 DB 연결 URL을 생성하여 반환
    """
    async_url = settings.SQLALCHEMY_DATABASE_URI
    # 동기용 스킴 변환 (alembic 등)
    sync_url = (
        async_url.replace("mysql+asyncmy://", "mysql+pymysql://", 1)
        if async_url.startswith("mysql+asyncmy://")
        else async_url
    )
    return async_url, sync_url


def _engine_options(url: str) -> dict:
    """
    MySQL 전용 연결 옵션은 MySQL URL일 때만 적용
    """
    if not url.startswith("mysql"):
        return {}
    return {
        "connect_args": {
            "charset": "utf8mb4",
            "init_command": "SET NAMES utf8mb4 COLLATE utf8mb4_unicode_ci",
        },
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    }


# DB URL 설정
DB_ASYNC_URL, DB_SYNC_URL = build_database_urls()

# 비동기 엔진 및 세션 팩토리 생성
async_engine = create_async_engine(
    DB_ASYNC_URL,
    echo=False,
    **_engine_options(DB_ASYNC_URL),
)
async_session_factory = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# ORM 베이스
Base = declarative_base()


def import_models() -> None:
    """
    모델 모듈을 import하여 Base.metadata에 테이블을 등록
    """
    from social_backend.models import (  # noqa: F401
        user, follow, feed, comment, reaction, chatroom, message
    )


async def init_db() -> None:
    """
    애플리케이션 시작 시 호출하여 메타데이터 기반 테이블을 생성
    """
    import_models()

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("DB 테이블 초기화 완료")


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI 종속성: 요청마다 새로운 DB 세션을 생성 후 반환
    """
    async with async_session_factory() as session:
        yield session
