import os

# 설정 모듈이 import 되기 전에 테스트용 환경 변수를 지정
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from social_backend.core.database import Base, get_db_session, import_models
from social_backend.dependencies import get_file_storage
from social_backend.main import app
from social_backend.models.user import User
from social_backend.services.auth_service import hash_password
from social_backend.services.storage_service import FileStorage


@pytest.fixture
async def engine():
    """
    테스트마다 새로 만드는 SQLite 인메모리 엔진
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    import_models()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def storage(tmp_path):
    return FileStorage(str(tmp_path / "uploads"))


@pytest.fixture
def make_user(db):
    """
    DB에 직접 사용자를 만드는 팩토리 (서비스 레벨 테스트용)
    """
    async def _make(username: str, password: str = "password123") -> User:
        user = User(
            fullname=username.title(),
            username=username,
            email=f"{username}@example.com",
            password=hash_password(password),
        )
        db.add(user)
        await db.commit()
        return user

    return _make


@pytest.fixture
async def client(session_factory, storage):
    """
    DB 세션과 파일 저장소를 테스트용으로 교체한 API 클라이언트
    """
    async def override_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_file_storage] = lambda: storage
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def signup(client):
    """
    회원가입 + 로그인 후 (user_id, 인증 헤더) 반환
    """
    async def _signup(username: str, password: str = "password123"):
        resp = await client.post(
            "/api/auth/register",
            json={
                "fullname": username.title(),
                "username": username,
                "email": f"{username}@example.com",
                "password": password,
            },
        )
        assert resp.status_code == 201, resp.text
        login = await client.post(
            "/api/auth/login",
            json={"login": username, "password": password},
        )
        assert login.status_code == 200, login.text
        token = login.json()["access_token"]
        return resp.json()["id"], {"Authorization": f"Bearer {token}"}

    return _signup
