import logging
import uuid
from datetime import datetime, timedelta, timezone

from passlib.context import CryptContext
from jose import jwt, JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from social_backend.core.config import settings
from social_backend.jwt.blocklist import jwt_blocklist
from social_backend.models.user import User
from social_backend.repositories.user_repository import UserRepository
from social_backend.schemas.auth_schema import RegisterRequest
from social_backend.utils.exceptions import ConflictError, UnauthorizedError

logger = logging.getLogger(__name__)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(raw_password: str) -> str:
    return pwd_context.hash(raw_password)


def verify_password(raw_password: str, hashed: str) -> bool:
    return pwd_context.verify(raw_password, hashed)


class AuthService:
    """
    인증 관련 서비스 클래스
    - 회원가입, 로그인, 로그아웃,
    - 토큰으로 현재 사용자 조회 기능 제공
    """
    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepository(db)

    async def register(self, data: RegisterRequest) -> User:
        """
        회원가입
        1) username/email 중복 체크
        2) 비밀번호 해시 후 User 생성
        3) 커밋 (동시 가입으로 인한 유니크 위반은 ConflictError)
        """
        if await self.user_repo.find_conflicting(data.username, data.email):
            raise ConflictError("이미 사용 중인 username 또는 이메일입니다.")

        user = User(
            fullname=data.fullname,
            username=data.username,
            email=data.email,
            password=hash_password(data.password),
            photo_profile=settings.DEFAULT_PHOTO_PROFILE,
        )
        await self.user_repo.create_user(user)
        await self.user_repo.commit(conflict_message="이미 사용 중인 username 또는 이메일입니다.")
        logger.info("회원가입 완료: user_id=%s username=%s", user.id, user.username)
        return user

    async def login(self, login: str, password: str) -> dict:
        """
        이메일 또는 username + 비밀번호 로그인
        """
        user = await self.user_repo.find_by_login(login)
        if not user or not verify_password(password, user.password):
            raise UnauthorizedError("로그인 정보 또는 비밀번호가 올바르지 않습니다.")

        now = datetime.now(timezone.utc)
        access_exp = now + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRES_MINUTES)
        payload = {
            "sub": str(user.id),
            "iat": now,
            "exp": access_exp,
            "jti": uuid.uuid4().hex,
            "type": "access",
        }
        access_token = jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
        logger.info("로그인 성공: user_id=%s", user.id)
        return {
            "access_token": access_token,
            "token_type": "bearer",
        }

    @staticmethod
    def logout(token: str) -> None:
        """
        로그아웃 + 토큰 블랙리스트 등록
        """
        try:
            decoded = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        except JWTError:
            raise UnauthorizedError("토큰 인증 실패")
        jti = decoded.get("jti")
        if jti:
            jwt_blocklist.add(jti)

    @staticmethod
    async def get_current_user(token: str, db: AsyncSession) -> User:
        """
        현재 로그인 사용자를 토큰으로 찾아 반환
        Raises:
            UnauthorizedError: 토큰 인증 실패, 블랙리스트 등록된 토큰,
                               또는 탈퇴/존재하지 않는 사용자일 때
        """
        try:
            payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        except JWTError:
            raise UnauthorizedError("토큰 인증 실패")

        sub = payload.get("sub")
        jti = payload.get("jti")
        if not sub or not jti or payload.get("type") != "access":
            raise UnauthorizedError("유효하지 않은 토큰입니다.")
        if jti in jwt_blocklist:
            raise UnauthorizedError("이 토큰은 로그아웃되었습니다.")
        try:
            user_id = int(sub)
        except ValueError:
            raise UnauthorizedError("유효하지 않은 토큰입니다.")

        user = await UserRepository(db).find_by_id(user_id)
        if not user:
            logger.warning("토큰의 사용자(%s)를 찾을 수 없음", user_id)
            raise UnauthorizedError("사용자를 찾을 수 없습니다.")
        return user
