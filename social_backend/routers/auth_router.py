import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from social_backend.core.config import settings
from social_backend.core.database import get_db_session
from social_backend.dependencies import ACCESS_COOKIE_NAME, get_bearer_token, get_current_user
from social_backend.models.user import User
from social_backend.routers.serializers import to_user_response
from social_backend.schemas.auth_schema import LoginRequest, MessageResponse, RegisterRequest, TokenResponse
from social_backend.schemas.user_schema import UserResponse
from social_backend.services.auth_service import AuthService

# 로거 설정
logger = logging.getLogger(__name__)


# 쿠키 설정용 데이터 클래스
class CookieConfig:
    ACCESS_NAME = ACCESS_COOKIE_NAME
    PATH = "/"
    SAMESITE = "none"
    SECURE = True
    HTTPONLY = True
    ACCESS_MAX_AGE = 60 * settings.JWT_ACCESS_TOKEN_EXPIRES_MINUTES

    @classmethod
    def set_access_cookie(cls, response: Response, access: str) -> None:
        """
        응답에 액세스 토큰 쿠키를 설정
        """
        response.set_cookie(
            key=cls.ACCESS_NAME,
            value=access,
            httponly=cls.HTTPONLY,
            secure=cls.SECURE,
            samesite=cls.SAMESITE,
            max_age=cls.ACCESS_MAX_AGE,
            path=cls.PATH,
        )

    @classmethod
    def clear(cls, response: Response) -> None:
        response.delete_cookie(cls.ACCESS_NAME, path=cls.PATH)


# 라우터 인스턴스
router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """
    회원가입
    - username/email 중복 시 409
    """
    user = await AuthService(db).register(req)
    return to_user_response(user)


@router.post("/login", response_model=TokenResponse)
async def login(
    req: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    """
    이메일 또는 username으로 로그인 후 토큰 발급 (쿠키에도 설정)
    """
    tokens = await AuthService(db).login(req.login, req.password)
    CookieConfig.set_access_cookie(response, tokens["access_token"])
    return TokenResponse(message="로그인 성공", **tokens)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    token: str = Depends(get_bearer_token),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """
    토큰 블랙리스트 등록 및 쿠키 삭제로 로그아웃 처리를 수행
    """
    AuthService.logout(token)
    CookieConfig.clear(response)
    logger.info("로그아웃: user_id=%s", current_user.id)
    return MessageResponse(message="로그아웃 성공")
