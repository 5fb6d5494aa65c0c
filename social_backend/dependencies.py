import logging

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from social_backend.core.config import Settings, get_settings
from social_backend.core.database import get_db_session
from social_backend.models.user import User
from social_backend.services.auth_service import AuthService
from social_backend.services.storage_service import FileStorage
from social_backend.utils.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

# 헤더가 없어도 예외를 던지지 않고 None 반환 (쿠키 확인을 위해)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

ACCESS_COOKIE_NAME = "jwt_token"


async def get_bearer_token(
    request: Request,
    header_token: str = Depends(oauth2_scheme),
) -> str:
    """
    요청에서 액세스 토큰 추출
    1) Authorization 헤더의 Bearer 토큰 우선 사용
    2) 헤더에 없으면 쿠키의 'jwt_token' 사용
    Raises:
        UnauthorizedError: 토큰이 어디에도 없을 때
    """
    token = header_token or request.cookies.get(ACCESS_COOKIE_NAME)
    if not token:
        raise UnauthorizedError("인증 토큰이 필요합니다.")
    return token


async def get_current_user(
    token: str = Depends(get_bearer_token),
    db_session: AsyncSession = Depends(get_db_session),
) -> User:
    """
    현재 요청의 사용자를 가져오는 종속성 함수
    - 토큰 검증/블랙리스트/탈퇴 여부는 AuthService.get_current_user에서 처리
    """
    return await AuthService.get_current_user(token, db_session)


def get_file_storage(settings: Settings = Depends(get_settings)) -> FileStorage:
    """
    첨부파일 저장소 의존성 주입 함수
    - settings.env의 UPLOAD_DIR 아래에 저장
    """
    return FileStorage(settings.UPLOAD_DIR)
