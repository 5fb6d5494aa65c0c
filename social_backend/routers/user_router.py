from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from social_backend.core.database import get_db_session
from social_backend.dependencies import get_current_user, get_file_storage
from social_backend.models.user import User
from social_backend.routers.serializers import to_user_response
from social_backend.schemas.auth_schema import MessageResponse
from social_backend.schemas.user_schema import PasswordChangeRequest, ProfileUpdateRequest, UserResponse
from social_backend.services.storage_service import FileStorage
from social_backend.services.user_service import UserService
from social_backend.utils.exceptions import BadRequestError

router = APIRouter(tags=["User"])


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error.get("loc", ()))
    return f"{field}: {error.get('msg')}" if field else error.get("msg", "잘못된 입력입니다.")


@router.get("/profile", response_model=UserResponse, summary="내 프로필 조회")
async def get_profile(current_user: User = Depends(get_current_user)) -> UserResponse:
    return to_user_response(current_user)


@router.put("/profile", response_model=UserResponse, summary="내 프로필 수정")
async def update_profile(
    fullname: Optional[str] = Form(None),
    username: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    gender: Optional[str] = Form(None),
    birth_date: Optional[str] = Form(None, description="YYYY-MM-DD"),
    photo_profile: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    storage: FileStorage = Depends(get_file_storage),
) -> UserResponse:
    """
    multipart 폼으로 프로필 수정
    - 빈 필드는 변경하지 않음
    - photo_profile 파일이 있으면 프로필 사진 교체
    """
    try:
        data = ProfileUpdateRequest(
            fullname=fullname,
            username=username,
            email=email,
            gender=gender,
            birth_date=birth_date,
        )
    except ValidationError as e:
        raise BadRequestError(_first_error(e))

    user = await UserService(db, storage).update_profile(current_user, data, photo_profile)
    return to_user_response(user)


@router.put("/profile/password", response_model=MessageResponse, summary="비밀번호 변경")
async def change_password(
    req: PasswordChangeRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await UserService(db).change_password(current_user, req.old_password, req.new_password)
    return MessageResponse(message="비밀번호가 변경되었습니다.")


@router.delete("/profile", response_model=MessageResponse, summary="회원 탈퇴")
async def deactivate_account(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """
    계정을 비활성화(soft delete)
    - 이후 같은 토큰으로는 인증되지 않음
    """
    await UserService(db).deactivate(current_user)
    return MessageResponse(message="탈퇴 처리되었습니다.")


@router.get("/users", response_model=List[UserResponse], summary="전체 사용자 목록")
async def list_users(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[UserResponse]:
    users = await UserService(db).list_users()
    return [to_user_response(user) for user in users]
