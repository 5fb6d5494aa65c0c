import logging
from typing import List, Optional

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from social_backend.models.user import User
from social_backend.repositories.user_repository import UserRepository
from social_backend.schemas.user_schema import ProfileUpdateRequest
from social_backend.services.auth_service import hash_password, verify_password
from social_backend.services.storage_service import FileStorage
from social_backend.utils.exceptions import ConflictError, StorageError, UnauthorizedError

logger = logging.getLogger(__name__)

_DUPLICATE_MESSAGE = "이미 사용 중인 username 또는 이메일입니다."


class UserService:
    """
    사용자 프로필 서비스 클래스
    - 프로필 조회/수정, 비밀번호 변경, 탈퇴, 사용자 목록
    """
    def __init__(self, db: AsyncSession, storage: Optional[FileStorage] = None):
        """
        - db: 비동기 DB 세션
        - storage: 프로필 사진 저장소 (사진 업로드 시에만 필요)
        """
        self.db = db
        self.storage = storage
        self.user_repo = UserRepository(db)

    async def list_users(self) -> List[User]:
        return await self.user_repo.list_active()

    async def update_profile(
        self,
        user: User,
        data: ProfileUpdateRequest,
        photo: Optional[UploadFile] = None,
    ) -> User:
        """
        프로필 수정
        1) 값이 들어온 필드만 추림 (빈 값은 변경 없음)
        2) username/email 변경 시 다른 사용자와 중복 체크
        3) 새 사진이 있으면 먼저 저장
        4) 필드 적용 → 커밋 (실패 시 저장한 사진 정리)
        """
        changes = data.changes()

        username = changes.get("username")
        email = changes.get("email")
        if (username and username != user.username) or (email and email != user.email):
            if await self.user_repo.find_conflicting(username, email, exclude_user_id=user.id):
                raise ConflictError(_DUPLICATE_MESSAGE)

        saved: List[str] = []
        if photo is not None and FileStorage.is_present(photo):
            saved.append(await self.storage.save(photo))
            changes["photo_profile"] = saved[0]

        for field, value in changes.items():
            setattr(user, field, value)

        try:
            await self.user_repo.commit(conflict_message=_DUPLICATE_MESSAGE)
        except (ConflictError, StorageError):
            if saved:
                await self.storage.discard(saved)
            raise
        logger.info("프로필 수정 완료: user_id=%s fields=%s", user.id, sorted(changes))
        return user

    async def change_password(self, user: User, old_password: str, new_password: str) -> None:
        """
        비밀번호 변경
        - 현재 비밀번호가 틀리면 UnauthorizedError
        """
        if not verify_password(old_password, user.password):
            logger.warning("비밀번호 변경 실패 (현재 비밀번호 불일치): user_id=%s", user.id)
            raise UnauthorizedError("현재 비밀번호가 올바르지 않습니다.")
        user.password = hash_password(new_password)
        await self.user_repo.commit()
        logger.info("비밀번호 변경 완료: user_id=%s", user.id)

    async def deactivate(self, user: User) -> None:
        """
        회원 탈퇴 (soft delete)
        - 이후 로그인/토큰 인증/팔로우/채팅방 초대 대상에서 제외
        """
        user.soft_delete()
        await self.user_repo.commit()
        logger.info("회원 탈퇴 처리: user_id=%s", user.id)
