import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from social_backend.models.user import User
from social_backend.repositories.follow_repository import FollowRepository
from social_backend.repositories.user_repository import UserRepository
from social_backend.utils.exceptions import BadRequestError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class FollowService:
    """
    팔로우 관계 서비스 클래스
    - 팔로우/언팔로우, 팔로워/팔로잉 목록
    """
    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepository(db)
        self.follow_repo = FollowRepository(db)

    async def _resolve_target(self, actor: User, user_id: int) -> User:
        """
        팔로우 대상 사용자 조회
        - 자기 자신은 BadRequestError, 없거나 탈퇴한 사용자는 NotFoundError
        """
        if user_id == actor.id:
            raise BadRequestError("자기 자신은 팔로우할 수 없습니다.")
        target = await self.user_repo.find_by_id(user_id)
        if not target:
            raise NotFoundError(f"사용자 ID {user_id}를 찾을 수 없습니다.")
        return target

    async def follow(self, actor: User, user_id: int) -> User:
        """
        팔로우
        1) 대상 사용자 확인
        2) 이미 팔로우 중이면 ConflictError
        3) 간선 추가 → 커밋 (동시 요청으로 인한 PK 충돌도 ConflictError)
        """
        target = await self._resolve_target(actor, user_id)
        if await self.follow_repo.exists(actor.id, target.id):
            raise ConflictError("이미 팔로우 중인 사용자입니다.")

        self.follow_repo.add(actor.id, target.id)
        await self.follow_repo.commit(conflict_message="이미 팔로우 중인 사용자입니다.")
        logger.info("팔로우: %s → %s", actor.id, target.id)
        return target

    async def unfollow(self, actor: User, user_id: int) -> User:
        """
        언팔로우
        - 팔로우 관계가 없어도 성공으로 처리 (멱등)
        """
        target = await self._resolve_target(actor, user_id)
        removed = await self.follow_repo.remove(actor.id, target.id)
        await self.follow_repo.commit()
        if removed:
            logger.info("언팔로우: %s → %s", actor.id, target.id)
        else:
            logger.debug("언팔로우 대상 관계 없음: %s → %s", actor.id, target.id)
        return target

    async def list_followers(self, user: User) -> List[User]:
        return await self.follow_repo.list_followers(user.id)

    async def list_following(self, user: User) -> List[User]:
        return await self.follow_repo.list_following(user.id)
