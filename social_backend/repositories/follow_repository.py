from typing import List

from sqlalchemy import delete, select

from social_backend.models.follow import Follow
from social_backend.models.user import User
from social_backend.repositories.base import BaseRepository


class FollowRepository(BaseRepository):
    """
    팔로우 간선(Follow) 데이터 액세스
    """

    async def exists(self, follower_id: int, following_id: int) -> bool:
        """
        follower → following 간선 존재 여부
        """
        query = select(Follow).where(
            Follow.follower_id == follower_id,
            Follow.following_id == following_id,
        )
        result = await self.session.execute(query)
        return result.scalars().first() is not None

    def add(self, follower_id: int, following_id: int) -> Follow:
        follow = Follow(follower_id=follower_id, following_id=following_id)
        self.session.add(follow)
        return follow

    async def remove(self, follower_id: int, following_id: int) -> int:
        """
        간선 삭제 후 삭제된 행 수 반환 (없으면 0)
        """
        result = await self.session.execute(
            delete(Follow).where(
                Follow.follower_id == follower_id,
                Follow.following_id == following_id,
            )
        )
        return result.rowcount

    async def list_followers(self, user_id: int) -> List[User]:
        """
        user_id를 팔로우하는 활성 사용자 목록
        """
        query = (
            select(User)
            .join(Follow, Follow.follower_id == User.id)
            .where(Follow.following_id == user_id, User.deleted_at.is_(None))
            .order_by(Follow.created_at.desc(), User.id.desc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_following(self, user_id: int) -> List[User]:
        """
        user_id가 팔로우하는 활성 사용자 목록
        """
        query = (
            select(User)
            .join(Follow, Follow.following_id == User.id)
            .where(Follow.follower_id == user_id, User.deleted_at.is_(None))
            .order_by(Follow.created_at.desc(), User.id.desc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
