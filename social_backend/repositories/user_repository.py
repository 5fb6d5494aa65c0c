from typing import List, Optional, Sequence

from sqlalchemy import or_, select

from social_backend.models.user import User
from social_backend.repositories.base import BaseRepository


class UserRepository(BaseRepository):
    """
    사용자 관련 데이터 액세스 담당 Repository 클래스
    - soft delete 된 사용자는 모든 조회에서 제외
    """

    @staticmethod
    def _active():
        return select(User).where(User.deleted_at.is_(None))

    async def find_by_id(self, user_id: int) -> Optional[User]:
        """
        주어진 ID의 활성 User 반환
        """
        result = await self.session.execute(self._active().where(User.id == user_id))
        return result.scalars().first()

    async def find_by_login(self, login: str) -> Optional[User]:
        """
        이메일 또는 username이 일치하는 활성 User 반환
        """
        query = self._active().where(or_(User.email == login, User.username == login))
        result = await self.session.execute(query)
        return result.scalars().first()

    async def find_conflicting(
            self,
            username: Optional[str],
            email: Optional[str],
            exclude_user_id: Optional[int] = None,
    ) -> Optional[User]:
        """
        username 또는 email을 이미 사용 중인 User 반환
        - 탈퇴(soft delete)한 사용자도 유니크 키를 점유하므로 포함
        """
        conditions = []
        if username:
            conditions.append(User.username == username)
        if email:
            conditions.append(User.email == email)
        if not conditions:
            return None
        query = select(User).where(or_(*conditions))
        if exclude_user_id is not None:
            query = query.where(User.id != exclude_user_id)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def find_existing_ids(self, user_ids: Sequence[int]) -> set[int]:
        """
        주어진 ID 중 활성 사용자로 존재하는 ID 집합 반환
        """
        if not user_ids:
            return set()
        query = select(User.id).where(User.id.in_(set(user_ids)), User.deleted_at.is_(None))
        result = await self.session.execute(query)
        return set(result.scalars().all())

    async def list_active(self) -> List[User]:
        """
        활성 사용자 전체를 ID 순으로 반환
        """
        result = await self.session.execute(self._active().order_by(User.id))
        return list(result.scalars().all())

    async def create_user(self, user: User) -> None:
        """
        새 User 엔티티를 세션에 추가
        """
        self.session.add(user)
