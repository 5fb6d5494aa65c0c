from typing import Dict, List, Optional

from sqlalchemy import func, select

from social_backend.models.comment import Comment
from social_backend.models.feed import Feed
from social_backend.models.reaction import Reaction, ReactionType
from social_backend.repositories.base import BaseRepository


class FeedRepository(BaseRepository):
    """
    피드/댓글/리액션 데이터 액세스
    - 피드와 댓글은 soft delete 된 행을 제외하고 조회
    - 조회 결과는 populate_existing으로 세션에 이미 있는 객체도 최신 상태로 갱신
    """

    async def find_feed(self, feed_id: int) -> Optional[Feed]:
        """
        활성 피드를 작성자/첨부/댓글/리액션과 함께 반환
        """
        query = (
            select(Feed)
            .where(Feed.id == feed_id, Feed.deleted_at.is_(None))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalars().first()

    async def list_feeds(self) -> List[Feed]:
        """
        활성 피드 전체를 최신순으로 반환
        """
        query = (
            select(Feed)
            .where(Feed.deleted_at.is_(None))
            .order_by(Feed.created_at.desc(), Feed.id.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    def add(self, entity) -> None:
        self.session.add(entity)

    async def find_comment(self, comment_id: int) -> Optional[Comment]:
        """
        활성 댓글 반환 (소속 피드의 삭제 여부는 확인하지 않음)
        """
        query = (
            select(Comment)
            .where(Comment.id == comment_id, Comment.deleted_at.is_(None))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalars().first()

    async def find_reaction_for_update(self, feed_id: int, user_id: int) -> Optional[Reaction]:
        """
        (feed, user) 리액션 행을 잠금과 함께 조회
        - SELECT ... FOR UPDATE 미지원 DB(SQLite)에서는 잠금 없이 조회
        """
        query = (
            select(Reaction)
            .where(Reaction.feed_id == feed_id, Reaction.user_id == user_id)
            .with_for_update()
        )
        result = await self.session.execute(query)
        return result.scalars().first()

    async def delete_reaction(self, reaction: Reaction) -> None:
        await self.session.delete(reaction)

    async def count_by_kind(self, feed_id: int) -> Dict[str, int]:
        """
        피드의 리액션 종류별 개수 ({"like": n, "dislike": m})
        """
        query = (
            select(Reaction.reaction, func.count())
            .where(Reaction.feed_id == feed_id)
            .group_by(Reaction.reaction)
        )
        result = await self.session.execute(query)
        counts = {kind.value: 0 for kind in ReactionType}
        for kind, count in result.all():
            counts[kind] = count
        return counts
