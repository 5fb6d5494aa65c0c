"""
피드 리액션(좋아요/싫어요) 토글 서비스

(피드, 사용자) 쌍의 상태는 없음 / 좋아요 / 싫어요 셋 중 하나이며
요청 종류에 따라 다음과 같이 전이한다.

    현재 상태   like 요청        dislike 요청
    없음        좋아요 (추가)    싫어요 (추가)
    좋아요      없음 (삭제)      싫어요 (종류 변경)
    싫어요      좋아요 (종류 변경) 없음 (삭제)

조회(행 잠금) → 추가/변경/삭제 → 커밋을 하나의 트랜잭션으로 처리하며,
동시 요청이 같은 쌍을 추가하면 유니크 제약 위반이 ConflictError로 변환된다.
"""

import logging
from typing import Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from social_backend.models.reaction import Reaction, ReactionType
from social_backend.models.user import User
from social_backend.repositories.feed_repository import FeedRepository
from social_backend.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def next_state(current: Optional[ReactionType], requested: ReactionType) -> Optional[ReactionType]:
    """
    토글 후 상태 계산 (같은 종류면 해제, 아니면 요청 종류)
    """
    if current == requested:
        return None
    return requested


class ReactionService:
    """
    리액션 토글 서비스 클래스
    """
    def __init__(self, db: AsyncSession):
        self.db = db
        self.feed_repo = FeedRepository(db)

    async def toggle(
        self,
        actor: User,
        feed_id: int,
        requested: ReactionType,
    ) -> Optional[ReactionType]:
        """
        리액션 토글
        1) 피드 확인 (없거나 삭제된 피드는 NotFoundError)
        2) 기존 리액션 행을 잠금과 함께 조회
        3) 상태 전이에 따라 추가/변경/삭제
        4) 커밋 후 결과 상태 반환 (None = 리액션 없음)
        """
        feed = await self.feed_repo.find_feed(feed_id)
        if not feed:
            raise NotFoundError(f"피드 ID {feed_id}를 찾을 수 없습니다.")

        existing = await self.feed_repo.find_reaction_for_update(feed.id, actor.id)
        current = ReactionType(existing.reaction) if existing else None
        result = next_state(current, requested)

        if result is None:
            await self.feed_repo.delete_reaction(existing)
        elif existing is None:
            self.feed_repo.add(Reaction(feed_id=feed.id, user_id=actor.id, reaction=result.value))
        else:
            existing.reaction = result.value

        await self.feed_repo.commit(conflict_message="동시에 처리된 리액션과 충돌했습니다. 다시 시도해 주세요.")
        logger.info(
            "리액션 토글: feed_id=%s user_id=%s %s → %s",
            feed.id, actor.id,
            current.value if current else None,
            result.value if result else None,
        )
        return result

    async def counts(self, feed_id: int) -> Dict[str, int]:
        return await self.feed_repo.count_by_kind(feed_id)
