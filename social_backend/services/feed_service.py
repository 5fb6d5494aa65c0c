import logging
from typing import List, Optional, Sequence

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from social_backend.models.comment import Comment
from social_backend.models.feed import Feed, FeedAttachment
from social_backend.models.mixins import utcnow
from social_backend.models.user import User
from social_backend.repositories.feed_repository import FeedRepository
from social_backend.services.permissions import ensure_comment_author, ensure_feed_owner
from social_backend.services.storage_service import FileStorage
from social_backend.utils.exceptions import BadRequestError, NotFoundError, StorageError

logger = logging.getLogger(__name__)


def _clean(text: Optional[str]) -> str:
    return (text or "").strip()


class FeedService:
    """
    피드/댓글 서비스 클래스
    - 피드 목록, 작성/수정/삭제 (다중 첨부파일)
    - 댓글 작성/수정/삭제 (첨부파일 최대 1개)
    """
    def __init__(self, db: AsyncSession, storage: Optional[FileStorage] = None):
        """
        - db: 비동기 DB 세션
        - storage: 첨부파일 저장소
        """
        self.db = db
        self.storage = storage
        self.feed_repo = FeedRepository(db)

    # ─── 내부 헬퍼 ──────────────────────────────────────────────────────

    async def _get_feed(self, feed_id: int) -> Feed:
        feed = await self.feed_repo.find_feed(feed_id)
        if not feed:
            raise NotFoundError(f"피드 ID {feed_id}를 찾을 수 없습니다.")
        return feed

    async def _get_comment(self, comment_id: int) -> Comment:
        comment = await self.feed_repo.find_comment(comment_id)
        if not comment:
            raise NotFoundError(f"댓글 ID {comment_id}를 찾을 수 없습니다.")
        return comment

    async def _discard(self, refs: Sequence[str]) -> None:
        if refs and self.storage:
            await self.storage.discard(refs)

    async def _commit_or_discard(self, saved: Sequence[str]) -> None:
        """
        커밋 실패 시 이번 요청에서 저장한 파일을 정리하고 예외를 다시 발생
        """
        try:
            await self.feed_repo.commit()
        except StorageError:
            await self._discard(saved)
            raise

    # ─── 피드 ───────────────────────────────────────────────────────────

    async def list_feeds(self) -> List[Feed]:
        return await self.feed_repo.list_feeds()

    async def create_feed(
        self,
        actor: User,
        content: Optional[str],
        files: Sequence[UploadFile] = (),
    ) -> Feed:
        """
        피드 작성
        1) 본문 검증 (비어 있으면 BadRequestError)
        2) 첨부파일 저장 (순서 유지)
        3) Feed + FeedAttachment 생성 → 커밋 (실패 시 파일 정리)
        """
        content = _clean(content)
        if not content:
            raise BadRequestError("피드 내용을 입력해 주세요.")

        saved = await self.storage.save_many(files) if files else []
        feed = Feed(
            user_id=actor.id,
            content=content,
            attachments=[
                FeedAttachment(position=i, path=ref) for i, ref in enumerate(saved)
            ],
        )
        self.feed_repo.add(feed)
        await self._commit_or_discard(saved)
        logger.info("피드 작성: feed_id=%s user_id=%s files=%d", feed.id, actor.id, len(saved))
        return await self._get_feed(feed.id)

    async def update_feed(
        self,
        actor: User,
        feed_id: int,
        content: Optional[str],
        files: Sequence[UploadFile] = (),
    ) -> Feed:
        """
        피드 수정
        1) 피드 조회 (없으면 NotFoundError) → 작성자 확인 (아니면 ForbiddenError)
        2) 본문이 들어왔으면 변경, 비어 있으면 유지
        3) 새 첨부파일이 있으면 기존 목록을 통째로 교체, 없으면 유지
        4) 커밋 후 교체된 기존 파일 정리
        """
        feed = await self._get_feed(feed_id)
        ensure_feed_owner(feed, actor, "수정")

        content = _clean(content)
        if content:
            feed.content = content

        uploads = [f for f in files if FileStorage.is_present(f)]
        saved = await self.storage.save_many(uploads) if uploads else []
        replaced: List[str] = []
        if saved:
            replaced = [attachment.path for attachment in feed.attachments]
            # (feed_id, position) 유니크 제약 때문에 기존 행 삭제를 먼저 반영
            feed.attachments.clear()
            try:
                await self.feed_repo.flush()
            except StorageError:
                await self._discard(saved)
                raise
            feed.attachments.extend(
                FeedAttachment(position=i, path=ref) for i, ref in enumerate(saved)
            )
        feed.updated_at = utcnow()

        await self._commit_or_discard(saved)
        await self._discard(replaced)
        logger.info("피드 수정: feed_id=%s user_id=%s", feed.id, actor.id)
        return await self._get_feed(feed.id)

    async def delete_feed(self, actor: User, feed_id: int) -> None:
        """
        피드 삭제 (soft delete)
        - 댓글/리액션은 연쇄 삭제하지 않음
        """
        feed = await self._get_feed(feed_id)
        ensure_feed_owner(feed, actor, "삭제")
        feed.soft_delete()
        await self.feed_repo.commit()
        logger.info("피드 삭제: feed_id=%s user_id=%s", feed.id, actor.id)

    # ─── 댓글 ───────────────────────────────────────────────────────────

    async def add_comment(
        self,
        actor: User,
        feed_id: int,
        content: Optional[str],
        file: Optional[UploadFile] = None,
    ) -> Comment:
        """
        댓글 작성
        1) 대상 피드 확인 (없으면 NotFoundError)
        2) 본문 검증 → 첨부파일 저장 → 커밋
        """
        feed = await self._get_feed(feed_id)
        content = _clean(content)
        if not content:
            raise BadRequestError("댓글 내용을 입력해 주세요.")

        saved: List[str] = []
        if FileStorage.is_present(file):
            saved.append(await self.storage.save(file))
        comment = Comment(
            feed_id=feed.id,
            user_id=actor.id,
            content=content,
            file=saved[0] if saved else None,
        )
        self.feed_repo.add(comment)
        await self._commit_or_discard(saved)
        logger.info("댓글 작성: comment_id=%s feed_id=%s user_id=%s", comment.id, feed.id, actor.id)
        return await self._get_comment(comment.id)

    async def update_comment(
        self,
        actor: User,
        comment_id: int,
        content: Optional[str],
        file: Optional[UploadFile] = None,
    ) -> Comment:
        """
        댓글 수정
        - 작성자 본인만 가능 (피드 작성자라도 불가)
        - 새 파일이 있으면 교체, 없으면 기존 파일 유지
        """
        comment = await self._get_comment(comment_id)
        ensure_comment_author(comment, actor, "수정")

        content = _clean(content)
        if content:
            comment.content = content

        saved: List[str] = []
        replaced: List[str] = []
        if FileStorage.is_present(file):
            saved.append(await self.storage.save(file))
            if comment.file:
                replaced.append(comment.file)
            comment.file = saved[0]

        await self._commit_or_discard(saved)
        await self._discard(replaced)
        logger.info("댓글 수정: comment_id=%s user_id=%s", comment.id, actor.id)
        return await self._get_comment(comment.id)

    async def delete_comment(self, actor: User, comment_id: int) -> None:
        comment = await self._get_comment(comment_id)
        ensure_comment_author(comment, actor, "삭제")
        comment.soft_delete()
        await self.feed_repo.commit()
        logger.info("댓글 삭제: comment_id=%s user_id=%s", comment.id, actor.id)
