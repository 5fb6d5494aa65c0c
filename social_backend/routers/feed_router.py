from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from social_backend.core.database import get_db_session
from social_backend.dependencies import get_current_user, get_file_storage
from social_backend.models.reaction import ReactionType
from social_backend.models.user import User
from social_backend.routers.serializers import to_comment_response, to_feed_response
from social_backend.schemas.auth_schema import MessageResponse
from social_backend.schemas.feed_schema import CommentResponse, FeedResponse, ReactionToggleResponse
from social_backend.services.feed_service import FeedService
from social_backend.services.reaction_service import ReactionService
from social_backend.services.storage_service import FileStorage

router = APIRouter(tags=["Feed"])

# ─── 피드 ───────────────────────────────────────────────────────────────

@router.get("/feeds", response_model=List[FeedResponse])
async def list_feeds(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[FeedResponse]:
    """
    전체 피드 목록 (최신순, 댓글/리액션 포함)
    """
    feeds = await FeedService(db).list_feeds()
    return [to_feed_response(feed) for feed in feeds]


@router.post("/feeds", response_model=FeedResponse, status_code=status.HTTP_201_CREATED)
async def create_feed(
    content: Optional[str] = Form(None),
    file: Optional[List[UploadFile]] = File(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    storage: FileStorage = Depends(get_file_storage),
) -> FeedResponse:
    """
    피드 작성 (multipart: content + 여러 개의 file 파트)
    """
    feed = await FeedService(db, storage).create_feed(current_user, content, file or [])
    return to_feed_response(feed)


@router.put("/feeds/{feed_id}", response_model=FeedResponse)
async def update_feed(
    feed_id: int,
    content: Optional[str] = Form(None),
    file: Optional[List[UploadFile]] = File(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    storage: FileStorage = Depends(get_file_storage),
) -> FeedResponse:
    """
    피드 수정 (작성자만)
    - 새 파일이 있으면 첨부 목록 교체, 없으면 유지
    """
    feed = await FeedService(db, storage).update_feed(current_user, feed_id, content, file or [])
    return to_feed_response(feed)


@router.delete("/feeds/{feed_id}", response_model=MessageResponse)
async def delete_feed(
    feed_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await FeedService(db).delete_feed(current_user, feed_id)
    return MessageResponse(message="피드가 삭제되었습니다.")

# ─── 댓글 ───────────────────────────────────────────────────────────────

@router.post(
    "/feeds/{feed_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    feed_id: int,
    content: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    storage: FileStorage = Depends(get_file_storage),
) -> CommentResponse:
    comment = await FeedService(db, storage).add_comment(current_user, feed_id, content, file)
    return to_comment_response(comment)


@router.put("/comments/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    content: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    storage: FileStorage = Depends(get_file_storage),
) -> CommentResponse:
    """
    댓글 수정 (댓글 작성자만, 피드 작성자는 불가)
    """
    comment = await FeedService(db, storage).update_comment(current_user, comment_id, content, file)
    return to_comment_response(comment)


@router.delete("/comments/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await FeedService(db).delete_comment(current_user, comment_id)
    return MessageResponse(message="댓글이 삭제되었습니다.")

# ─── 리액션 ─────────────────────────────────────────────────────────────

_TOGGLE_MESSAGES = {
    ReactionType.LIKE: "좋아요를 눌렀습니다.",
    ReactionType.DISLIKE: "싫어요를 눌렀습니다.",
    None: "리액션을 취소했습니다.",
}


async def _toggle(
    db: AsyncSession,
    user: User,
    feed_id: int,
    requested: ReactionType,
) -> ReactionToggleResponse:
    service = ReactionService(db)
    result = await service.toggle(user, feed_id, requested)
    counts = await service.counts(feed_id)
    return ReactionToggleResponse(
        message=_TOGGLE_MESSAGES[result],
        feed_id=feed_id,
        reaction=result,
        like_count=counts[ReactionType.LIKE.value],
        dislike_count=counts[ReactionType.DISLIKE.value],
    )


@router.post("/feeds/{feed_id}/like", response_model=ReactionToggleResponse)
async def like_feed(
    feed_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ReactionToggleResponse:
    """
    좋아요 토글 (이미 좋아요면 취소, 싫어요였으면 좋아요로 변경)
    """
    return await _toggle(db, current_user, feed_id, ReactionType.LIKE)


@router.post("/feeds/{feed_id}/dislike", response_model=ReactionToggleResponse)
async def dislike_feed(
    feed_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ReactionToggleResponse:
    """
    싫어요 토글 (이미 싫어요면 취소, 좋아요였으면 싫어요로 변경)
    """
    return await _toggle(db, current_user, feed_id, ReactionType.DISLIKE)
