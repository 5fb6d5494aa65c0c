from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from social_backend.models.reaction import ReactionType
from social_backend.schemas.user_schema import UserSummary

# ─── 피드/댓글/리액션 응답 스키마 정의 ───────────────────────────────────

class CommentResponse(BaseModel):
    """
    댓글 응답 모델
    """
    id: int = Field(..., description="댓글 ID")
    feed_id: int = Field(..., description="대상 피드 ID")
    user: UserSummary = Field(..., description="작성자")
    content: str = Field(..., description="댓글 본문")
    file: Optional[str] = Field(None, description="첨부파일 경로")
    created_at: datetime
    updated_at: datetime


class ReactionResponse(BaseModel):
    """
    피드에 달린 리액션 한 건
    """
    user_id: int
    reaction: ReactionType
    created_at: datetime


class FeedResponse(BaseModel):
    """
    피드 응답 모델
    - 첨부파일 경로 목록, 활성 댓글, 리액션과 집계를 함께 반환
    """
    id: int = Field(..., description="피드 ID")
    user: UserSummary = Field(..., description="작성자")
    content: str = Field(..., description="피드 본문")
    attachments: List[str] = Field(default_factory=list, description="첨부파일 경로 (순서 유지)")
    comments: List[CommentResponse] = Field(default_factory=list)
    reactions: List[ReactionResponse] = Field(default_factory=list)
    like_count: int = 0
    dislike_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "user": {"id": 1, "username": "budi", "fullname": "Budi Santoso",
                         "photo_profile": "public/default/images/user.png"},
                "content": "오늘 날씨 좋네요",
                "attachments": ["public/uploads/20250101120000_1a2b3c4d_sky.jpg"],
                "comments": [],
                "reactions": [],
                "like_count": 0,
                "dislike_count": 0,
                "created_at": "2025-01-01T12:00:00",
                "updated_at": "2025-01-01T12:00:00",
            }
        }
    )


class ReactionToggleResponse(BaseModel):
    """
    좋아요/싫어요 토글 결과
    - reaction: 토글 후 상태 (None이면 리액션 없음)
    """
    message: str
    feed_id: int
    reaction: Optional[ReactionType] = None
    like_count: int = 0
    dislike_count: int = 0
