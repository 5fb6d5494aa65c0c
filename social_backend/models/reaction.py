from datetime import datetime
from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint

from social_backend.core.database import Base
from social_backend.models.mixins import utcnow


class ReactionType(str, Enum):
    """리액션 종류"""
    LIKE = "like"
    DISLIKE = "dislike"


class Reaction(Base):
    """
    피드 리액션(좋아요/싫어요) 모델
    - (feed_id, user_id) 쌍마다 최대 1행
    - 같은 종류를 다시 누르면 행 삭제, 다른 종류를 누르면 reaction 값만 변경
    """
    __tablename__ = "reactions"
    __table_args__ = (
        UniqueConstraint("feed_id", "user_id", name="uq_reaction_feed_user"),
    )

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="리액션 고유 ID"
    )
    feed_id: int = Column(
        Integer,
        ForeignKey("feeds.id"),
        nullable=False,
        index=True,
        doc="대상 피드 ID"
    )
    user_id: int = Column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        doc="리액션한 사용자 ID"
    )
    reaction: str = Column(
        String(16),
        nullable=False,
        doc="'like' 또는 'dislike'"
    )
    # 종류가 바뀌어도 갱신하지 않음
    created_at: datetime = Column(
        DateTime,
        nullable=False,
        default=utcnow,
        doc="최초 리액션 시각(UTC)"
    )
