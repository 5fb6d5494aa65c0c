from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer

from social_backend.core.database import Base
from social_backend.models.mixins import utcnow


class Follow(Base):
    """
    팔로우 관계(Follow) 모델
    - follower가 following을 팔로우하는 방향성 있는 간선
    - (follower_id, following_id) 복합 PK로 중복 팔로우를 DB 수준에서 차단
    """
    __tablename__ = "follows"

    follower_id: int = Column(
        Integer,
        ForeignKey("users.id"),
        primary_key=True,
        doc="팔로우 하는 사용자 ID"
    )
    following_id: int = Column(
        Integer,
        ForeignKey("users.id"),
        primary_key=True,
        index=True,
        doc="팔로우 받는 사용자 ID"
    )
    created_at: datetime = Column(
        DateTime,
        nullable=False,
        default=utcnow,
        doc="팔로우 시각(UTC)"
    )
