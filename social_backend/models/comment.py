from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from social_backend.core.database import Base
from social_backend.models.mixins import SoftDeleteMixin, TimestampMixin


class Comment(TimestampMixin, SoftDeleteMixin, Base):
    """
    피드 댓글(Comment) 모델
    - 하나의 피드와 하나의 작성자에 속함
    - 피드가 삭제되어도 연쇄 삭제되지 않으며 ID로 계속 조회 가능
    """
    __tablename__ = "comments"

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="댓글 고유 ID"
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
        index=True,
        doc="작성자(User) ID"
    )
    content: str = Column(
        Text,
        nullable=False,
        doc="댓글 본문"
    )
    file: str = Column(
        String(255),
        nullable=True,
        doc="첨부파일 경로 (최대 1개)"
    )

    # Comment → User (N:1)
    author = relationship(
        "User",
        lazy="selectin",
        doc="작성자 User 객체"
    )
