from sqlalchemy import Column, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from social_backend.core.database import Base
from social_backend.models.mixins import SoftDeleteMixin, TimestampMixin


class Feed(TimestampMixin, SoftDeleteMixin, Base):
    """
    피드(게시글) 모델
    - 정확히 한 명의 작성자(user_id)가 소유
    - 첨부파일은 FeedAttachment 레코드의 순서 있는 목록으로 보관
    - 댓글/리액션은 각 테이블에서 feed_id로 참조
    """
    __tablename__ = "feeds"

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="피드 고유 ID"
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
        doc="피드 본문"
    )

    # Feed → User (N:1)
    author = relationship(
        "User",
        lazy="selectin",
        doc="작성자 User 객체"
    )

    # Feed ↔ FeedAttachment (1:N), position 순
    attachments = relationship(
        "FeedAttachment",
        order_by="FeedAttachment.position",
        cascade="all, delete-orphan",  # 첨부 목록 교체 시 기존 레코드 제거
        lazy="selectin",
        doc="첨부파일 목록"
    )

    # 삭제되지 않은 댓글만 조회 (읽기 전용)
    comments = relationship(
        "Comment",
        primaryjoin="and_(Feed.id == Comment.feed_id, Comment.deleted_at.is_(None))",
        order_by="Comment.id",
        viewonly=True,
        lazy="selectin",
        doc="활성 댓글 목록"
    )

    reactions = relationship(
        "Reaction",
        order_by="Reaction.id",
        viewonly=True,
        lazy="selectin",
        doc="좋아요/싫어요 목록"
    )


class FeedAttachment(Base):
    """
    피드 첨부파일 레코드
    - 파일 저장소가 반환한 경로를 position 순서로 보관
    """
    __tablename__ = "feed_attachments"
    __table_args__ = (
        UniqueConstraint("feed_id", "position", name="uq_feed_attachment_position"),
    )

    id: int = Column(
        Integer,
        primary_key=True,
        doc="첨부파일 고유 ID"
    )
    feed_id: int = Column(
        Integer,
        ForeignKey("feeds.id"),
        nullable=False,
        index=True,
        doc="소속 피드 ID"
    )
    position: int = Column(
        Integer,
        nullable=False,
        doc="피드 내 첨부 순서(0부터)"
    )
    path: str = Column(
        String(255),
        nullable=False,
        doc="파일 저장소 경로"
    )
