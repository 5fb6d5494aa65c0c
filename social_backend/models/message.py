from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from social_backend.core.database import Base
from social_backend.models.mixins import SoftDeleteMixin, TimestampMixin


class Message(TimestampMixin, SoftDeleteMixin, Base):
    """
    채팅 메시지(Message) 모델
    - 하나의 채팅방과 하나의 작성자에 속함
    - 작성자 본인만 삭제 가능 (방장도 남의 메시지는 삭제 불가)
    """
    __tablename__ = "messages"

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="메시지 고유 ID"
    )
    chatroom_id: int = Column(
        Integer,
        ForeignKey("chatrooms.id"),
        nullable=False,
        index=True,
        doc="소속 채팅방 ID"
    )
    user_id: int = Column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        doc="작성자(User) ID"
    )
    content: str = Column(
        Text,
        nullable=False,
        doc="메시지 본문"
    )
    file: str = Column(
        String(255),
        nullable=True,
        doc="첨부파일 경로 (최대 1개)"
    )

    # Message → User (N:1)
    author = relationship(
        "User",
        lazy="selectin",
        doc="작성자 User 객체"
    )
