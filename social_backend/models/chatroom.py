from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String

from social_backend.core.database import Base
from social_backend.models.mixins import SoftDeleteMixin, TimestampMixin, utcnow


class Chatroom(TimestampMixin, SoftDeleteMixin, Base):
    """
    채팅방(Chatroom) 모델
    - direct: 멤버 정확히 2명, 이름 없음, 방장 권한 없음
    - group: 이름 필수, owner_id가 방장이며 멤버이기도 함
    """
    __tablename__ = "chatrooms"

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="채팅방 고유 ID"
    )
    name: str = Column(
        String(255),
        nullable=False,
        default="",
        doc="그룹 채팅방 이름 (direct는 빈 문자열)"
    )
    owner_id: int = Column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        doc="채팅방을 만든 사용자 ID (group에서만 권한 판단에 사용)"
    )
    is_group: bool = Column(
        Boolean,
        nullable=False,
        default=False,
        doc="그룹 채팅 여부"
    )


class ChatroomMember(Base):
    """
    채팅방 멤버십 조인 엔티티
    - (chatroom_id, user_id) 복합 PK로 중복 가입을 차단
    """
    __tablename__ = "chatroom_users"

    chatroom_id: int = Column(
        Integer,
        ForeignKey("chatrooms.id"),
        primary_key=True,
        doc="채팅방 ID"
    )
    user_id: int = Column(
        Integer,
        ForeignKey("users.id"),
        primary_key=True,
        index=True,
        doc="멤버 사용자 ID"
    )
    joined_at: datetime = Column(
        DateTime,
        nullable=False,
        default=utcnow,
        doc="참여 시각(UTC)"
    )
