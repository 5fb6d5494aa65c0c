from typing import Dict, List, Optional, Sequence

from sqlalchemy import select

from social_backend.models.chatroom import Chatroom, ChatroomMember
from social_backend.models.message import Message
from social_backend.repositories.base import BaseRepository


class ChatRepository(BaseRepository):
    """
    채팅방/멤버십/메시지 데이터 액세스
    """

    async def find_chatroom(self, chatroom_id: int) -> Optional[Chatroom]:
        """
        활성 채팅방 반환
        """
        query = select(Chatroom).where(
            Chatroom.id == chatroom_id,
            Chatroom.deleted_at.is_(None),
        )
        result = await self.session.execute(query)
        return result.scalars().first()

    async def list_chatrooms_for_user(self, user_id: int) -> List[Chatroom]:
        """
        사용자가 멤버로 속한 활성 채팅방 목록 (최근 생성순)
        """
        query = (
            select(Chatroom)
            .join(ChatroomMember, ChatroomMember.chatroom_id == Chatroom.id)
            .where(ChatroomMember.user_id == user_id, Chatroom.deleted_at.is_(None))
            .order_by(Chatroom.created_at.desc(), Chatroom.id.desc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    def add_chatroom(self, chatroom: Chatroom) -> None:
        self.session.add(chatroom)

    def add_member(self, chatroom_id: int, user_id: int) -> ChatroomMember:
        member = ChatroomMember(chatroom_id=chatroom_id, user_id=user_id)
        self.session.add(member)
        return member

    async def is_member(self, chatroom_id: int, user_id: int) -> bool:
        query = select(ChatroomMember).where(
            ChatroomMember.chatroom_id == chatroom_id,
            ChatroomMember.user_id == user_id,
        )
        result = await self.session.execute(query)
        return result.scalars().first() is not None

    async def member_ids_by_room(self, chatroom_ids: Sequence[int]) -> Dict[int, List[int]]:
        """
        채팅방 ID별 멤버 사용자 ID 목록 (참여 순)
        """
        members: Dict[int, List[int]] = {room_id: [] for room_id in chatroom_ids}
        if not chatroom_ids:
            return members
        query = (
            select(ChatroomMember)
            .where(ChatroomMember.chatroom_id.in_(chatroom_ids))
            .order_by(ChatroomMember.joined_at, ChatroomMember.user_id)
        )
        result = await self.session.execute(query)
        for row in result.scalars().all():
            members[row.chatroom_id].append(row.user_id)
        return members

    async def find_message(self, message_id: int) -> Optional[Message]:
        """
        활성 메시지 반환
        """
        query = (
            select(Message)
            .where(Message.id == message_id, Message.deleted_at.is_(None))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalars().first()

    async def list_messages(self, chatroom_id: int) -> List[Message]:
        """
        채팅방의 활성 메시지를 오래된 순으로 반환
        """
        query = (
            select(Message)
            .where(Message.chatroom_id == chatroom_id, Message.deleted_at.is_(None))
            .order_by(Message.created_at.asc(), Message.id.asc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    def add_message(self, message: Message) -> None:
        self.session.add(message)
