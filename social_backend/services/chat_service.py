import logging
from typing import Dict, List, Optional, Tuple

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from social_backend.models.chatroom import Chatroom
from social_backend.models.message import Message
from social_backend.models.user import User
from social_backend.repositories.chat_repository import ChatRepository
from social_backend.repositories.user_repository import UserRepository
from social_backend.schemas.chat_schema import ChatroomCreateRequest
from social_backend.services.permissions import (
    ensure_can_delete_chatroom,
    ensure_chatroom_member,
    ensure_message_author,
)
from social_backend.services.storage_service import FileStorage
from social_backend.utils.exceptions import BadRequestError, NotFoundError, StorageError

logger = logging.getLogger(__name__)


class ChatService:
    """
    채팅 서비스 클래스
    - 채팅방 생성(direct/group), 내 채팅방 목록, 삭제
    - 메시지 조회/전송/삭제
    """
    def __init__(self, db: AsyncSession, storage: Optional[FileStorage] = None):
        """
        - db: 비동기 DB 세션
        - storage: 메시지 첨부파일 저장소
        """
        self.db = db
        self.storage = storage
        self.chat_repo = ChatRepository(db)
        self.user_repo = UserRepository(db)

    async def _get_chatroom(self, chatroom_id: int) -> Chatroom:
        chatroom = await self.chat_repo.find_chatroom(chatroom_id)
        if not chatroom:
            raise NotFoundError(f"채팅방 ID {chatroom_id}를 찾을 수 없습니다.")
        return chatroom

    async def _get_member_chatroom(self, actor: User, chatroom_id: int) -> Chatroom:
        """
        채팅방 조회 후 멤버인지 확인 (아니면 ForbiddenError)
        """
        chatroom = await self._get_chatroom(chatroom_id)
        is_member = await self.chat_repo.is_member(chatroom.id, actor.id)
        ensure_chatroom_member(chatroom, actor, is_member)
        return chatroom

    # ─── 채팅방 ─────────────────────────────────────────────────────────

    async def _direct_target(self, actor: User, user_ids: List[int]) -> int:
        """
        direct 채팅 상대 검증
        - 정확히 1명, 자기 자신 불가, 활성 사용자여야 함
        """
        if len(user_ids) != 1:
            raise BadRequestError("1:1 채팅은 상대방 한 명의 ID가 필요합니다.")
        target_id = user_ids[0]
        if target_id == actor.id:
            raise BadRequestError("자기 자신과는 1:1 채팅을 만들 수 없습니다.")
        if not await self.user_repo.find_by_id(target_id):
            raise NotFoundError(f"사용자 ID {target_id}를 찾을 수 없습니다.")
        return target_id

    async def _group_members(self, actor: User, user_ids: List[int]) -> Tuple[List[int], List[int]]:
        """
        그룹 채팅 초대 대상 정리
        - 중복 ID와 생성자 본인은 이미 멤버이므로 제외
        - 활성 사용자가 아닌 ID는 건너뛰고 별도로 반환
        """
        candidates: List[int] = []
        for user_id in user_ids:
            if user_id != actor.id and user_id not in candidates:
                candidates.append(user_id)

        existing = await self.user_repo.find_existing_ids(candidates)
        members = [user_id for user_id in candidates if user_id in existing]
        skipped = [user_id for user_id in candidates if user_id not in existing]
        if skipped:
            logger.warning("그룹 채팅 초대에서 제외된 사용자 ID: %s (요청자 %s)", skipped, actor.id)
        return members, skipped

    async def create_chatroom(
        self,
        actor: User,
        data: ChatroomCreateRequest,
    ) -> Tuple[Chatroom, List[int], List[int]]:
        """
        채팅방 생성
        1) direct: 상대 1명 검증 / group: 이름 필수 검증
        2) 채팅방 생성 → flush로 ID 확보
        3) 생성자 → 초대 대상 순서로 멤버 추가 → 커밋
        Returns:
            (채팅방, 멤버 ID 목록, 건너뛴 ID 목록)
        """
        name = (data.name or "").strip()
        if data.is_group:
            if not name:
                raise BadRequestError("그룹 채팅방 이름을 입력해 주세요.")
            invitees, skipped = await self._group_members(actor, data.user_ids)
        else:
            invitees, skipped = [await self._direct_target(actor, data.user_ids)], []
            name = ""

        chatroom = Chatroom(name=name, owner_id=actor.id, is_group=data.is_group)
        self.chat_repo.add_chatroom(chatroom)
        await self.chat_repo.flush()

        member_ids = [actor.id] + invitees
        for user_id in member_ids:
            self.chat_repo.add_member(chatroom.id, user_id)
        await self.chat_repo.commit()
        logger.info(
            "채팅방 생성: chatroom_id=%s group=%s owner=%s members=%s",
            chatroom.id, chatroom.is_group, actor.id, member_ids,
        )
        return chatroom, member_ids, skipped

    async def list_chatrooms(self, actor: User) -> Tuple[List[Chatroom], Dict[int, List[int]]]:
        """
        내가 속한 채팅방 목록과 방별 멤버 ID
        """
        chatrooms = await self.chat_repo.list_chatrooms_for_user(actor.id)
        members = await self.chat_repo.member_ids_by_room([room.id for room in chatrooms])
        return chatrooms, members

    async def delete_chatroom(self, actor: User, chatroom_id: int) -> None:
        """
        채팅방 삭제 (soft delete)
        - group: 방장만 / direct: 참여자 누구나
        """
        chatroom = await self._get_chatroom(chatroom_id)
        is_member = await self.chat_repo.is_member(chatroom.id, actor.id)
        ensure_can_delete_chatroom(chatroom, actor, is_member)
        chatroom.soft_delete()
        await self.chat_repo.commit()
        logger.info("채팅방 삭제: chatroom_id=%s user_id=%s", chatroom.id, actor.id)

    # ─── 메시지 ─────────────────────────────────────────────────────────

    async def list_messages(self, actor: User, chatroom_id: int) -> List[Message]:
        chatroom = await self._get_member_chatroom(actor, chatroom_id)
        return await self.chat_repo.list_messages(chatroom.id)

    async def send_message(
        self,
        actor: User,
        chatroom_id: int,
        content: Optional[str],
        file: Optional[UploadFile] = None,
    ) -> Message:
        """
        메시지 전송
        1) 채팅방 확인 + 멤버 확인
        2) 본문 검증 → 첨부파일 저장
        3) 메시지 저장 → 커밋 (실패 시 파일 정리)
        """
        chatroom = await self._get_member_chatroom(actor, chatroom_id)
        content = (content or "").strip()
        if not content:
            raise BadRequestError("메시지 내용을 입력해 주세요.")

        saved: List[str] = []
        if FileStorage.is_present(file):
            saved.append(await self.storage.save(file))
        message = Message(
            chatroom_id=chatroom.id,
            user_id=actor.id,
            content=content,
            file=saved[0] if saved else None,
        )
        self.chat_repo.add_message(message)
        try:
            await self.chat_repo.commit()
        except StorageError:
            if saved:
                await self.storage.discard(saved)
            raise
        logger.info("메시지 전송: message_id=%s chatroom_id=%s user_id=%s", message.id, chatroom.id, actor.id)
        return await self.chat_repo.find_message(message.id)

    async def delete_message(self, actor: User, message_id: int) -> None:
        """
        메시지 삭제 (작성자 본인만, 그룹 방장도 남의 메시지는 불가)
        """
        message = await self.chat_repo.find_message(message_id)
        if not message:
            raise NotFoundError(f"메시지 ID {message_id}를 찾을 수 없습니다.")
        ensure_message_author(message, actor)
        message.soft_delete()
        await self.chat_repo.commit()
        logger.info("메시지 삭제: message_id=%s user_id=%s", message.id, actor.id)
