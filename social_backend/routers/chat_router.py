from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from social_backend.core.database import get_db_session
from social_backend.dependencies import get_current_user, get_file_storage
from social_backend.models.user import User
from social_backend.routers.serializers import to_chatroom_response, to_message_response
from social_backend.schemas.auth_schema import MessageResponse
from social_backend.schemas.chat_schema import (
    ChatMessageResponse,
    ChatroomCreateRequest,
    ChatroomCreateResponse,
    ChatroomResponse,
)
from social_backend.services.chat_service import ChatService
from social_backend.services.storage_service import FileStorage

router = APIRouter(tags=["Chat"])


@router.post(
    "/chatrooms",
    response_model=ChatroomCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_chatroom(
    req: ChatroomCreateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ChatroomCreateResponse:
    """
    채팅방 생성
    - direct: user_ids에 상대 1명 (0명 또는 2명 이상이면 400)
    - group: name 필수, 존재하지 않는 사용자 ID는 skipped_user_ids로 반환
    """
    chatroom, member_ids, skipped = await ChatService(db).create_chatroom(current_user, req)
    base = to_chatroom_response(chatroom, member_ids)
    return ChatroomCreateResponse(**base.model_dump(), skipped_user_ids=skipped)


@router.get("/chatrooms", response_model=List[ChatroomResponse])
async def list_chatrooms(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[ChatroomResponse]:
    chatrooms, members = await ChatService(db).list_chatrooms(current_user)
    return [to_chatroom_response(room, members.get(room.id, [])) for room in chatrooms]


@router.delete("/chatrooms/{chatroom_id}", response_model=MessageResponse)
async def delete_chatroom(
    chatroom_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """
    채팅방 삭제
    - group은 방장만, direct는 참여자 누구나
    """
    await ChatService(db).delete_chatroom(current_user, chatroom_id)
    return MessageResponse(message="채팅방이 삭제되었습니다.")


@router.get("/chatrooms/{chatroom_id}/messages", response_model=List[ChatMessageResponse])
async def list_messages(
    chatroom_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[ChatMessageResponse]:
    messages = await ChatService(db).list_messages(current_user, chatroom_id)
    return [to_message_response(message) for message in messages]


@router.post(
    "/chatrooms/{chatroom_id}/messages",
    response_model=ChatMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    chatroom_id: int,
    content: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    storage: FileStorage = Depends(get_file_storage),
) -> ChatMessageResponse:
    """
    메시지 전송 (multipart: content + 선택 file)
    """
    message = await ChatService(db, storage).send_message(current_user, chatroom_id, content, file)
    return to_message_response(message)


@router.delete("/messages/{message_id}", response_model=MessageResponse)
async def delete_message(
    message_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await ChatService(db).delete_message(current_user, message_id)
    return MessageResponse(message="메시지가 삭제되었습니다.")
