from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from social_backend.schemas.user_schema import UserSummary

# ─── 채팅 관련 요청/응답 스키마 정의 ─────────────────────────────────────

class ChatroomCreateRequest(BaseModel):
    """
    채팅방 생성 요청 모델
    - direct(is_group=false): user_ids에 상대방 ID 정확히 1개
    - group(is_group=true): name 필수, user_ids는 초대할 사용자 목록
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "is_group": True,
                "name": "스터디 모임",
                "user_ids": [2, 3, 4],
            }
        },
    )

    is_group: bool = Field(False, description="그룹 채팅 여부")
    name: Optional[str] = Field(None, max_length=255, description="그룹 채팅방 이름")
    user_ids: List[int] = Field(default_factory=list, description="초대할 사용자 ID 목록")


class ChatroomResponse(BaseModel):
    """
    채팅방 응답 모델
    """
    id: int
    name: str
    is_group: bool
    owner_id: int
    member_ids: List[int] = Field(default_factory=list, description="멤버 사용자 ID (참여 순)")
    created_at: datetime
    updated_at: datetime


class ChatroomCreateResponse(ChatroomResponse):
    """
    채팅방 생성 응답
    - skipped_user_ids: 존재하지 않거나 탈퇴한 사용자라서 추가하지 못한 ID
    """
    skipped_user_ids: List[int] = Field(default_factory=list)


class ChatMessageResponse(BaseModel):
    """
    채팅 메시지 응답 모델
    """
    id: int
    chatroom_id: int
    user: UserSummary
    content: str
    file: Optional[str] = None
    created_at: datetime
    updated_at: datetime
