"""
권한 판단 규칙 모음

모든 변경 작업은 대상 엔티티의 존재(NotFound)를 먼저 확인한 뒤 이 함수들로
권한을 검사하고, 통과한 경우에만 상태를 변경한다.
권한이 없으면 ForbiddenError를 발생시킨다.
"""

import logging

from social_backend.models.chatroom import Chatroom
from social_backend.models.comment import Comment
from social_backend.models.feed import Feed
from social_backend.models.message import Message
from social_backend.models.user import User
from social_backend.utils.exceptions import ForbiddenError

logger = logging.getLogger(__name__)


def _deny(actor: User, action: str, target: str, message: str) -> None:
    logger.warning("권한 거부: user=%s action=%s target=%s", actor.id, action, target)
    raise ForbiddenError(message)


def ensure_feed_owner(feed: Feed, actor: User, action: str = "수정") -> None:
    """
    피드는 작성자 본인만 수정/삭제 가능
    """
    if feed.user_id != actor.id:
        _deny(actor, action, f"feed:{feed.id}", f"이 피드를 {action}할 권한이 없습니다.")


def ensure_comment_author(comment: Comment, actor: User, action: str = "수정") -> None:
    """
    댓글은 작성자 본인만 수정/삭제 가능
    - 피드 작성자라도 남의 댓글은 삭제할 수 없음
    """
    if comment.user_id != actor.id:
        _deny(actor, action, f"comment:{comment.id}", f"이 댓글을 {action}할 권한이 없습니다.")


def ensure_message_author(message: Message, actor: User) -> None:
    """
    메시지는 작성자 본인만 삭제 가능
    - 그룹 방장이라도 남의 메시지는 삭제할 수 없음
    """
    if message.user_id != actor.id:
        _deny(actor, "삭제", f"message:{message.id}", "이 메시지를 삭제할 권한이 없습니다.")


def ensure_chatroom_member(chatroom: Chatroom, actor: User, is_member: bool) -> None:
    """
    채팅방 메시지 조회/전송은 멤버만 가능
    """
    if not is_member:
        _deny(actor, "접근", f"chatroom:{chatroom.id}", "이 채팅방의 멤버가 아닙니다.")


def ensure_can_delete_chatroom(chatroom: Chatroom, actor: User, is_member: bool) -> None:
    """
    채팅방 삭제 권한
    - group: 방장(owner_id)만 가능
    - direct: 두 참여자 중 누구나 가능
    """
    if chatroom.is_group:
        if chatroom.owner_id != actor.id:
            _deny(actor, "삭제", f"chatroom:{chatroom.id}", "그룹 채팅방은 방장만 삭제할 수 있습니다.")
    elif not is_member:
        _deny(actor, "삭제", f"chatroom:{chatroom.id}", "이 채팅방을 삭제할 권한이 없습니다.")
