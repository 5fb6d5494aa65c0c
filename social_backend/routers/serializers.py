"""
ORM 모델 → 응답 스키마 변환 함수 모음
"""

from typing import List

from social_backend.models.chatroom import Chatroom
from social_backend.models.comment import Comment
from social_backend.models.feed import Feed
from social_backend.models.message import Message
from social_backend.models.reaction import ReactionType
from social_backend.models.user import User
from social_backend.schemas.chat_schema import ChatMessageResponse, ChatroomResponse
from social_backend.schemas.feed_schema import CommentResponse, FeedResponse, ReactionResponse
from social_backend.schemas.user_schema import UserResponse, UserSummary


def to_user_response(user: User) -> UserResponse:
    return UserResponse.model_validate(user)


def to_user_summary(user: User) -> UserSummary:
    return UserSummary.model_validate(user)


def to_comment_response(comment: Comment) -> CommentResponse:
    """
    Comment 모델 인스턴스를 CommentResponse 스키마로 변환
    """
    return CommentResponse(
        id=comment.id,
        feed_id=comment.feed_id,
        user=to_user_summary(comment.author),
        content=comment.content,
        file=comment.file,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


def to_feed_response(feed: Feed) -> FeedResponse:
    """
    Feed 모델 인스턴스를 FeedResponse 스키마로 변환
    - 리액션 종류별 개수를 함께 계산
    """
    reactions: List[ReactionResponse] = [
        ReactionResponse(
            user_id=reaction.user_id,
            reaction=ReactionType(reaction.reaction),
            created_at=reaction.created_at,
        )
        for reaction in feed.reactions
    ]
    return FeedResponse(
        id=feed.id,
        user=to_user_summary(feed.author),
        content=feed.content,
        attachments=[attachment.path for attachment in feed.attachments],
        comments=[to_comment_response(comment) for comment in feed.comments],
        reactions=reactions,
        like_count=sum(1 for r in reactions if r.reaction == ReactionType.LIKE),
        dislike_count=sum(1 for r in reactions if r.reaction == ReactionType.DISLIKE),
        created_at=feed.created_at,
        updated_at=feed.updated_at,
    )


def to_chatroom_response(chatroom: Chatroom, member_ids: List[int]) -> ChatroomResponse:
    return ChatroomResponse(
        id=chatroom.id,
        name=chatroom.name,
        is_group=chatroom.is_group,
        owner_id=chatroom.owner_id,
        member_ids=member_ids,
        created_at=chatroom.created_at,
        updated_at=chatroom.updated_at,
    )


def to_message_response(message: Message) -> ChatMessageResponse:
    return ChatMessageResponse(
        id=message.id,
        chatroom_id=message.chatroom_id,
        user=to_user_summary(message.author),
        content=message.content,
        file=message.file,
        created_at=message.created_at,
        updated_at=message.updated_at,
    )
