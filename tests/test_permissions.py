import pytest

from social_backend.models.chatroom import Chatroom
from social_backend.models.comment import Comment
from social_backend.models.feed import Feed
from social_backend.models.message import Message
from social_backend.models.user import User
from social_backend.services.permissions import (
    ensure_can_delete_chatroom,
    ensure_chatroom_member,
    ensure_comment_author,
    ensure_feed_owner,
    ensure_message_author,
)
from social_backend.utils.exceptions import ForbiddenError

OWNER = User(id=1, username="owner")
OTHER = User(id=2, username="other")


def test_feed_owner_only():
    feed = Feed(id=10, user_id=OWNER.id, content="x")
    ensure_feed_owner(feed, OWNER)
    with pytest.raises(ForbiddenError):
        ensure_feed_owner(feed, OTHER, "삭제")


def test_comment_author_only():
    comment = Comment(id=20, feed_id=10, user_id=OTHER.id, content="x")
    ensure_comment_author(comment, OTHER)
    with pytest.raises(ForbiddenError):
        ensure_comment_author(comment, OWNER, "삭제")


def test_message_author_only():
    message = Message(id=30, chatroom_id=5, user_id=OTHER.id, content="x")
    ensure_message_author(message, OTHER)
    with pytest.raises(ForbiddenError):
        ensure_message_author(message, OWNER)


def test_chatroom_member():
    room = Chatroom(id=5, owner_id=OWNER.id, is_group=False)
    ensure_chatroom_member(room, OWNER, True)
    with pytest.raises(ForbiddenError):
        ensure_chatroom_member(room, OTHER, False)


@pytest.mark.parametrize(
    "is_group, actor, is_member, allowed",
    [
        (True, OWNER, True, True),
        (True, OTHER, True, False),
        (False, OTHER, True, True),
        (False, OTHER, False, False),
    ],
)
def test_chatroom_delete_rules(is_group, actor, is_member, allowed):
    room = Chatroom(id=5, owner_id=OWNER.id, is_group=is_group)
    if allowed:
        ensure_can_delete_chatroom(room, actor, is_member)
    else:
        with pytest.raises(ForbiddenError):
            ensure_can_delete_chatroom(room, actor, is_member)
