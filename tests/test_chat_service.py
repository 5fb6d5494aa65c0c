import pytest

from social_backend.schemas.chat_schema import ChatroomCreateRequest
from social_backend.services.chat_service import ChatService
from social_backend.services.user_service import UserService
from social_backend.utils.exceptions import BadRequestError, ForbiddenError, NotFoundError


def _direct(*user_ids):
    return ChatroomCreateRequest(is_group=False, user_ids=list(user_ids))


def _group(name, *user_ids):
    return ChatroomCreateRequest(is_group=True, name=name, user_ids=list(user_ids))


@pytest.fixture
def service(db, storage):
    return ChatService(db, storage)


@pytest.mark.parametrize("targets", [(), (2, 3)])
async def test_direct_chat_needs_exactly_one_target(service, make_user, targets):
    me = await make_user("me")
    await make_user("two")
    await make_user("three")
    with pytest.raises(BadRequestError):
        await service.create_chatroom(me, _direct(*targets))


async def test_direct_chat_has_two_members(service, make_user):
    me = await make_user("me")
    you = await make_user("you")

    room, member_ids, skipped = await service.create_chatroom(me, _direct(you.id))
    assert not room.is_group
    assert room.name == ""
    assert sorted(member_ids) == sorted([me.id, you.id])
    assert skipped == []

    rooms, members = await service.list_chatrooms(you)
    assert [r.id for r in rooms] == [room.id]
    assert sorted(members[room.id]) == sorted([me.id, you.id])


async def test_direct_chat_target_validation(service, make_user):
    me = await make_user("me")
    with pytest.raises(BadRequestError):
        await service.create_chatroom(me, _direct(me.id))
    with pytest.raises(NotFoundError):
        await service.create_chatroom(me, _direct(999))


async def test_group_chat_requires_name(service, make_user):
    me = await make_user("me")
    with pytest.raises(BadRequestError):
        await service.create_chatroom(me, _group("   "))


async def test_group_chat_skips_unknown_and_duplicate_ids(service, make_user):
    me = await make_user("me")
    a = await make_user("a")
    b = await make_user("b")
    gone = await make_user("gone")
    await UserService(service.db).deactivate(gone)

    room, member_ids, skipped = await service.create_chatroom(
        me, _group("team", a.id, a.id, me.id, 999, b.id, gone.id)
    )
    assert room.is_group and room.name == "team" and room.owner_id == me.id
    assert member_ids == [me.id, a.id, b.id]
    assert skipped == [999, gone.id]


async def test_group_delete_owner_only(service, make_user):
    owner = await make_user("owner")
    member = await make_user("member")
    room, _, _ = await service.create_chatroom(owner, _group("team", member.id))

    with pytest.raises(ForbiddenError):
        await service.delete_chatroom(member, room.id)

    await service.delete_chatroom(owner, room.id)
    rooms, _ = await service.list_chatrooms(owner)
    assert rooms == []
    rooms, _ = await service.list_chatrooms(member)
    assert rooms == []


async def test_direct_delete_by_either_member(service, make_user):
    me = await make_user("me")
    you = await make_user("you")
    outsider = await make_user("outsider")
    room, _, _ = await service.create_chatroom(me, _direct(you.id))

    with pytest.raises(ForbiddenError):
        await service.delete_chatroom(outsider, room.id)
    await service.delete_chatroom(you, room.id)
    with pytest.raises(NotFoundError):
        await service.delete_chatroom(me, room.id)


async def test_messages_require_membership(service, make_user):
    me = await make_user("me")
    you = await make_user("you")
    outsider = await make_user("outsider")
    room, _, _ = await service.create_chatroom(me, _direct(you.id))

    with pytest.raises(ForbiddenError):
        await service.send_message(outsider, room.id, "hi")
    with pytest.raises(ForbiddenError):
        await service.list_messages(outsider, room.id)
    with pytest.raises(NotFoundError):
        await service.list_messages(me, 999)


async def test_send_list_and_delete_messages(service, make_user):
    me = await make_user("me")
    you = await make_user("you")
    room, _, _ = await service.create_chatroom(me, _direct(you.id))

    first = await service.send_message(me, room.id, "hello")
    second = await service.send_message(you, room.id, "hi back")
    assert first.author.id == me.id

    messages = await service.list_messages(you, room.id)
    assert [m.id for m in messages] == [first.id, second.id]

    with pytest.raises(ForbiddenError):
        await service.delete_message(you, first.id)
    await service.delete_message(me, first.id)
    messages = await service.list_messages(me, room.id)
    assert [m.id for m in messages] == [second.id]


async def test_group_owner_cannot_delete_others_message(service, make_user):
    owner = await make_user("owner")
    member = await make_user("member")
    room, _, _ = await service.create_chatroom(owner, _group("team", member.id))
    message = await service.send_message(member, room.id, "mine")

    with pytest.raises(ForbiddenError):
        await service.delete_message(owner, message.id)


async def test_empty_message_rejected(service, make_user):
    me = await make_user("me")
    you = await make_user("you")
    room, _, _ = await service.create_chatroom(me, _direct(you.id))
    with pytest.raises(BadRequestError):
        await service.send_message(me, room.id, "  ")
