import pytest
from sqlalchemy import func, select

from social_backend.models.follow import Follow
from social_backend.repositories.follow_repository import FollowRepository
from social_backend.services.follow_service import FollowService
from social_backend.services.user_service import UserService
from social_backend.utils.exceptions import BadRequestError, ConflictError, NotFoundError


async def test_follow_then_duplicate_conflicts(db, make_user):
    a = await make_user("alice")
    b = await make_user("bob")
    service = FollowService(db)

    await service.follow(a, b.id)
    with pytest.raises(ConflictError):
        await service.follow(a, b.id)

    assert [u.id for u in await service.list_following(a)] == [b.id]
    assert [u.id for u in await service.list_followers(b)] == [a.id]


async def test_follow_is_directed(db, make_user):
    a = await make_user("alice")
    b = await make_user("bob")
    service = FollowService(db)

    await service.follow(a, b.id)
    await service.follow(b, a.id)

    assert [u.id for u in await service.list_followers(a)] == [b.id]


async def test_unfollow_missing_edge_is_noop(db, make_user):
    a = await make_user("alice")
    b = await make_user("bob")
    service = FollowService(db)

    await service.unfollow(a, b.id)
    assert await service.list_following(a) == []


async def test_unfollow_allows_following_again(db, make_user):
    a = await make_user("alice")
    b = await make_user("bob")
    service = FollowService(db)

    await service.follow(a, b.id)
    await service.unfollow(a, b.id)
    assert await service.list_following(a) == []

    await service.follow(a, b.id)
    assert [u.id for u in await service.list_following(a)] == [b.id]


async def test_self_follow_rejected(db, make_user):
    a = await make_user("alice")
    with pytest.raises(BadRequestError):
        await FollowService(db).follow(a, a.id)


async def test_follow_unknown_user(db, make_user):
    a = await make_user("alice")
    service = FollowService(db)
    with pytest.raises(NotFoundError):
        await service.follow(a, 12345)
    with pytest.raises(NotFoundError):
        await service.unfollow(a, 12345)


async def test_deactivated_user_cannot_be_followed(db, make_user):
    a = await make_user("alice")
    b = await make_user("bob")
    await UserService(db).deactivate(b)

    with pytest.raises(NotFoundError):
        await FollowService(db).follow(a, b.id)


async def test_deactivated_follower_hidden_from_lists(db, make_user):
    a = await make_user("alice")
    b = await make_user("bob")
    service = FollowService(db)
    await service.follow(a, b.id)

    await UserService(db).deactivate(a)
    assert await service.list_followers(b) == []


async def test_follow_committed_by_other_session_conflicts(db, make_user, session_factory, monkeypatch):
    a = await make_user("alice")
    b = await make_user("bob")
    a_id, b_id = a.id, b.id

    # 중복 확인 이후, 커밋 직전에 다른 요청이 같은 간선을 먼저 커밋한 상황
    async with session_factory() as other:
        other.add(Follow(follower_id=a_id, following_id=b_id))
        await other.commit()

    async def _not_yet_followed(self, follower_id, following_id):
        return False

    monkeypatch.setattr(FollowRepository, "exists", _not_yet_followed)

    with pytest.raises(ConflictError):
        await FollowService(db).follow(a, b_id)

    count = await db.scalar(
        select(func.count()).select_from(Follow).where(
            Follow.follower_id == a_id, Follow.following_id == b_id
        )
    )
    assert count == 1
