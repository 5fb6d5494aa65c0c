import pytest
from sqlalchemy import select

from social_backend.models.reaction import Reaction, ReactionType
from social_backend.repositories.feed_repository import FeedRepository
from social_backend.services.feed_service import FeedService
from social_backend.services.reaction_service import ReactionService, next_state
from social_backend.utils.exceptions import ConflictError, NotFoundError

LIKE = ReactionType.LIKE
DISLIKE = ReactionType.DISLIKE


@pytest.mark.parametrize(
    "current, requested, expected",
    [
        (None, LIKE, LIKE),
        (None, DISLIKE, DISLIKE),
        (LIKE, LIKE, None),
        (LIKE, DISLIKE, DISLIKE),
        (DISLIKE, LIKE, LIKE),
        (DISLIKE, DISLIKE, None),
    ],
)
def test_next_state_table(current, requested, expected):
    assert next_state(current, requested) == expected


@pytest.fixture
async def feed_setup(db, make_user, storage):
    author = await make_user("author")
    reader = await make_user("reader")
    feed = await FeedService(db, storage).create_feed(author, "hello")
    return author, reader, feed


async def _rows(db, feed_id):
    result = await db.execute(select(Reaction).where(Reaction.feed_id == feed_id))
    return list(result.scalars().all())


@pytest.mark.parametrize(
    "first, second, expected",
    [
        (LIKE, LIKE, None),
        (LIKE, DISLIKE, DISLIKE),
        (DISLIKE, DISLIKE, None),
        (DISLIKE, LIKE, LIKE),
    ],
)
async def test_toggle_pairs(db, feed_setup, first, second, expected):
    _, reader, feed = feed_setup
    service = ReactionService(db)

    assert await service.toggle(reader, feed.id, first) == first
    assert await service.toggle(reader, feed.id, second) == expected

    rows = await _rows(db, feed.id)
    if expected is None:
        assert rows == []
    else:
        assert len(rows) == 1
        assert rows[0].reaction == expected.value


async def test_kind_change_keeps_created_at(db, feed_setup):
    _, reader, feed = feed_setup
    service = ReactionService(db)

    await service.toggle(reader, feed.id, LIKE)
    before = (await _rows(db, feed.id))[0]
    created_at, reaction_id = before.created_at, before.id

    await service.toggle(reader, feed.id, DISLIKE)
    after = (await _rows(db, feed.id))[0]
    assert after.id == reaction_id
    assert after.created_at == created_at


async def test_hello_scenario_ends_with_no_reactions(db, make_user, storage):
    u1 = await make_user("u1")
    u2 = await make_user("u2")
    feed = await FeedService(db, storage).create_feed(u1, "hello")
    service = ReactionService(db)

    assert await service.toggle(u2, feed.id, LIKE) == LIKE

    assert await service.toggle(u2, feed.id, DISLIKE) == DISLIKE
    rows = await _rows(db, feed.id)
    assert [r.reaction for r in rows] == ["dislike"]

    assert await service.toggle(u2, feed.id, DISLIKE) is None
    assert await service.counts(feed.id) == {"like": 0, "dislike": 0}
    assert await _rows(db, feed.id) == []


async def test_reactions_are_per_user(db, feed_setup):
    author, reader, feed = feed_setup
    service = ReactionService(db)

    await service.toggle(author, feed.id, LIKE)
    await service.toggle(reader, feed.id, DISLIKE)

    assert await service.counts(feed.id) == {"like": 1, "dislike": 1}


async def test_toggle_on_missing_feed(db, make_user):
    user = await make_user("lonely")
    with pytest.raises(NotFoundError):
        await ReactionService(db).toggle(user, 999, LIKE)


async def test_toggle_on_deleted_feed(db, feed_setup, storage):
    author, reader, feed = feed_setup
    await FeedService(db, storage).delete_feed(author, feed.id)
    with pytest.raises(NotFoundError):
        await ReactionService(db).toggle(reader, feed.id, LIKE)


async def test_insert_racing_other_session_conflicts(db, feed_setup, session_factory, monkeypatch):
    _, reader, feed = feed_setup
    feed_id, reader_id = feed.id, reader.id

    # 잠금 조회 시점에는 행이 없었지만 커밋 전에 다른 요청이 먼저 삽입한 상황
    async with session_factory() as other:
        other.add(Reaction(feed_id=feed_id, user_id=reader_id, reaction=LIKE.value))
        await other.commit()

    async def _nothing_locked(self, feed_id, user_id):
        return None

    monkeypatch.setattr(FeedRepository, "find_reaction_for_update", _nothing_locked)

    with pytest.raises(ConflictError):
        await ReactionService(db).toggle(reader, feed_id, DISLIKE)

    rows = await _rows(db, feed_id)
    assert len(rows) == 1
    assert rows[0].reaction == LIKE.value
