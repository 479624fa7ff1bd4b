"""Repository — unique violations report the field group that collided."""

import uuid

import pytest
from sqlalchemy import text

from bazaar.db.engine import build_engine
from bazaar.db.models import Community, CommunityPost, PostLike, Store, User
from bazaar.db.repository import Repository
from bazaar.errors import UniqueConstraintViolation


async def _user(db, username: str, **extra) -> User:
    return await Repository(db, User).create(
        username=username,
        email=f"{username}@example.com",
        password_hash="x",
        **extra,
    )


@pytest.mark.asyncio
async def test_create_and_find_unique(db_session):
    user = await _user(db_session, "carol")
    await db_session.commit()

    found = await Repository(db_session, User).find_unique(username="carol")
    assert found is not None
    assert found.id == user.id


@pytest.mark.asyncio
async def test_find_unique_miss_returns_none(db_session):
    assert await Repository(db_session, User).find_unique(id=uuid.uuid4()) is None


@pytest.mark.asyncio
async def test_find_many_empty(db_session):
    assert await Repository(db_session, User).find_many() == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "clash,field_group",
    [
        ({"username": "dave", "email": "other@example.com"}, ("username",)),
        ({"username": "other", "email": "dave@example.com"}, ("email",)),
        (
            {"username": "other", "email": "other@example.com", "phone": "555"},
            ("phone",),
        ),
    ],
)
async def test_single_column_violation(db_session, clash, field_group):
    await _user(db_session, "dave", phone="555")
    await db_session.commit()

    with pytest.raises(UniqueConstraintViolation) as exc:
        await Repository(db_session, User).create(password_hash="x", **clash)
    assert exc.value.field_group == field_group
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_store_violations_distinguish_name_and_owner(db_session):
    # Ids captured up front: a failed flush rolls back and expires instances.
    erin_id = (await _user(db_session, "erin")).id
    frank_id = (await _user(db_session, "frank")).id
    stores = Repository(db_session, Store)
    await stores.create(owner_id=erin_id, name="Shop")
    await db_session.commit()

    with pytest.raises(UniqueConstraintViolation) as exc:
        await stores.create(owner_id=frank_id, name="Shop")
    assert exc.value.field_group == ("name",)

    with pytest.raises(UniqueConstraintViolation) as exc:
        await stores.create(owner_id=erin_id, name="Another")
    assert exc.value.field_group == ("owner_id",)


@pytest.mark.asyncio
async def test_compound_like_violation(db_session):
    user = await _user(db_session, "gina")
    community = await Repository(db_session, Community).create(
        owner_id=user.id, name="Potters", description=""
    )
    post = await Repository(db_session, CommunityPost).create(
        community_id=community.id,
        user_id=user.id,
        title="Kiln",
        content="Fired today",
    )
    likes = Repository(db_session, PostLike)
    await likes.create(post_id=post.id, user_id=user.id)
    await db_session.commit()

    with pytest.raises(UniqueConstraintViolation) as exc:
        await likes.create(post_id=post.id, user_id=user.id)
    assert exc.value.field_group == ("post_id", "user_id")
    assert exc.value.details == {"fields": ["post_id", "user_id"]}


@pytest.mark.asyncio
async def test_sqlite_engine_enforces_foreign_keys():
    engine = build_engine("sqlite+aiosqlite://")
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("PRAGMA foreign_keys"))
            assert result.scalar_one() == 1
    finally:
        await engine.dispose()
