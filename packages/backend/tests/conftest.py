"""Test fixtures — a fresh in-memory database per test.

Learn: each test gets its own SQLite engine (aiosqlite + StaticPool so the
single in-memory database survives across connections), with the schema
created from the ORM models. The app's get_db is overridden to hand out a
session on that engine, so tests never touch a real PostgreSQL server.

Authentication is NOT mocked. Tests register real users and send the
tokens the app issued, so the whole resolver → guard path is exercised.
"""

import os

os.environ.setdefault("BAZAAR_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("BAZAAR_BCRYPT_ROUNDS", "4")
os.environ.setdefault("BAZAAR_JWT_SECRET", "test-secret-not-for-production")

import uuid

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from bazaar.db.engine import get_db
from bazaar.db.models import Base
from bazaar.main import app


@pytest_asyncio.fixture()
async def db_session():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session = AsyncSession(engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()


@pytest_asyncio.fixture()
async def client(db_session):
    """HTTP client with the app's get_db pointed at the test database."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ─── Helpers ────────────────────────────────────────────


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def register_user(
    client: AsyncClient,
    username: str | None = None,
    password: str = "password_123",
    **extra,
) -> tuple[str, dict]:
    """Register a user and return (token, user).

    The client's cookie jar is cleared afterwards so later requests only
    carry the credentials a test passes explicitly.
    """
    username = username or f"user-{uuid.uuid4().hex[:8]}"
    body = {
        "username": username,
        "email": f"{username}@example.com",
        "password": password,
        **extra,
    }
    r = await client.post("/api/auth/register", json=body)
    assert r.status_code == 201, r.text
    client.cookies.clear()
    data = r.json()
    return data["token"], data["user"]


@pytest_asyncio.fixture()
async def alice(client):
    token, user = await register_user(client, "alice")
    return {"token": token, "user": user, "headers": bearer(token)}


@pytest_asyncio.fixture()
async def bob(client):
    token, user = await register_user(client, "bob")
    return {"token": token, "user": user, "headers": bearer(token)}


@pytest_asyncio.fixture()
async def community(client, alice):
    r = await client.post(
        "/api/communities",
        json={"name": "Makers", "description": "Handmade goods"},
        headers=alice["headers"],
    )
    assert r.status_code == 201, r.text
    return r.json()
