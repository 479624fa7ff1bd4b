"""Async SQLAlchemy engine and session factory.

Learn: one engine per process; each request gets its own AsyncSession
through the get_db dependency. Tests override get_db with a session bound
to an in-memory SQLite engine.

PostgreSQL (asyncpg) gets a sized pool with pre-ping, so a connection the
server dropped while idle is replaced instead of failing the next request.
SQLite is only used for local runs and tests; it gets foreign keys switched
on so post_likes → community_posts cascades behave as they do on Postgres.
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from bazaar.config import settings


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def build_engine(url: str) -> AsyncEngine:
    if _is_sqlite(url):
        new_engine = create_async_engine(url, echo=settings.debug)

        @event.listens_for(new_engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return new_engine

    return create_async_engine(
        url,
        echo=settings.debug,
        pool_size=5,
        max_overflow=15,
        pool_pre_ping=True,
    )


engine = build_engine(settings.database_url)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncSession:
    """FastAPI dependency: one session per request, always closed."""
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
