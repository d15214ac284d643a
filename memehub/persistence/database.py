"""Async engine and session factory for PostgreSQL (asyncpg driver)."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from memehub.config import DatabaseSettings


def create_engine(database: DatabaseSettings, echo: bool = False) -> AsyncEngine:
    """Create the process-wide engine; its pool is shared by all requests."""
    return create_async_engine(
        database.url,
        echo=echo,
        pool_pre_ping=database.pool_pre_ping,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Sessions for one request each.

    Objects stay usable after commit because responses are built from
    domain models, never from lazily loaded rows.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
