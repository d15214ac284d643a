"""Fixtures for tests against a real PostgreSQL database.

Point ``DATABASE__URL`` at a PostgreSQL instance and apply migrations with
``alembic upgrade head``. Without a reachable, migrated database every
integration test is skipped.
"""

import asyncio

import pytest
import pytest_asyncio
from sqlalchemy import inspect, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from memehub.config import Settings
from memehub.persistence.database import create_engine
from memehub.persistence.tables import metadata
from tests.harness import create_env_fixture

# Integration test fixture - real PostgreSQL
integration_env = create_env_fixture(unmock={"persistence"})


@pytest.fixture(scope="session")
def migrated_database() -> None:
    """Skip unless the configured database is up and has the schema."""

    async def _missing_tables() -> set[str]:
        engine = create_engine(Settings().database)
        try:
            async with engine.connect() as conn:
                existing = await conn.run_sync(
                    lambda sync_conn: set(inspect(sync_conn).get_table_names())
                )
        finally:
            await engine.dispose()
        return set(metadata.tables) - existing

    try:
        missing = asyncio.run(_missing_tables())
    except (OperationalError, OSError) as e:
        pytest.skip(f"PostgreSQL not reachable: {e}")

    if missing:
        pytest.skip(f"Schema not migrated, missing tables: {sorted(missing)}")


@pytest_asyncio.fixture(autouse=True)
async def clean_database(migrated_database, integration_env):
    """Clean database before each test."""
    session = await integration_env.get(AsyncSession)

    # CASCADE follows the foreign keys into every dependent table
    await session.execute(
        text("TRUNCATE TABLE comment_flags, comments, votes, memes, users CASCADE")
    )
    await session.commit()

    yield
    # No cleanup needed after test since next test will truncate
