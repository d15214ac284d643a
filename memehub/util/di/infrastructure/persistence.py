"""Persistence providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from memehub.config import Settings
from memehub.domain.repository import (
    CommentFlagRepository,
    CommentRepository,
    MemeRepository,
    UserRepository,
    VoteRepository,
)
from memehub.persistence.database import create_engine, create_session_factory
from memehub.persistence.error import StorageUnavailableError
from memehub.persistence.repository import (
    PostgresCommentFlagRepository,
    PostgresCommentRepository,
    PostgresMemeRepository,
    PostgresUserRepository,
    PostgresVoteRepository,
)
from memehub.util.di.base import ProviderBase
from memehub.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Swappable persistence component: provides the five repositories."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL repositories sharing one session per request."""

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        engine = create_engine(settings.database, echo=settings.debug)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """One transaction per request.

        Committed when the request scope closes cleanly, rolled back when
        the handler raised. A dropped connection surfaces as
        StorageUnavailableError (503).
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except OperationalError as e:
                logfire.error("Database unavailable", error=str(e))
                await session.rollback()
                raise StorageUnavailableError(str(e)) from e
            except Exception as e:
                logfire.warn(
                    "Request transaction rolled back",
                    error=str(e),
                    error_type=type(e).__name__,
                )
                await session.rollback()
                raise

    users = provide(PostgresUserRepository, provides=UserRepository, scope=Scope.REQUEST)
    memes = provide(PostgresMemeRepository, provides=MemeRepository, scope=Scope.REQUEST)
    votes = provide(PostgresVoteRepository, provides=VoteRepository, scope=Scope.REQUEST)
    comments = provide(
        PostgresCommentRepository, provides=CommentRepository, scope=Scope.REQUEST
    )
    comment_flags = provide(
        PostgresCommentFlagRepository,
        provides=CommentFlagRepository,
        scope=Scope.REQUEST,
    )
