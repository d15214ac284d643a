"""Tests for the request-scoped database session provider.

The session factory is replaced with an in-process double, so these run
without a database while still going through the real dishka wiring.
"""

import pytest
from dishka import Provider, Scope, make_async_container, provide
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from memehub.config import Settings
from memehub.persistence.error import StorageUnavailableError
from memehub.util.di.infrastructure.persistence import ProdPersistenceProvider


class RecordingSession:
    """Session double that records how the transaction ended."""

    def __init__(self, commit_error: Exception | None = None) -> None:
        self.commit_error = commit_error
        self.committed = False
        self.rolled_back = False

    async def __aenter__(self) -> "RecordingSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None

    async def commit(self) -> None:
        if self.commit_error is not None:
            raise self.commit_error
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True


class RecordingSessionProvider(Provider):
    def __init__(self, session: RecordingSession) -> None:
        super().__init__()
        self.session = session

    @provide(scope=Scope.APP)
    def get_settings(self) -> Settings:
        return Settings()

    @provide(scope=Scope.APP)
    def get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        return lambda: self.session


def _raised(error: BaseException) -> list[BaseException]:
    """Errors from a scope exit, unwrapped from dishka's exception group."""
    return list(getattr(error, "exceptions", [error]))


async def _open_and_close_request(session: RecordingSession) -> None:
    container = make_async_container(
        ProdPersistenceProvider(), RecordingSessionProvider(session)
    )
    try:
        async with container() as request_container:
            assert await request_container.get(AsyncSession) is session
    finally:
        await container.close()


class TestGetSession:
    @pytest.mark.asyncio
    async def test_clean_request_commits(self):
        session = RecordingSession()

        await _open_and_close_request(session)

        assert session.committed is True
        assert session.rolled_back is False

    @pytest.mark.asyncio
    async def test_lost_connection_becomes_storage_unavailable(self):
        """A dropped connection on commit rolls back and reports a 503-class error."""
        # Arrange
        session = RecordingSession(
            commit_error=OperationalError("COMMIT", None, Exception("connection reset"))
        )

        # Act
        with pytest.raises(Exception) as excinfo:
            await _open_and_close_request(session)

        # Assert
        errors = _raised(excinfo.value)
        assert any(isinstance(e, StorageUnavailableError) for e in errors)
        unavailable = next(e for e in errors if isinstance(e, StorageUnavailableError))
        assert isinstance(unavailable.__cause__, OperationalError)
        assert "connection reset" in unavailable.detail
        assert session.rolled_back is True

    @pytest.mark.asyncio
    async def test_other_commit_failures_roll_back_and_propagate(self):
        # Arrange
        session = RecordingSession(
            commit_error=IntegrityError("COMMIT", None, Exception("deferred check"))
        )

        # Act
        with pytest.raises(Exception) as excinfo:
            await _open_and_close_request(session)

        # Assert
        errors = _raised(excinfo.value)
        assert any(isinstance(e, IntegrityError) for e in errors)
        assert not any(isinstance(e, StorageUnavailableError) for e in errors)
        assert session.rolled_back is True
