"""Unit tests for RemoveVoteUseCase."""

import pytest

from memehub.application.usecase.vote import (
    CastVoteRequest,
    CastVoteUseCase,
    RemoveVoteRequest,
    RemoveVoteUseCase,
)
from memehub.domain.error import NotFoundError
from memehub.domain.repository import MemeRepository, VoteRepository
from memehub.domain.value import VoteAction
from tests.conftest import make_meme, seed_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestRemoveVoteUseCase:
    """Tests for RemoveVoteUseCase."""

    @pytest.mark.asyncio
    async def test_removes_downvote(self, unit_env):
        # Arrange
        cast = await unit_env.get(CastVoteUseCase)
        use_case = await unit_env.get(RemoveVoteUseCase)
        meme_repo = await unit_env.get(MemeRepository)
        vote_repo = await unit_env.get(VoteRepository)
        voter = await seed_user(unit_env, "voter")
        meme = make_meme(voter.id, votes=0)
        await meme_repo.save(meme)
        await cast.execute(
            CastVoteRequest(meme_id=str(meme.id), user_id=str(voter.id), value=-1)
        )

        # Act
        response = await use_case.execute(
            RemoveVoteRequest(meme_id=str(meme.id), user_id=str(voter.id))
        )

        # Assert
        assert response.action == VoteAction.REMOVED
        assert response.value is None
        assert response.votes == 0
        assert response.message == "Vote removed successfully"
        assert await vote_repo.find_by_meme_and_user(meme.id, voter.id) is None

    @pytest.mark.asyncio
    async def test_nothing_to_remove_raises_not_found(self, unit_env):
        use_case = await unit_env.get(RemoveVoteUseCase)
        meme_repo = await unit_env.get(MemeRepository)
        voter = await seed_user(unit_env, "voter")
        meme = make_meme(voter.id)
        await meme_repo.save(meme)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                RemoveVoteRequest(meme_id=str(meme.id), user_id=str(voter.id))
            )
