"""Unit tests for GetMemeUseCase."""

from uuid import uuid4

import pytest

from memehub.application.usecase.meme import GetMemeRequest, GetMemeUseCase
from memehub.domain.error import NotFoundError
from memehub.domain.repository import MemeRepository, UserRepository
from memehub.domain.service import VoteService
from tests.conftest import make_meme, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetMemeUseCase:
    @pytest.mark.asyncio
    async def test_view_counts_and_reports_viewer_vote(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetMemeUseCase)
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        meme_repo = await unit_env.get(MemeRepository)
        creator = make_user("creator")
        voter = make_user("voter")
        await user_repo.save(creator)
        await user_repo.save(voter)
        meme = make_meme(creator.id)
        await meme_repo.save(meme)
        await vote_service.cast_vote(meme.id, voter.id, -1)

        # Act
        as_voter = await use_case.execute(
            GetMemeRequest(meme_id=str(meme.id), user_id=str(voter.id))
        )
        anonymous = await use_case.execute(GetMemeRequest(meme_id=str(meme.id)))

        # Assert
        assert as_voter.user_vote == -1
        assert as_voter.votes == -1
        assert as_voter.creator.name == "creator"
        assert anonymous.user_vote is None
        assert anonymous.views == 2

    @pytest.mark.asyncio
    async def test_missing_meme_raises_not_found(self, unit_env):
        use_case = await unit_env.get(GetMemeUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetMemeRequest(meme_id=str(uuid4())))
