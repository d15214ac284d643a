"""Unit tests for ListUserMemesUseCase."""

from uuid import uuid4

import pytest

from memehub.application.usecase.meme import (
    ListUserMemesRequest,
    ListUserMemesUseCase,
)
from memehub.domain.error import NotFoundError
from memehub.domain.repository import MemeRepository, UserRepository
from memehub.domain.value import MemeStatus
from tests.conftest import make_meme, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _seed(env):
    user_repo = await env.get(UserRepository)
    meme_repo = await env.get(MemeRepository)
    owner = make_user("owner")
    await user_repo.save(owner)
    published = make_meme(owner.id, title="Out there")
    draft = make_meme(owner.id, title="Work in progress", status=MemeStatus.DRAFT)
    await meme_repo.save(published)
    await meme_repo.save(draft)
    return owner, published, draft


class TestListUserMemesUseCase:
    """Drafts are only visible to the person who made them."""

    @pytest.mark.asyncio
    async def test_owner_sees_drafts(self, unit_env):
        use_case = await unit_env.get(ListUserMemesUseCase)
        owner, published, draft = await _seed(unit_env)

        response = await use_case.execute(
            ListUserMemesRequest(creator_id=str(owner.id), viewer_id=str(owner.id))
        )

        assert {m.meme_id for m in response.memes} == {str(published.id), str(draft.id)}

    @pytest.mark.asyncio
    async def test_owner_can_filter_to_drafts(self, unit_env):
        use_case = await unit_env.get(ListUserMemesUseCase)
        owner, _, draft = await _seed(unit_env)

        response = await use_case.execute(
            ListUserMemesRequest(
                creator_id=str(owner.id),
                viewer_id=str(owner.id),
                status=MemeStatus.DRAFT,
            )
        )

        assert [m.meme_id for m in response.memes] == [str(draft.id)]

    @pytest.mark.asyncio
    async def test_other_viewer_never_sees_drafts(self, unit_env):
        """Even asking for drafts explicitly returns only published memes."""
        # Arrange
        use_case = await unit_env.get(ListUserMemesUseCase)
        owner, published, _ = await _seed(unit_env)

        # Act
        anonymous = await use_case.execute(
            ListUserMemesRequest(creator_id=str(owner.id), status=MemeStatus.DRAFT)
        )
        stranger = await use_case.execute(
            ListUserMemesRequest(creator_id=str(owner.id), viewer_id=str(uuid4()))
        )

        # Assert
        assert [m.meme_id for m in anonymous.memes] == [str(published.id)]
        assert [m.meme_id for m in stranger.memes] == [str(published.id)]
        assert stranger.memes[0].creator.name == owner.name

    @pytest.mark.asyncio
    async def test_unknown_creator_raises_not_found(self, unit_env):
        use_case = await unit_env.get(ListUserMemesUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(ListUserMemesRequest(creator_id=str(uuid4())))
