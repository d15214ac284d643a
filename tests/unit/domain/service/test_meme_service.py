"""Unit tests for MemeService."""

from datetime import timedelta
from uuid import uuid4

import pydantic
import pytest

from memehub.domain.error import NotAuthorizedError, NotFoundError
from memehub.domain.repository import MemeRepository
from memehub.domain.service import MemeService
from memehub.domain.value import (
    MemeId,
    MemeSort,
    MemeStatus,
    SortDirection,
    UserId,
)
from tests.conftest import make_meme, seed_creators, seed_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _seed(env, *memes):
    await seed_creators(env, *memes)
    meme_repo = await env.get(MemeRepository)
    for meme in memes:
        await meme_repo.save(meme)


class TestCreateMeme:
    """Tests for create_meme."""

    @pytest.mark.asyncio
    async def test_create_meme_defaults(self, unit_env):
        # Arrange
        meme_service = await unit_env.get(MemeService)
        creator_id = (await seed_user(unit_env, "creator")).id

        # Act
        meme = await meme_service.create_meme(
            creator_id=creator_id,
            title="Drake",
            image_url="https://img.example.com/drake.png",
        )

        # Assert
        assert meme.status == MemeStatus.DRAFT
        assert meme.votes == 0
        assert meme.views == 0
        assert meme.comment_count == 0
        assert meme.original_image_url == meme.image_url
        assert meme.text_color.root == "#FFFFFF"
        assert meme.font_size == 32

    @pytest.mark.asyncio
    async def test_template_must_exist(self, unit_env):
        meme_service = await unit_env.get(MemeService)

        with pytest.raises(NotFoundError):
            await meme_service.create_meme(
                creator_id=UserId(uuid4()),
                title="Remix",
                image_url="https://img.example.com/x.png",
                is_template_of=MemeId(uuid4()),
            )

    @pytest.mark.asyncio
    async def test_unregistered_creator_raises_not_found(self, unit_env):
        meme_service = await unit_env.get(MemeService)

        with pytest.raises(NotFoundError) as excinfo:
            await meme_service.create_meme(
                creator_id=UserId(uuid4()),
                title="Drake",
                image_url="https://img.example.com/drake.png",
            )

        assert excinfo.value.resource == "User"

    @pytest.mark.asyncio
    async def test_invalid_color_is_rejected(self, unit_env):
        meme_service = await unit_env.get(MemeService)

        with pytest.raises(pydantic.ValidationError):
            await meme_service.create_meme(
                creator_id=UserId(uuid4()),
                title="Bad colour",
                image_url="https://img.example.com/x.png",
                text_color="white",
            )


class TestListPublished:
    """Tests for list_published sorting and filtering."""

    @pytest.mark.asyncio
    async def test_drafts_never_listed(self, unit_env):
        # Arrange
        meme_service = await unit_env.get(MemeService)
        creator_id = UserId(uuid4())
        published = make_meme(creator_id, title="Live")
        draft = make_meme(creator_id, title="Draft", status=MemeStatus.DRAFT)
        await _seed(unit_env, published, draft)

        # Act
        page = await meme_service.list_published()

        # Assert
        assert [m.id for m in page.memes] == [published.id]
        assert page.total == 1

    @pytest.mark.asyncio
    async def test_default_sort_is_newest_first(self, unit_env):
        meme_service = await unit_env.get(MemeService)
        creator_id = UserId(uuid4())
        older = make_meme(creator_id, age=timedelta(hours=5))
        newer = make_meme(creator_id, age=timedelta(hours=1))
        await _seed(unit_env, older, newer)

        page = await meme_service.list_published()

        assert [m.id for m in page.memes] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_sort_by_votes_ascending(self, unit_env):
        meme_service = await unit_env.get(MemeService)
        creator_id = UserId(uuid4())
        low = make_meme(creator_id, votes=-2)
        high = make_meme(creator_id, votes=7)
        await _seed(unit_env, high, low)

        page = await meme_service.list_published(
            sort=MemeSort.VOTES, direction=SortDirection.ASC
        )

        assert [m.id for m in page.memes] == [low.id, high.id]

    @pytest.mark.asyncio
    async def test_sort_by_views(self, unit_env):
        meme_service = await unit_env.get(MemeService)
        creator_id = UserId(uuid4())
        quiet = make_meme(creator_id, views=3)
        viral = make_meme(creator_id, views=300)
        await _seed(unit_env, quiet, viral)

        page = await meme_service.list_published(sort=MemeSort.VIEWS)

        assert [m.id for m in page.memes] == [viral.id, quiet.id]

    @pytest.mark.asyncio
    async def test_top_day_only_counts_last_day(self, unit_env):
        """An old meme with more votes loses to a fresh one on top-day."""
        # Arrange
        meme_service = await unit_env.get(MemeService)
        creator_id = UserId(uuid4())
        today = make_meme(creator_id, votes=5, age=timedelta(hours=2))
        last_week = make_meme(creator_id, votes=50, age=timedelta(days=3))
        ancient = make_meme(creator_id, votes=500, age=timedelta(days=30))
        await _seed(unit_env, today, last_week, ancient)

        # Act
        day = await meme_service.list_published(sort=MemeSort.TOP_DAY)
        week = await meme_service.list_published(sort=MemeSort.TOP_WEEK)

        # Assert
        assert [m.id for m in day.memes] == [today.id]
        assert day.total == 1
        assert [m.id for m in week.memes] == [last_week.id, today.id]
        assert week.total == 2

    @pytest.mark.asyncio
    async def test_pagination(self, unit_env):
        meme_service = await unit_env.get(MemeService)
        creator_id = UserId(uuid4())
        memes = [make_meme(creator_id, age=timedelta(minutes=i)) for i in range(5)]
        await _seed(unit_env, *memes)

        page = await meme_service.list_published(limit=2, offset=2)

        assert [m.id for m in page.memes] == [memes[2].id, memes[3].id]
        assert page.total == 5


class TestListByCreator:
    """Tests for list_by_creator."""

    @pytest.mark.asyncio
    async def test_status_filter(self, unit_env):
        meme_service = await unit_env.get(MemeService)
        creator_id = UserId(uuid4())
        published = make_meme(creator_id)
        draft = make_meme(creator_id, status=MemeStatus.DRAFT)
        other = make_meme(UserId(uuid4()))
        await _seed(unit_env, published, draft, other)

        everything = await meme_service.list_by_creator(creator_id)
        drafts = await meme_service.list_by_creator(creator_id, MemeStatus.DRAFT)

        assert {m.id for m in everything.memes} == {published.id, draft.id}
        assert [m.id for m in drafts.memes] == [draft.id]


class TestRecordView:
    @pytest.mark.asyncio
    async def test_record_view_increments(self, unit_env):
        meme_service = await unit_env.get(MemeService)
        meme = make_meme(UserId(uuid4()), views=4)
        await _seed(unit_env, meme)

        viewed = await meme_service.record_view(meme.id)

        assert viewed.views == 5


class TestUpdateMeme:
    """Tests for update_meme ownership and field handling."""

    @pytest.mark.asyncio
    async def test_owner_can_publish_draft(self, unit_env):
        # Arrange
        meme_service = await unit_env.get(MemeService)
        creator_id = UserId(uuid4())
        draft = make_meme(creator_id, status=MemeStatus.DRAFT, votes=3)
        await _seed(unit_env, draft)

        # Act
        updated = await meme_service.update_meme(
            draft.id,
            creator_id,
            {"status": MemeStatus.PUBLISHED, "title": "Ready", "votes": 999},
        )

        # Assert
        assert updated.status == MemeStatus.PUBLISHED
        assert updated.title == "Ready"
        assert updated.votes == 3

    @pytest.mark.asyncio
    async def test_non_owner_cannot_update(self, unit_env):
        meme_service = await unit_env.get(MemeService)
        meme = make_meme(UserId(uuid4()))
        await _seed(unit_env, meme)

        with pytest.raises(NotAuthorizedError):
            await meme_service.update_meme(meme.id, UserId(uuid4()), {"title": "Mine"})

    @pytest.mark.asyncio
    async def test_update_missing_meme_raises_not_found(self, unit_env):
        meme_service = await unit_env.get(MemeService)

        with pytest.raises(NotFoundError):
            await meme_service.update_meme(MemeId(uuid4()), UserId(uuid4()), {})
