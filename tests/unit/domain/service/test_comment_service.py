"""Unit tests for CommentService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from memehub.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from memehub.domain.repository import (
    CommentFlagRepository,
    CommentRepository,
    MemeRepository,
)
from memehub.domain.service import CommentService, ModerationService
from memehub.domain.value import CommentId, MemeId, UserId, UserRole, Viewer
from tests.conftest import make_comment, make_meme, seed_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _seed_meme(env):
    creator = await seed_user(env, "creator")
    meme_repo = await env.get(MemeRepository)
    meme = make_meme(creator.id)
    await meme_repo.save(meme)
    return meme


class TestCreateComment:
    """Tests for create_comment."""

    @pytest.mark.asyncio
    async def test_create_comment_increments_comment_count(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        meme_repo = await unit_env.get(MemeRepository)
        meme = await _seed_meme(unit_env)
        author = await seed_user(unit_env, "author")

        # Act
        comment = await comment_service.create_comment(
            meme.id, author.id, "  this one is gold  "
        )

        # Assert
        assert comment.text == "this one is gold"
        assert comment.flag_count == 0
        assert comment.flagged is False
        assert (await meme_repo.find_by_id(meme.id)).comment_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", "x" * 141])
    async def test_invalid_text_is_rejected(self, unit_env, text):
        comment_service = await unit_env.get(CommentService)
        meme = await _seed_meme(unit_env)

        with pytest.raises(ValidationError):
            await comment_service.create_comment(meme.id, UserId(uuid4()), text)

    @pytest.mark.asyncio
    async def test_exactly_140_characters_is_accepted(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        meme = await _seed_meme(unit_env)

        author = await seed_user(unit_env, "author")

        comment = await comment_service.create_comment(meme.id, author.id, "x" * 140)

        assert len(comment.text) == 140

    @pytest.mark.asyncio
    async def test_comment_on_missing_meme_raises_not_found(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.create_comment(MemeId(uuid4()), UserId(uuid4()), "hi")

    @pytest.mark.asyncio
    async def test_unregistered_author_raises_not_found(self, unit_env):
        """No comment is stored and the counter stays put."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        meme_repo = await unit_env.get(MemeRepository)
        meme = await _seed_meme(unit_env)

        # Act & Assert
        with pytest.raises(NotFoundError) as excinfo:
            await comment_service.create_comment(meme.id, UserId(uuid4()), "hi")

        assert excinfo.value.resource == "User"
        assert (await meme_repo.find_by_id(meme.id)).comment_count == 0


class TestListComments:
    """Tests for visibility and ordering of list_comments."""

    async def _seed_thread(self, env):
        comment_repo = await env.get(CommentRepository)
        meme = await _seed_meme(env)
        author = (await seed_user(env, "author")).id
        old = make_comment(meme.id, author, "old", age=timedelta(hours=3))
        new = make_comment(meme.id, author, "new", age=timedelta(hours=1))
        hidden = make_comment(
            meme.id, author, "rude", flag_count=4, flagged=True, age=timedelta(hours=2)
        )
        for comment in (old, new, hidden):
            await comment_repo.save(comment)
        return meme, old, new, hidden

    @pytest.mark.asyncio
    async def test_regular_viewer_sees_unflagged_newest_first(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        meme, old, new, _ = await self._seed_thread(unit_env)

        # Act
        page = await comment_service.list_comments(
            meme.id, Viewer(user_id=UserId(uuid4()))
        )

        # Assert
        assert [c.id for c in page.comments] == [new.id, old.id]
        assert page.total == 2

    @pytest.mark.asyncio
    async def test_anonymous_viewer_never_sees_flagged(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        meme, _, _, hidden = await self._seed_thread(unit_env)

        page = await comment_service.list_comments(meme.id, Viewer())

        assert hidden.id not in [c.id for c in page.comments]

    @pytest.mark.asyncio
    async def test_moderator_sees_all_most_flagged_first(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        meme, old, new, hidden = await self._seed_thread(unit_env)
        moderator = Viewer(user_id=UserId(uuid4()), role=UserRole.MODERATOR)

        # Act
        page = await comment_service.list_comments(meme.id, moderator)

        # Assert
        assert [c.id for c in page.comments] == [hidden.id, new.id, old.id]
        assert page.total == 3

    @pytest.mark.asyncio
    async def test_reports_which_comments_viewer_flagged(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        moderation_service = await unit_env.get(ModerationService)
        meme, old, new, _ = await self._seed_thread(unit_env)
        viewer_id = (await seed_user(unit_env, "viewer")).id
        await moderation_service.flag_comment(old.id, viewer_id)

        # Act
        page = await comment_service.list_comments(meme.id, Viewer(user_id=viewer_id))

        # Assert
        assert page.flagged_by_viewer == {old.id}


class TestDeleteComment:
    """Tests for delete_comment permissions and side effects."""

    async def _seed(self, env):
        comment_service = await env.get(CommentService)
        meme = await _seed_meme(env)
        author = (await seed_user(env, "author")).id
        comment = await comment_service.create_comment(meme.id, author, "first")
        return meme, author, comment

    @pytest.mark.asyncio
    async def test_creator_can_delete(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        meme_repo = await unit_env.get(MemeRepository)
        meme, author, comment = await self._seed(unit_env)

        # Act
        await comment_service.delete_comment(comment.id, Viewer(user_id=author))

        # Assert
        assert await comment_repo.find_by_id(comment.id) is None
        assert (await meme_repo.find_by_id(meme.id)).comment_count == 0

    @pytest.mark.asyncio
    async def test_moderator_can_delete_and_flags_go_too(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        moderation_service = await unit_env.get(ModerationService)
        flag_repo = await unit_env.get(CommentFlagRepository)
        _, _, comment = await self._seed(unit_env)
        flagger = await seed_user(unit_env, "flagger")
        await moderation_service.flag_comment(comment.id, flagger.id)
        moderator = Viewer(user_id=UserId(uuid4()), role=UserRole.MODERATOR)

        # Act
        await comment_service.delete_comment(comment.id, moderator)

        # Assert
        assert await flag_repo.find_by_comment_and_user(comment.id, flagger.id) is None

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        _, _, comment = await self._seed(unit_env)

        # Act & Assert
        with pytest.raises(NotAuthorizedError):
            await comment_service.delete_comment(
                comment.id, Viewer(user_id=UserId(uuid4()))
            )
        assert await comment_repo.find_by_id(comment.id) is not None

    @pytest.mark.asyncio
    async def test_comment_count_never_negative(self, unit_env):
        """Deleting when the counter already reads zero leaves it at zero."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        meme_repo = await unit_env.get(MemeRepository)
        meme, author, comment = await self._seed(unit_env)
        await meme_repo.decrement_comment_count(meme.id)

        # Act
        await comment_service.delete_comment(comment.id, Viewer(user_id=author))

        # Assert
        assert (await meme_repo.find_by_id(meme.id)).comment_count == 0

    @pytest.mark.asyncio
    async def test_delete_missing_comment_raises_not_found(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.delete_comment(
                CommentId(uuid4()), Viewer(user_id=UserId(uuid4()))
            )
