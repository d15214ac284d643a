"""Integration tests for PostgresCommentRepository.

The flag threshold is applied inside a single UPDATE, so these run it
against PostgreSQL rather than trusting the in-memory double.
"""

from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from memehub.domain.repository import (
    CommentRepository,
    MemeRepository,
    UserRepository,
)
from memehub.domain.service.base import violated_constraint
from memehub.domain.value import FLAG_THRESHOLD, CommentId, UserId
from tests.conftest import make_comment, make_meme, make_user


async def _seed(env):
    user_repo = await env.get(UserRepository)
    meme_repo = await env.get(MemeRepository)
    author = make_user("author")
    await user_repo.save(author)
    meme = make_meme(author.id)
    await meme_repo.save(meme)
    return meme, author


class TestCommentRepositoryIntegration:
    @pytest.mark.asyncio
    async def test_increment_flag_count_sets_flagged_at_threshold(
        self, integration_env
    ):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        meme, author = await _seed(integration_env)
        comment = make_comment(meme.id, author.id)
        await comment_repo.save(comment)

        # Act
        states = []
        for _ in range(FLAG_THRESHOLD + 1):
            updated = await comment_repo.increment_flag_count(
                comment.id, FLAG_THRESHOLD
            )
            states.append((updated.flag_count, updated.flagged))

        # Assert
        assert states == [(1, False), (2, False), (3, True), (4, True)]

    @pytest.mark.asyncio
    async def test_flagged_stays_flagged_below_threshold(self, integration_env):
        """``flagged`` is sticky: only a reset clears it."""
        comment_repo = await integration_env.get(CommentRepository)
        meme, author = await _seed(integration_env)
        comment = make_comment(meme.id, author.id, flag_count=0, flagged=True)
        await comment_repo.save(comment)

        updated = await comment_repo.increment_flag_count(comment.id, FLAG_THRESHOLD)

        assert updated.flag_count == 1
        assert updated.flagged is True

    @pytest.mark.asyncio
    async def test_reset_flags(self, integration_env):
        comment_repo = await integration_env.get(CommentRepository)
        meme, author = await _seed(integration_env)
        comment = make_comment(meme.id, author.id, flag_count=5, flagged=True)
        await comment_repo.save(comment)

        reset = await comment_repo.reset_flags(comment.id)

        assert (reset.flag_count, reset.flagged) == (0, False)
        assert await comment_repo.count_flagged() == 0

    @pytest.mark.asyncio
    async def test_increment_on_missing_comment_returns_none(self, integration_env):
        comment_repo = await integration_env.get(CommentRepository)

        assert (
            await comment_repo.increment_flag_count(CommentId(uuid4()), FLAG_THRESHOLD)
            is None
        )

    @pytest.mark.asyncio
    async def test_viewer_and_moderator_ordering(self, integration_env):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        meme, author = await _seed(integration_env)
        old = make_comment(meme.id, author.id, "old", age=timedelta(hours=3))
        new = make_comment(meme.id, author.id, "new", age=timedelta(hours=1))
        hidden = make_comment(
            meme.id,
            author.id,
            "rude",
            flag_count=4,
            flagged=True,
            age=timedelta(hours=2),
        )
        for comment in (old, new, hidden):
            await comment_repo.save(comment)

        # Act
        visible = await comment_repo.find_by_meme(meme.id)
        everything = await comment_repo.find_by_meme(meme.id, include_flagged=True)

        # Assert
        assert [c.id for c in visible] == [new.id, old.id]
        assert [c.id for c in everything] == [hidden.id, new.id, old.id]
        assert await comment_repo.count_by_meme(meme.id) == 2
        assert await comment_repo.count_by_meme(meme.id, include_flagged=True) == 3

    @pytest.mark.asyncio
    async def test_comment_from_unknown_user_violates_foreign_key(
        self, integration_env
    ):
        comment_repo = await integration_env.get(CommentRepository)
        meme, _ = await _seed(integration_env)

        with pytest.raises(IntegrityError) as excinfo:
            await comment_repo.save(make_comment(meme.id, UserId(uuid4())))

        assert violated_constraint(excinfo.value) == "comments_creator_id_fkey"
