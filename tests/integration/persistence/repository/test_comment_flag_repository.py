"""Integration tests for PostgresCommentFlagRepository."""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from memehub.domain.model import CommentFlag
from memehub.domain.repository import (
    CommentFlagRepository,
    CommentRepository,
    MemeRepository,
    UserRepository,
)
from memehub.domain.service.base import violated_constraint
from memehub.domain.value import CommentFlagId, UserId
from tests.conftest import make_comment, make_meme, make_user


def _flag(comment_id, user_id) -> CommentFlag:
    return CommentFlag(
        id=CommentFlagId(uuid4()), comment_id=comment_id, user_id=user_id
    )


async def _seed(env):
    user_repo = await env.get(UserRepository)
    meme_repo = await env.get(MemeRepository)
    comment_repo = await env.get(CommentRepository)
    author = make_user("author")
    flagger = make_user("flagger")
    await user_repo.save(author)
    await user_repo.save(flagger)
    meme = make_meme(author.id)
    await meme_repo.save(meme)
    comment = make_comment(meme.id, author.id)
    await comment_repo.save(comment)
    return comment, flagger


class TestCommentFlagRepositoryIntegration:
    @pytest.mark.asyncio
    async def test_repeat_flag_violates_unique_constraint(self, integration_env):
        # Arrange
        flag_repo = await integration_env.get(CommentFlagRepository)
        comment, flagger = await _seed(integration_env)
        await flag_repo.save(_flag(comment.id, flagger.id))

        # Act & Assert
        with pytest.raises(IntegrityError) as excinfo:
            await flag_repo.save(_flag(comment.id, flagger.id))

        assert violated_constraint(excinfo.value) == "uq_comment_flag_comment_user"
        assert await flag_repo.find_by_comment_and_user(comment.id, flagger.id)

    @pytest.mark.asyncio
    async def test_flag_from_unknown_user_violates_foreign_key(self, integration_env):
        flag_repo = await integration_env.get(CommentFlagRepository)
        comment, _ = await _seed(integration_env)

        with pytest.raises(IntegrityError) as excinfo:
            await flag_repo.save(_flag(comment.id, UserId(uuid4())))

        assert violated_constraint(excinfo.value) == "comment_flags_user_id_fkey"

    @pytest.mark.asyncio
    async def test_delete_by_comment_and_batch_lookup(self, integration_env):
        # Arrange
        flag_repo = await integration_env.get(CommentFlagRepository)
        comment, flagger = await _seed(integration_env)
        await flag_repo.save(_flag(comment.id, flagger.id))

        # Act & Assert
        assert await flag_repo.find_comment_ids_flagged_by_user(
            flagger.id, [comment.id]
        ) == [comment.id]
        assert await flag_repo.delete_by_comment(comment.id) == 1
        assert await flag_repo.find_by_comment_and_user(comment.id, flagger.id) is None
