"""Comment moderation domain service.

A comment is Normal until FLAG_THRESHOLD distinct users flag it, at which
point it becomes Flagged and disappears for regular viewers. Further flags
keep counting. Only a moderator's unflag returns it to Normal, resetting
the count and clearing the flag ledger so anyone may flag it again.
"""

from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from memehub.domain.error import AlreadyFlaggedError, NotAuthorizedError, NotFoundError
from memehub.domain.model.comment import Comment
from memehub.domain.model.comment_flag import CommentFlag
from memehub.domain.model.common import utcnow
from memehub.domain.repository import CommentFlagRepository, CommentRepository
from memehub.domain.value import (
    FLAG_THRESHOLD,
    CommentFlagId,
    CommentId,
    UserId,
    Viewer,
)

from .base import Service, violated_constraint
from .comment_service import CommentPage

FLAG_UNIQUE_CONSTRAINT = "uq_comment_flag_comment_user"
FLAG_USER_FOREIGN_KEY = "comment_flags_user_id_fkey"


class ModerationService(Service):
    """Domain service for flagging and unflagging comments."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        comment_flag_repository: CommentFlagRepository,
    ) -> None:
        self.comment_repository = comment_repository
        self.comment_flag_repository = comment_flag_repository

    @staticmethod
    def _require_moderator(viewer: Viewer, action: str, resource_id: str) -> None:
        if not viewer.is_moderator:
            logfire.warn(
                "Moderator action refused",
                action=action,
                user_id=str(viewer.user_id),
            )
            raise NotAuthorizedError(action, "comment", resource_id, str(viewer.user_id))

    async def flag_comment(self, comment_id: CommentId, user_id: UserId) -> Comment:
        """Record a user's flag against a comment.

        Args:
            comment_id: Comment being flagged
            user_id: Flagging user

        Returns:
            The comment with its updated flag count and state

        Raises:
            NotFoundError: If the comment or the flagging user does not exist
            AlreadyFlaggedError: If this user already flagged this comment
        """
        with logfire.span(
            "moderation_service.flag_comment",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Flag on non-existent comment", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            existing = await self.comment_flag_repository.find_by_comment_and_user(
                comment_id, user_id
            )
            if existing:
                logfire.info(
                    "Comment already flagged by user",
                    comment_id=str(comment_id),
                    user_id=str(user_id),
                )
                raise AlreadyFlaggedError(str(comment_id), str(user_id))

            flag = CommentFlag(
                id=CommentFlagId(uuid4()),
                comment_id=comment_id,
                user_id=user_id,
                created_at=utcnow(),
            )
            try:
                await self.comment_flag_repository.save(flag)
            except IntegrityError as e:
                constraint = violated_constraint(e)
                if constraint == FLAG_UNIQUE_CONSTRAINT:
                    # Lost a race with a concurrent flag from the same user
                    raise AlreadyFlaggedError(str(comment_id), str(user_id)) from e
                if constraint == FLAG_USER_FOREIGN_KEY:
                    logfire.warn("Flag from unknown user", user_id=str(user_id))
                    raise NotFoundError("User", str(user_id)) from e
                raise

            updated = await self.comment_repository.increment_flag_count(
                comment_id, FLAG_THRESHOLD
            )
            if updated is None:
                raise NotFoundError("Comment", str(comment_id))

            if updated.flagged and not comment.flagged:
                logfire.warn(
                    "Comment hidden after reaching flag threshold",
                    comment_id=str(comment_id),
                    flag_count=updated.flag_count,
                )
            else:
                logfire.info(
                    "Comment flagged",
                    comment_id=str(comment_id),
                    flag_count=updated.flag_count,
                )
            return updated

    async def unflag_comment(self, comment_id: CommentId, moderator: Viewer) -> Comment:
        """Return a comment to the Normal state and clear its flags.

        Raises:
            NotAuthorizedError: If the requestor is not a moderator
            NotFoundError: If the comment does not exist
        """
        with logfire.span(
            "moderation_service.unflag_comment",
            comment_id=str(comment_id),
            moderator_id=str(moderator.user_id),
        ):
            self._require_moderator(moderator, "unflag", str(comment_id))

            updated = await self.comment_repository.reset_flags(comment_id)
            if updated is None:
                logfire.warn("Unflag on non-existent comment", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            removed = await self.comment_flag_repository.delete_by_comment(comment_id)
            logfire.info(
                "Comment unflagged",
                comment_id=str(comment_id),
                flags_removed=removed,
            )
            return updated

    async def list_flagged(
        self, viewer: Viewer, limit: int = 20, offset: int = 0
    ) -> CommentPage:
        """List flagged comments across all memes, most-flagged first.

        Raises:
            NotAuthorizedError: If the viewer is not a moderator
        """
        with logfire.span(
            "moderation_service.list_flagged", limit=limit, offset=offset
        ):
            self._require_moderator(viewer, "list flagged", "*")

            comments = await self.comment_repository.find_flagged(
                limit=limit, offset=offset
            )
            total = await self.comment_repository.count_flagged()
            return CommentPage(comments=comments, total=total)
