"""Comment domain service."""

from dataclasses import dataclass, field
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from memehub.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from memehub.domain.model.comment import Comment
from memehub.domain.model.common import utcnow
from memehub.domain.repository import CommentFlagRepository, CommentRepository
from memehub.domain.value import CommentId, MemeId, UserId, Viewer

from .base import Service, violated_constraint
from .meme_service import MemeService

MAX_COMMENT_LENGTH = 140
COMMENT_CREATOR_FOREIGN_KEY = "comments_creator_id_fkey"


@dataclass
class CommentPage:
    """One page of comments.

    ``flagged_by_viewer`` holds the IDs on this page the viewer has flagged.
    """

    comments: list[Comment]
    total: int
    flagged_by_viewer: set[CommentId] = field(default_factory=set)


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        comment_flag_repository: CommentFlagRepository,
        meme_service: MemeService,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            comment_flag_repository: Comment flag repository
            meme_service: Meme domain service (for comment counts)
        """
        self.comment_repository = comment_repository
        self.comment_flag_repository = comment_flag_repository
        self.meme_service = meme_service

    async def create_comment(
        self, meme_id: MemeId, creator_id: UserId, text: str
    ) -> Comment:
        """Add a comment to a meme and bump the meme's comment count.

        Args:
            meme_id: Meme being commented on
            creator_id: Author of the comment
            text: Comment text, 1-140 characters after trimming

        Returns:
            Created comment

        Raises:
            ValidationError: If the text is empty or too long
            NotFoundError: If the meme or the commenting user does not exist
        """
        with logfire.span(
            "comment_service.create_comment",
            meme_id=str(meme_id),
            creator_id=str(creator_id),
            text_length=len(text),
        ):
            text = text.strip()
            if not text:
                raise ValidationError("Comment text is required")
            if len(text) > MAX_COMMENT_LENGTH:
                raise ValidationError(
                    f"Comment cannot exceed {MAX_COMMENT_LENGTH} characters"
                )

            await self.meme_service.get_meme(meme_id)

            now = utcnow()
            comment = Comment(
                id=CommentId(uuid4()),
                meme_id=meme_id,
                creator_id=creator_id,
                text=text,
                created_at=now,
                updated_at=now,
            )

            try:
                saved = await self.comment_repository.save(comment)
            except IntegrityError as e:
                if violated_constraint(e) == COMMENT_CREATOR_FOREIGN_KEY:
                    logfire.warn("Comment from unknown user", user_id=str(creator_id))
                    raise NotFoundError("User", str(creator_id)) from e
                raise
            await self.meme_service.increment_comment_count(meme_id)

            logfire.info(
                "Comment created", comment_id=str(saved.id), meme_id=str(meme_id)
            )
            return saved

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If the comment does not exist
        """
        comment = await self.comment_repository.find_by_id(comment_id)
        if not comment:
            logfire.warn("Comment not found", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def list_comments(
        self,
        meme_id: MemeId,
        viewer: Viewer,
        limit: int = 10,
        offset: int = 0,
    ) -> CommentPage:
        """List a meme's comments as seen by ``viewer``.

        Regular viewers never see flagged comments and get newest first.
        Moderators see everything, most-flagged first, then newest first.

        Args:
            meme_id: Meme whose comments to list
            viewer: Who is asking
            limit: Page size
            offset: Number of comments to skip

        Returns:
            The page, the total visible to this viewer and which of the
            listed comments the viewer has flagged
        """
        with logfire.span(
            "comment_service.list_comments",
            meme_id=str(meme_id),
            moderator=viewer.is_moderator,
            limit=limit,
            offset=offset,
        ):
            include_flagged = viewer.is_moderator
            comments = await self.comment_repository.find_by_meme(
                meme_id,
                include_flagged=include_flagged,
                limit=limit,
                offset=offset,
            )
            total = await self.comment_repository.count_by_meme(
                meme_id, include_flagged=include_flagged
            )

            flagged_by_viewer: set[CommentId] = set()
            if viewer.user_id is not None and comments:
                flagged_by_viewer = set(
                    await self.comment_flag_repository.find_comment_ids_flagged_by_user(
                        viewer.user_id, [comment.id for comment in comments]
                    )
                )

            logfire.info(
                "Comments listed",
                meme_id=str(meme_id),
                count=len(comments),
                total=total,
            )
            return CommentPage(
                comments=comments, total=total, flagged_by_viewer=flagged_by_viewer
            )

    async def delete_comment(self, comment_id: CommentId, requestor: Viewer) -> Comment:
        """Delete a comment along with its flags.

        The comment's creator or any moderator may delete it. The parent
        meme's comment count drops by one (never below zero).

        Returns:
            The deleted comment

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the requestor is neither creator nor moderator
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            requestor_id=str(requestor.user_id),
        ):
            comment = await self.get_comment(comment_id)

            if comment.creator_id != requestor.user_id and not requestor.is_moderator:
                logfire.warn(
                    "Unauthorized comment delete attempt",
                    comment_id=str(comment_id),
                    creator_id=str(comment.creator_id),
                    requestor_id=str(requestor.user_id),
                )
                raise NotAuthorizedError(
                    "delete", "comment", str(comment_id), str(requestor.user_id)
                )

            flags = await self.comment_flag_repository.delete_by_comment(comment_id)
            await self.comment_repository.delete(comment_id)
            await self.meme_service.decrement_comment_count(comment.meme_id)

            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                meme_id=str(comment.meme_id),
                flags_removed=flags,
                by_moderator=comment.creator_id != requestor.user_id,
            )
            return comment

    async def delete_comments_for_meme(self, meme_id: MemeId) -> int:
        """Remove every comment on a meme and their flags.

        Returns:
            Number of comments deleted
        """
        with logfire.span(
            "comment_service.delete_comments_for_meme", meme_id=str(meme_id)
        ):
            for comment_id in await self.comment_repository.find_ids_by_meme(meme_id):
                await self.comment_flag_repository.delete_by_comment(comment_id)
            return await self.comment_repository.delete_by_meme(meme_id)
