"""Unflag comment use case."""

from uuid import UUID

from pydantic import BaseModel

from memehub.domain.service import ModerationService, UserService
from memehub.domain.value import CommentId, UserId


class UnflagCommentRequest(BaseModel):
    """Unflag comment request."""

    comment_id: str
    user_id: str  # Must be a moderator


class UnflagCommentResponse(BaseModel):
    """Unflag comment response."""

    comment_id: str
    flag_count: int
    flagged: bool
    message: str = "Comment unflagged successfully"


class UnflagCommentUseCase:
    """Use case for a moderator clearing a comment's flags."""

    def __init__(
        self, moderation_service: ModerationService, user_service: UserService
    ) -> None:
        self.moderation_service = moderation_service
        self.user_service = user_service

    async def execute(self, request: UnflagCommentRequest) -> UnflagCommentResponse:
        """Execute unflag comment flow.

        Raises:
            NotAuthorizedError: If the requestor is not a moderator
            NotFoundError: If the comment does not exist
        """
        moderator = await self.user_service.get_viewer(UserId(UUID(request.user_id)))
        comment = await self.moderation_service.unflag_comment(
            CommentId(UUID(request.comment_id)), moderator
        )
        return UnflagCommentResponse(
            comment_id=str(comment.id),
            flag_count=comment.flag_count,
            flagged=comment.flagged,
        )
