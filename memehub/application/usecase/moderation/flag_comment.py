"""Flag comment use case."""

from uuid import UUID

from pydantic import BaseModel

from memehub.domain.service import ModerationService
from memehub.domain.value import CommentId, UserId


class FlagCommentRequest(BaseModel):
    """Flag comment request."""

    comment_id: str
    user_id: str  # Flagging user


class FlagCommentResponse(BaseModel):
    """Flag comment response."""

    comment_id: str
    flag_count: int
    flagged: bool
    message: str = "Comment flagged successfully"


class FlagCommentUseCase:
    """Use case for reporting a comment as inappropriate."""

    def __init__(self, moderation_service: ModerationService) -> None:
        """Initialize flag comment use case.

        Args:
            moderation_service: Moderation domain service
        """
        self.moderation_service = moderation_service

    async def execute(self, request: FlagCommentRequest) -> FlagCommentResponse:
        """Execute flag comment flow.

        Raises:
            NotFoundError: If the comment does not exist
            AlreadyFlaggedError: If the user already flagged this comment
        """
        comment = await self.moderation_service.flag_comment(
            CommentId(UUID(request.comment_id)), UserId(UUID(request.user_id))
        )
        return FlagCommentResponse(
            comment_id=str(comment.id),
            flag_count=comment.flag_count,
            flagged=comment.flagged,
        )
