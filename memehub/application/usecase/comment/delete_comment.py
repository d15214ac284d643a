"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from memehub.domain.service import CommentService, UserService
from memehub.domain.value import CommentId, UserId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str
    user_id: str  # Requestor


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    meme_id: str
    message: str = "Comment deleted successfully"


class DeleteCommentUseCase:
    """Use case for deleting a comment as its creator or a moderator."""

    def __init__(
        self, comment_service: CommentService, user_service: UserService
    ) -> None:
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the requestor is neither creator nor moderator
        """
        requestor = await self.user_service.get_viewer(UserId(UUID(request.user_id)))
        comment = await self.comment_service.delete_comment(
            CommentId(UUID(request.comment_id)), requestor
        )
        return DeleteCommentResponse(
            comment_id=str(comment.id), meme_id=str(comment.meme_id)
        )
