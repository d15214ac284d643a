"""Delete meme use case."""

from uuid import UUID

from pydantic import BaseModel

from memehub.domain.service import CommentService, MemeService, VoteService
from memehub.domain.value import MemeId, UserId


class DeleteMemeRequest(BaseModel):
    """Delete meme request."""

    meme_id: str
    user_id: str  # Requestor


class DeleteMemeResponse(BaseModel):
    """Delete meme response."""

    meme_id: str
    votes_removed: int
    comments_removed: int
    message: str = "Meme deleted successfully"


class DeleteMemeUseCase:
    """Use case for a creator deleting their meme with its votes and comments."""

    def __init__(
        self,
        meme_service: MemeService,
        vote_service: VoteService,
        comment_service: CommentService,
    ) -> None:
        self.meme_service = meme_service
        self.vote_service = vote_service
        self.comment_service = comment_service

    async def execute(self, request: DeleteMemeRequest) -> DeleteMemeResponse:
        """Execute delete meme flow.

        Steps:
        1. Check the requestor created the meme
        2. Remove its votes, then its comments and their flags
        3. Remove the meme

        All steps share the request transaction.

        Raises:
            NotFoundError: If the meme does not exist
            NotAuthorizedError: If the requestor did not create the meme
        """
        meme_id = MemeId(UUID(request.meme_id))
        await self.meme_service.get_owned_meme(
            meme_id, UserId(UUID(request.user_id)), action="delete"
        )

        votes_removed = await self.vote_service.delete_votes_for_meme(meme_id)
        comments_removed = await self.comment_service.delete_comments_for_meme(meme_id)
        await self.meme_service.delete_meme(meme_id)

        return DeleteMemeResponse(
            meme_id=request.meme_id,
            votes_removed=votes_removed,
            comments_removed=comments_removed,
        )
