"""Get user vote use case."""

from uuid import UUID

from pydantic import BaseModel

from memehub.domain.service import VoteService
from memehub.domain.value import MemeId, UserId


class GetUserVoteRequest(BaseModel):
    """Get user vote request."""

    meme_id: str
    user_id: str


class GetUserVoteResponse(BaseModel):
    """The user's vote on a meme; value is None when they have not voted."""

    meme_id: str
    value: int | None


class GetUserVoteUseCase:
    """Use case for looking up the current user's vote on a meme."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: GetUserVoteRequest) -> GetUserVoteResponse:
        """Execute get user vote flow.

        Raises:
            NotFoundError: If the meme does not exist
        """
        value = await self.vote_service.get_user_vote(
            MemeId(UUID(request.meme_id)), UserId(UUID(request.user_id))
        )
        return GetUserVoteResponse(
            meme_id=request.meme_id,
            value=int(value) if value is not None else None,
        )
