"""Remove vote use case."""

from uuid import UUID

from pydantic import BaseModel

from memehub.domain.service import VoteService
from memehub.domain.value import MemeId, UserId

from .cast_vote import CastVoteResponse


class RemoveVoteRequest(BaseModel):
    """Remove vote request."""

    meme_id: str
    user_id: str  # User ID from authenticated user


class RemoveVoteUseCase:
    """Use case for withdrawing a vote without knowing which way it went."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: RemoveVoteRequest) -> CastVoteResponse:
        """Execute remove vote flow.

        Raises:
            NotFoundError: If the meme does not exist or the user has not voted
        """
        outcome = await self.vote_service.remove_vote(
            MemeId(UUID(request.meme_id)), UserId(UUID(request.user_id))
        )

        return CastVoteResponse(
            meme_id=request.meme_id,
            action=outcome.action,
            value=None,
            votes=outcome.votes,
            message="Vote removed successfully",
        )
