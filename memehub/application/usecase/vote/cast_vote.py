"""Cast vote use case."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel

from memehub.domain.service import VoteService
from memehub.domain.value import MemeId, UserId, VoteAction

_MESSAGES = {
    VoteAction.ADDED: "Vote added successfully",
    VoteAction.UPDATED: "Vote updated successfully",
    VoteAction.REMOVED: "Vote removed successfully",
}


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    meme_id: str  # UUID string
    user_id: str  # User ID from authenticated user
    value: Any  # +1 or -1; anything else is rejected by the vote service


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    meme_id: str
    action: VoteAction
    value: int | None  # The user's vote after this cast
    votes: int  # The meme's new total
    message: str


class CastVoteUseCase:
    """Use case for casting, flipping or withdrawing a vote on a meme."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            The action taken and the meme's new vote total

        Raises:
            InvalidVoteValueError: If value is not +1 or -1
            NotFoundError: If the meme does not exist
            DuplicateVoteError: If a concurrent request won the race
        """
        meme_id = MemeId(UUID(request.meme_id))
        outcome = await self.vote_service.cast_vote(
            meme_id, UserId(UUID(request.user_id)), request.value
        )

        return CastVoteResponse(
            meme_id=request.meme_id,
            action=outcome.action,
            value=int(outcome.value) if outcome.value is not None else None,
            votes=outcome.votes,
            message=_MESSAGES[outcome.action],
        )
