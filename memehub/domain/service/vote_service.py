"""Vote domain service.

Keeps the vote ledger and each meme's running vote total in step. Every
cast runs inside the caller's transaction with the meme row locked, so
the ledger write and the counter update commit or roll back together.
"""

from dataclasses import dataclass
from typing import NoReturn
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from memehub.domain.error import (
    DuplicateVoteError,
    InvalidVoteValueError,
    NotFoundError,
)
from memehub.domain.model.common import utcnow
from memehub.domain.model.vote import Vote
from memehub.domain.repository import VoteRepository
from memehub.domain.value import MemeId, UserId, VoteAction, VoteId, VoteValue

from .base import Service, violated_constraint
from .meme_service import MemeService

VOTE_UNIQUE_CONSTRAINT = "uq_vote_meme_user"
VOTE_USER_FOREIGN_KEY = "votes_user_id_fkey"


@dataclass
class VoteOutcome:
    """Result of casting a vote."""

    action: VoteAction
    value: VoteValue | None  # The user's vote after the cast (None if removed)
    votes: int  # The meme's new vote total


@dataclass
class VoteDrift:
    """A meme whose stored total disagreed with its ledger."""

    meme_id: MemeId
    stored: int
    actual: int


class VoteService(Service):
    """Domain service for vote operations."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        meme_service: MemeService,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            meme_service: Meme domain service
        """
        self.vote_repository = vote_repository
        self.meme_service = meme_service

    @staticmethod
    def parse_value(value: object) -> VoteValue:
        """Accept exactly +1 or -1.

        Raises:
            InvalidVoteValueError: For any other value, including booleans
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidVoteValueError(value)
        if value not in (VoteValue.UP, VoteValue.DOWN):
            raise InvalidVoteValueError(value)
        return VoteValue(value)

    async def cast_vote(
        self, meme_id: MemeId, user_id: UserId, value: object
    ) -> VoteOutcome:
        """Cast, flip or withdraw a user's vote on a meme.

        - No existing vote: record it, total moves by ``value``
        - Same value again: withdraw it, total moves by ``-value``
        - Opposite value: flip it, total moves by ``2 * value``

        Args:
            meme_id: Meme being voted on
            user_id: Voting user
            value: +1 or -1

        Returns:
            What happened, the user's resulting vote and the meme's new total

        Raises:
            InvalidVoteValueError: If value is not +1 or -1
            NotFoundError: If the meme or the voting user does not exist
            DuplicateVoteError: If a concurrent request recorded the vote first
        """
        with logfire.span(
            "vote_service.cast_vote",
            meme_id=str(meme_id),
            user_id=str(user_id),
            value=value,
        ):
            vote_value = self.parse_value(value)

            # Serialise casts on this meme until the transaction ends
            await self.meme_service.lock_meme(meme_id)

            existing = await self.vote_repository.find_by_meme_and_user(
                meme_id, user_id
            )

            current: VoteValue | None
            if existing is None:
                now = utcnow()
                vote = Vote(
                    id=VoteId(uuid4()),
                    meme_id=meme_id,
                    user_id=user_id,
                    value=vote_value,
                    created_at=now,
                    updated_at=now,
                )
                try:
                    await self.vote_repository.save(vote)
                except IntegrityError as e:
                    self._raise_for_rejected_vote(e, meme_id, user_id)
                action, delta, current = VoteAction.ADDED, int(vote_value), vote_value
            elif existing.value == vote_value:
                await self.vote_repository.delete(existing.id)
                action, delta, current = VoteAction.REMOVED, -int(vote_value), None
            else:
                await self.vote_repository.update_value(existing.id, vote_value)
                action, delta, current = (
                    VoteAction.UPDATED,
                    2 * int(vote_value),
                    vote_value,
                )

            votes = await self.meme_service.adjust_votes(meme_id, delta)

            logfire.info(
                "Vote cast",
                meme_id=str(meme_id),
                user_id=str(user_id),
                action=action.value,
                delta=delta,
                votes=votes,
            )
            return VoteOutcome(action=action, value=current, votes=votes)

    @staticmethod
    def _raise_for_rejected_vote(
        error: IntegrityError, meme_id: MemeId, user_id: UserId
    ) -> NoReturn:
        """Translate a refused vote insert into a domain error.

        Only the one-vote-per-user constraint is a conflict. A vote from a
        user with no account row is reported as a missing user; anything
        else is not ours to interpret and propagates.
        """
        constraint = violated_constraint(error)
        if constraint == VOTE_UNIQUE_CONSTRAINT:
            logfire.warn(
                "Duplicate vote attempt", meme_id=str(meme_id), user_id=str(user_id)
            )
            raise DuplicateVoteError(str(meme_id), str(user_id)) from error
        if constraint == VOTE_USER_FOREIGN_KEY:
            logfire.warn("Vote from unknown user", user_id=str(user_id))
            raise NotFoundError("User", str(user_id)) from error
        raise error

    async def remove_vote(self, meme_id: MemeId, user_id: UserId) -> VoteOutcome:
        """Withdraw the user's vote on a meme, whichever way it went.

        Raises:
            NotFoundError: If the meme does not exist or the user has no vote on it
        """
        with logfire.span(
            "vote_service.remove_vote", meme_id=str(meme_id), user_id=str(user_id)
        ):
            await self.meme_service.lock_meme(meme_id)

            existing = await self.vote_repository.find_by_meme_and_user(
                meme_id, user_id
            )
            if existing is None:
                raise NotFoundError("Vote", f"{meme_id}/{user_id}")

            await self.vote_repository.delete(existing.id)
            votes = await self.meme_service.adjust_votes(meme_id, -int(existing.value))

            logfire.info(
                "Vote removed", meme_id=str(meme_id), user_id=str(user_id), votes=votes
            )
            return VoteOutcome(action=VoteAction.REMOVED, value=None, votes=votes)

    async def get_user_vote(
        self, meme_id: MemeId, user_id: UserId
    ) -> VoteValue | None:
        """Get the user's current vote on a meme.

        Returns:
            The vote value, or None if the user has not voted

        Raises:
            NotFoundError: If the meme does not exist
        """
        with logfire.span(
            "vote_service.get_user_vote", meme_id=str(meme_id), user_id=str(user_id)
        ):
            await self.meme_service.get_meme(meme_id)
            vote = await self.vote_repository.find_by_meme_and_user(meme_id, user_id)
            return vote.value if vote else None

    async def get_user_votes_for_memes(
        self, user_id: UserId, meme_ids: list[MemeId]
    ) -> dict[MemeId, VoteValue]:
        """Map each meme the user has voted on to their vote.

        Memes without a vote are absent from the result.
        """
        if not meme_ids:
            return {}

        # Batch query to fetch all votes at once (avoid N+1)
        votes = await self.vote_repository.find_by_user_and_memes(user_id, meme_ids)
        return {vote.meme_id: vote.value for vote in votes}

    async def reconcile_meme(self, meme_id: MemeId) -> VoteDrift | None:
        """Recompute one meme's total from its ledger and repair any drift.

        Returns:
            The drift that was corrected, or None if the total was right

        Raises:
            NotFoundError: If the meme does not exist
        """
        meme = await self.meme_service.lock_meme(meme_id)
        actual = await self.vote_repository.sum_by_meme(meme_id)
        if actual == meme.votes:
            return None

        logfire.warn(
            "Vote total drift detected",
            meme_id=str(meme_id),
            stored=meme.votes,
            actual=actual,
        )
        await self.meme_service.set_votes(meme_id, actual)
        return VoteDrift(meme_id=meme_id, stored=meme.votes, actual=actual)

    async def reconcile_all(self) -> list[VoteDrift]:
        """Reconcile every meme. Returns the drifts that were corrected."""
        with logfire.span("vote_service.reconcile_all"):
            drifts: list[VoteDrift] = []
            for meme_id in await self.meme_service.list_all_ids():
                drift = await self.reconcile_meme(meme_id)
                if drift:
                    drifts.append(drift)
            logfire.info("Vote reconciliation finished", corrected=len(drifts))
            return drifts

    async def delete_votes_for_meme(self, meme_id: MemeId) -> int:
        with logfire.span("vote_service.delete_votes_for_meme", meme_id=str(meme_id)):
            return await self.vote_repository.delete_by_meme(meme_id)
