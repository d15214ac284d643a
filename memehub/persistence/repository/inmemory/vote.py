"""In-memory vote repository for testing."""

from typing import Optional, Sequence

from memehub.domain.model.common import utcnow
from memehub.domain.model.vote import Vote
from memehub.domain.repository.user import UserRepository
from memehub.domain.repository.vote import VoteRepository
from memehub.domain.value import MemeId, UserId, VoteId, VoteValue

from .integrity import require_user, unique_violation


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, users: UserRepository) -> None:
        self.users = users
        self._votes: dict[VoteId, Vote] = {}

    async def find_by_meme_and_user(
        self, meme_id: MemeId, user_id: UserId
    ) -> Optional[Vote]:
        """Find a user's vote on a meme."""
        for vote in self._votes.values():
            if vote.meme_id == meme_id and vote.user_id == user_id:
                return vote
        return None

    async def find_by_user_and_memes(
        self, user_id: UserId, meme_ids: Sequence[MemeId]
    ) -> list[Vote]:
        """Find a user's votes on multiple memes."""
        wanted = set(meme_ids)
        return [
            v for v in self._votes.values() if v.user_id == user_id and v.meme_id in wanted
        ]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If the user already voted on this meme, or the
                user does not exist
        """
        await require_user(self.users, vote.user_id, "votes", "user_id")
        if any(
            v.meme_id == vote.meme_id and v.user_id == vote.user_id
            for v in self._votes.values()
        ):
            raise unique_violation("votes", "uq_vote_meme_user")

        self._votes[vote.id] = vote
        return vote

    async def update_value(self, vote_id: VoteId, value: VoteValue) -> Vote:
        """Change a vote's direction."""
        updated = self._votes[vote_id].model_copy(
            update={"value": value, "updated_at": utcnow()}
        )
        self._votes[vote_id] = updated
        return updated

    async def delete(self, vote_id: VoteId) -> None:
        """Delete a vote."""
        self._votes.pop(vote_id, None)

    async def sum_by_meme(self, meme_id: MemeId) -> int:
        return sum(int(v.value) for v in self._votes.values() if v.meme_id == meme_id)

    async def delete_by_meme(self, meme_id: MemeId) -> int:
        doomed = [v.id for v in self._votes.values() if v.meme_id == meme_id]
        for vote_id in doomed:
            del self._votes[vote_id]
        return len(doomed)
