"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from memehub.domain.model.vote import Vote
from memehub.domain.value import MemeId, UserId, VoteId, VoteValue


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_meme_and_user(
        self, meme_id: MemeId, user_id: UserId
    ) -> Optional[Vote]:
        """Find a user's vote on a meme.

        Args:
            meme_id: ID of the meme
            user_id: The user's ID

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_memes(
        self, user_id: UserId, meme_ids: Sequence[MemeId]
    ) -> List[Vote]:
        """Find a user's votes on multiple memes (batch query).

        Args:
            user_id: The user's ID
            meme_ids: Memes to check

        Returns:
            The user's votes on the given memes
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Create a vote.

        Args:
            vote: The vote to save

        Returns:
            The saved vote

        Raises:
            IntegrityError: If the user already has a vote on this meme
        """
        pass

    @abstractmethod
    async def update_value(self, vote_id: VoteId, value: VoteValue) -> Vote:
        """Change the direction of an existing vote.

        Args:
            vote_id: The vote to update
            value: The new value

        Returns:
            The updated vote
        """
        pass

    @abstractmethod
    async def delete(self, vote_id: VoteId) -> None:
        """Delete a vote.

        Args:
            vote_id: The vote ID to delete
        """
        pass

    @abstractmethod
    async def sum_by_meme(self, meme_id: MemeId) -> int:
        """Sum of vote values on a meme (0 when there are none)."""
        pass

    @abstractmethod
    async def delete_by_meme(self, meme_id: MemeId) -> int:
        """Delete every vote on a meme.

        Returns:
            Number of votes deleted
        """
        pass
