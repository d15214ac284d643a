"""Meme repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import List, Optional

from memehub.domain.model.meme import Meme
from memehub.domain.value import MemeId, MemeStatus, SortDirection, UserId


class MemeOrderField(str, Enum):
    """Column a meme listing is ordered by."""

    CREATED_AT = "created_at"
    VOTES = "votes"
    VIEWS = "views"


class MemeRepository(ABC):
    """Repository for Meme aggregate.

    Counter mutations (views, votes, comment_count) are applied in SQL so
    concurrent requests never lose updates.
    """

    @abstractmethod
    async def find_by_id(self, meme_id: MemeId) -> Optional[Meme]:
        """Find a meme by ID.

        Args:
            meme_id: The meme's unique identifier

        Returns:
            The meme if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_id_for_update(self, meme_id: MemeId) -> Optional[Meme]:
        """Find a meme and lock its row until the current transaction ends.

        Serialises concurrent vote casts on the same meme.

        Args:
            meme_id: The meme's unique identifier

        Returns:
            The meme if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_published(
        self,
        order_by: MemeOrderField = MemeOrderField.CREATED_AT,
        direction: SortDirection = SortDirection.DESC,
        created_since: Optional[datetime] = None,
        limit: int = 12,
        offset: int = 0,
    ) -> List[Meme]:
        """Find published memes with ordering and pagination.

        Args:
            order_by: Column to order by
            direction: Ascending or descending
            created_since: Only memes created at or after this instant
            limit: Maximum number of memes to return
            offset: Number of memes to skip

        Returns:
            List of published memes
        """
        pass

    @abstractmethod
    async def count_published(self, created_since: Optional[datetime] = None) -> int:
        """Count published memes, optionally within a creation window."""
        pass

    @abstractmethod
    async def find_by_creator(
        self,
        creator_id: UserId,
        status: Optional[MemeStatus] = None,
        limit: int = 12,
        offset: int = 0,
    ) -> List[Meme]:
        """Find a user's memes, newest first.

        Args:
            creator_id: The creator's user ID
            status: Restrict to one status (None for all)
            limit: Maximum number of memes to return
            offset: Number of memes to skip

        Returns:
            List of memes by the creator
        """
        pass

    @abstractmethod
    async def count_by_creator(
        self, creator_id: UserId, status: Optional[MemeStatus] = None
    ) -> int:
        pass

    @abstractmethod
    async def find_all_ids(self) -> List[MemeId]:
        """Return the IDs of every meme (used by vote reconciliation)."""
        pass

    @abstractmethod
    async def save(self, meme: Meme) -> Meme:
        """Save a meme (create or update).

        Counter columns are not overwritten on update; use the dedicated
        counter methods for those.

        Args:
            meme: The meme to save

        Returns:
            The saved meme
        """
        pass

    @abstractmethod
    async def delete(self, meme_id: MemeId) -> None:
        """Delete a meme (hard delete).

        Args:
            meme_id: The meme ID to delete
        """
        pass

    @abstractmethod
    async def increment_views(self, meme_id: MemeId) -> None:
        """Atomically increment views by 1."""
        pass

    @abstractmethod
    async def adjust_votes(self, meme_id: MemeId, delta: int) -> int:
        """Atomically add ``delta`` to the vote total.

        Args:
            meme_id: The meme ID
            delta: Signed change (-2, -1, +1 or +2)

        Returns:
            The new vote total
        """
        pass

    @abstractmethod
    async def set_votes(self, meme_id: MemeId, votes: int) -> None:
        """Overwrite the vote total. Only reconciliation should call this."""
        pass

    @abstractmethod
    async def increment_comment_count(self, meme_id: MemeId) -> None:
        """Atomically increment comment_count by 1."""
        pass

    @abstractmethod
    async def decrement_comment_count(self, meme_id: MemeId) -> None:
        """Atomically decrement comment_count by 1 (minimum 0)."""
        pass
