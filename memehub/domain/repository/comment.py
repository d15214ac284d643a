"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from memehub.domain.model.comment import Comment
from memehub.domain.value import CommentId, MemeId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_meme(
        self,
        meme_id: MemeId,
        include_flagged: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments on a meme.

        Without flagged comments the order is newest first. With flagged
        comments included (moderator view) the most-flagged come first,
        then newest first.

        Args:
            meme_id: The meme ID
            include_flagged: Whether to include comments in the flagged state
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            List of comments
        """
        pass

    @abstractmethod
    async def count_by_meme(self, meme_id: MemeId, include_flagged: bool = False) -> int:
        """Count comments on a meme.

        Args:
            meme_id: The meme ID
            include_flagged: Whether to count comments in the flagged state

        Returns:
            Number of comments
        """
        pass

    @abstractmethod
    async def find_ids_by_meme(self, meme_id: MemeId) -> List[CommentId]:
        """Return the IDs of every comment on a meme, flagged or not."""
        pass

    @abstractmethod
    async def find_flagged(self, limit: int = 20, offset: int = 0) -> List[Comment]:
        """Find flagged comments across all memes, most-flagged first."""
        pass

    @abstractmethod
    async def count_flagged(self) -> int:
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Create a comment.

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete).

        Args:
            comment_id: The comment ID to delete
        """
        pass

    @abstractmethod
    async def delete_by_meme(self, meme_id: MemeId) -> int:
        """Delete every comment on a meme.

        Returns:
            Number of comments deleted
        """
        pass

    @abstractmethod
    async def increment_flag_count(
        self, comment_id: CommentId, threshold: int
    ) -> Optional[Comment]:
        """Atomically add one flag and set ``flagged`` once the threshold is met.

        ``flagged`` is never cleared by this operation.

        Args:
            comment_id: The comment being flagged
            threshold: Flag count at which the comment becomes flagged

        Returns:
            The updated comment, or None if it does not exist
        """
        pass

    @abstractmethod
    async def reset_flags(self, comment_id: CommentId) -> Optional[Comment]:
        """Set flag_count to 0 and flagged to false.

        Returns:
            The updated comment, or None if it does not exist
        """
        pass
