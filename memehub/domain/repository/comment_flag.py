"""Comment flag repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from memehub.domain.model.comment_flag import CommentFlag
from memehub.domain.value import CommentId, UserId


class CommentFlagRepository(ABC):
    """Repository for CommentFlag entity."""

    @abstractmethod
    async def find_by_comment_and_user(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[CommentFlag]:
        """Find a user's flag on a comment.

        Args:
            comment_id: The comment ID
            user_id: The user's ID

        Returns:
            The flag if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_comment_ids_flagged_by_user(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> List[CommentId]:
        """Which of the given comments the user has flagged (batch query)."""
        pass

    @abstractmethod
    async def save(self, flag: CommentFlag) -> CommentFlag:
        """Create a flag.

        Raises:
            IntegrityError: If the user has already flagged this comment
        """
        pass

    @abstractmethod
    async def delete_by_comment(self, comment_id: CommentId) -> int:
        """Delete every flag on a comment.

        Returns:
            Number of flags deleted
        """
        pass
