"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from memehub.domain.model.user import User
from memehub.domain.value import UserId


class UserRepository(ABC):
    """Storage for user accounts.

    Rows are written on registration, on profile edits and when a user
    gains or loses the moderator role.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Load several users in one query; unknown IDs are skipped."""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email, ignoring case and surrounding whitespace.

        Emails are stored lowercased when an account is registered.
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Insert the user, or overwrite the stored row with the same ID."""
        pass
