"""In-memory user repository for testing."""

from typing import Optional, Sequence

from memehub.domain.model.user import User
from memehub.domain.repository.user import UserRepository
from memehub.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        return [self._users[uid] for uid in set(user_ids) if uid in self._users]

    async def find_by_email(self, email: str) -> Optional[User]:
        wanted = email.strip().lower()
        return next(
            (u for u in self._users.values() if u.email.lower() == wanted), None
        )

    async def save(self, user: User) -> User:
        self._users[user.id] = user
        return user
