"""PostgreSQL user repository."""

from typing import Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from memehub.domain.model import User
from memehub.domain.repository import UserRepository
from memehub.domain.value import UserId
from memehub.persistence.mappers import row_to_user, user_to_dict
from memehub.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _find_one(self, condition) -> Optional[User]:
        result = await self.session.execute(select(users_table).where(condition))
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return await self._find_one(users_table.c.id == user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        if not user_ids:
            return []
        result = await self.session.execute(
            select(users_table).where(users_table.c.id.in_(set(user_ids)))
        )
        return [row_to_user(dict(row)) for row in result.mappings()]

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self._find_one(
            func.lower(users_table.c.email) == email.strip().lower()
        )

    async def save(self, user: User) -> User:
        """Upsert on the primary key."""
        values = user_to_dict(user)
        stmt = insert(users_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={k: v for k, v in values.items() if k not in ("id", "created_at")},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return user
