"""PostgreSQL implementation of Meme repository."""

from datetime import datetime
from typing import List, Optional

import logfire
from sqlalchemy import asc, delete, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from memehub.domain.model import Meme
from memehub.domain.repository import MemeOrderField, MemeRepository
from memehub.domain.value import MemeId, MemeStatus, SortDirection, UserId
from memehub.persistence.mappers import meme_to_dict, row_to_meme
from memehub.persistence.tables import memes_table

# Counters are only ever changed through their atomic update methods
_COUNTER_COLUMNS = ("views", "votes", "comment_count")


class PostgresMemeRepository(MemeRepository):
    """PostgreSQL implementation of MemeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, meme_id: MemeId) -> Optional[Meme]:
        """Find a meme by ID."""
        stmt = select(memes_table).where(memes_table.c.id == meme_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_meme(dict(row)) if row else None

    async def find_by_id_for_update(self, meme_id: MemeId) -> Optional[Meme]:
        """Find a meme with SELECT ... FOR UPDATE."""
        stmt = (
            select(memes_table).where(memes_table.c.id == meme_id).with_for_update()
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_meme(dict(row)) if row else None

    def _published_filter(self, stmt, created_since: Optional[datetime]):
        stmt = stmt.where(memes_table.c.status == MemeStatus.PUBLISHED.value)
        if created_since is not None:
            stmt = stmt.where(memes_table.c.created_at >= created_since)
        return stmt

    async def find_published(
        self,
        order_by: MemeOrderField = MemeOrderField.CREATED_AT,
        direction: SortDirection = SortDirection.DESC,
        created_since: Optional[datetime] = None,
        limit: int = 12,
        offset: int = 0,
    ) -> List[Meme]:
        """Find published memes with ordering and pagination."""
        with logfire.span(
            "meme_repository.find_published",
            order_by=order_by.value,
            direction=direction.value,
            limit=limit,
            offset=offset,
        ):
            order = desc if direction == SortDirection.DESC else asc
            column = memes_table.c[order_by.value]

            stmt = self._published_filter(select(memes_table), created_since)
            # Tie-break on recency so pages are stable
            stmt = stmt.order_by(order(column), desc(memes_table.c.created_at))
            stmt = stmt.limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            return [row_to_meme(dict(row)) for row in result.mappings().all()]

    async def count_published(self, created_since: Optional[datetime] = None) -> int:
        """Count published memes."""
        stmt = self._published_filter(
            select(func.count()).select_from(memes_table), created_since
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def find_by_creator(
        self,
        creator_id: UserId,
        status: Optional[MemeStatus] = None,
        limit: int = 12,
        offset: int = 0,
    ) -> List[Meme]:
        """Find a user's memes, newest first."""
        stmt = select(memes_table).where(memes_table.c.creator_id == creator_id)
        if status is not None:
            stmt = stmt.where(memes_table.c.status == status.value)
        stmt = (
            stmt.order_by(desc(memes_table.c.created_at)).limit(limit).offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_meme(dict(row)) for row in result.mappings().all()]

    async def count_by_creator(
        self, creator_id: UserId, status: Optional[MemeStatus] = None
    ) -> int:
        """Count a user's memes."""
        stmt = (
            select(func.count())
            .select_from(memes_table)
            .where(memes_table.c.creator_id == creator_id)
        )
        if status is not None:
            stmt = stmt.where(memes_table.c.status == status.value)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def find_all_ids(self) -> List[MemeId]:
        result = await self.session.execute(select(memes_table.c.id))
        return [MemeId(row) for row in result.scalars().all()]

    async def save(self, meme: Meme) -> Meme:
        """Save a meme (create or update)."""
        meme_dict = meme_to_dict(meme)
        existing = await self.find_by_id(meme.id)

        if existing:
            for column in _COUNTER_COLUMNS:
                meme_dict.pop(column)
            meme_dict.pop("created_at")
            stmt = (
                memes_table.update()
                .where(memes_table.c.id == meme.id)
                .values(**meme_dict)
            )
            await self.session.execute(stmt)
            await self.session.flush()
            # Return current counters rather than the caller's possibly stale copy
            saved = await self.find_by_id(meme.id)
            return saved if saved else meme

        async with self.session.begin_nested():
            await self.session.execute(memes_table.insert().values(**meme_dict))
        return meme

    async def delete(self, meme_id: MemeId) -> None:
        """Delete a meme (hard delete). Dependents go via ON DELETE CASCADE."""
        stmt = delete(memes_table).where(memes_table.c.id == meme_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def increment_views(self, meme_id: MemeId) -> None:
        """Atomically increment views by 1."""
        stmt = (
            memes_table.update()
            .where(memes_table.c.id == meme_id)
            .values(views=memes_table.c.views + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def adjust_votes(self, meme_id: MemeId, delta: int) -> int:
        """Atomically add delta to votes and return the new total."""
        stmt = (
            memes_table.update()
            .where(memes_table.c.id == meme_id)
            .values(votes=memes_table.c.votes + delta)
            .returning(memes_table.c.votes)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.scalar_one()

    async def set_votes(self, meme_id: MemeId, votes: int) -> None:
        stmt = (
            memes_table.update()
            .where(memes_table.c.id == meme_id)
            .values(votes=votes)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def increment_comment_count(self, meme_id: MemeId) -> None:
        """Atomically increment comment_count by 1."""
        stmt = (
            memes_table.update()
            .where(memes_table.c.id == meme_id)
            .values(comment_count=memes_table.c.comment_count + 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def decrement_comment_count(self, meme_id: MemeId) -> None:
        """Atomically decrement comment_count by 1 (minimum 0)."""
        stmt = (
            memes_table.update()
            .where(memes_table.c.id == meme_id)
            .where(memes_table.c.comment_count > 0)  # Don't go below 0
            .values(comment_count=memes_table.c.comment_count - 1)
        )
        await self.session.execute(stmt)
        await self.session.flush()
