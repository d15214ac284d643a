"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional, Sequence

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from memehub.domain.model import Vote
from memehub.domain.repository import VoteRepository
from memehub.domain.value import MemeId, UserId, VoteId, VoteValue
from memehub.persistence.mappers import row_to_vote, vote_to_dict
from memehub.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_meme_and_user(
        self, meme_id: MemeId, user_id: UserId
    ) -> Optional[Vote]:
        """Find a user's vote on a meme."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.meme_id == meme_id,
                votes_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_user_and_memes(
        self, user_id: UserId, meme_ids: Sequence[MemeId]
    ) -> List[Vote]:
        """Find a user's votes on multiple memes (batch query)."""
        if not meme_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.meme_id.in_(meme_ids),
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def save(self, vote: Vote) -> Vote:
        """Save a vote (create).

        Runs in a savepoint so a constraint violation leaves the request
        transaction usable.
        """
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return vote

    async def update_value(self, vote_id: VoteId, value: VoteValue) -> Vote:
        """Change a vote's direction."""
        stmt = (
            update(votes_table)
            .where(votes_table.c.id == vote_id)
            .values(value=int(value), updated_at=func.now())
            .returning(votes_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_vote(row._asdict())

    async def delete(self, vote_id: VoteId) -> None:
        """Delete a vote."""
        stmt = delete(votes_table).where(votes_table.c.id == vote_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def sum_by_meme(self, meme_id: MemeId) -> int:
        """Sum of vote values on a meme."""
        stmt = select(func.coalesce(func.sum(votes_table.c.value), 0)).where(
            votes_table.c.meme_id == meme_id
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def delete_by_meme(self, meme_id: MemeId) -> int:
        """Delete every vote on a meme."""
        stmt = delete(votes_table).where(votes_table.c.meme_id == meme_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
