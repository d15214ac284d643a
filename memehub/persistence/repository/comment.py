"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

import logfire
from sqlalchemy import delete, desc, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from memehub.domain.model import Comment
from memehub.domain.repository import CommentRepository
from memehub.domain.value import CommentId, MemeId
from memehub.persistence.mappers import comment_to_dict, row_to_comment
from memehub.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_meme(
        self,
        meme_id: MemeId,
        include_flagged: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments on a meme.

        Moderator view (include_flagged) orders by flag_count first so the
        most reported comments surface at the top.
        """
        with logfire.span(
            "comment_repository.find_by_meme",
            meme_id=str(meme_id),
            include_flagged=include_flagged,
        ):
            stmt = select(comments_table).where(comments_table.c.meme_id == meme_id)
            if include_flagged:
                stmt = stmt.order_by(
                    desc(comments_table.c.flag_count),
                    desc(comments_table.c.created_at),
                )
            else:
                stmt = stmt.where(comments_table.c.flagged.is_(False)).order_by(
                    desc(comments_table.c.created_at)
                )
            stmt = stmt.limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_by_meme(self, meme_id: MemeId, include_flagged: bool = False) -> int:
        """Count comments on a meme."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.meme_id == meme_id)
        )
        if not include_flagged:
            stmt = stmt.where(comments_table.c.flagged.is_(False))
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def find_ids_by_meme(self, meme_id: MemeId) -> List[CommentId]:
        stmt = select(comments_table.c.id).where(comments_table.c.meme_id == meme_id)
        result = await self.session.execute(stmt)
        return [CommentId(row) for row in result.scalars().all()]

    async def find_flagged(self, limit: int = 20, offset: int = 0) -> List[Comment]:
        """Find flagged comments, most-flagged then newest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.flagged.is_(True))
            .order_by(
                desc(comments_table.c.flag_count),
                desc(comments_table.c.created_at),
            )
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_flagged(self) -> int:
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.flagged.is_(True))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def save(self, comment: Comment) -> Comment:
        """Create a comment."""
        stmt = insert(comments_table).values(**comment_to_dict(comment))
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return comment

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment (hard delete)."""
        stmt = delete(comments_table).where(comments_table.c.id == comment_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete_by_meme(self, meme_id: MemeId) -> int:
        stmt = delete(comments_table).where(comments_table.c.meme_id == meme_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def increment_flag_count(
        self, comment_id: CommentId, threshold: int
    ) -> Optional[Comment]:
        """Atomically add one flag; set flagged once the threshold is met.

        SET expressions see the pre-update row, hence ``flag_count + 1``.
        """
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(
                flag_count=comments_table.c.flag_count + 1,
                flagged=or_(
                    comments_table.c.flagged,
                    comments_table.c.flag_count + 1 >= threshold,
                ),
                updated_at=func.now(),
            )
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_comment(row._asdict()) if row else None

    async def reset_flags(self, comment_id: CommentId) -> Optional[Comment]:
        """Clear the flag count and flagged state."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(flag_count=0, flagged=False, updated_at=func.now())
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_comment(row._asdict()) if row else None
