"""PostgreSQL implementation of CommentFlag repository."""

from typing import List, Optional, Sequence

from sqlalchemy import and_, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from memehub.domain.model import CommentFlag
from memehub.domain.repository import CommentFlagRepository
from memehub.domain.value import CommentId, UserId
from memehub.persistence.mappers import comment_flag_to_dict, row_to_comment_flag
from memehub.persistence.tables import comment_flags_table


class PostgresCommentFlagRepository(CommentFlagRepository):
    """PostgreSQL implementation of CommentFlagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_comment_and_user(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[CommentFlag]:
        stmt = select(comment_flags_table).where(
            and_(
                comment_flags_table.c.comment_id == comment_id,
                comment_flags_table.c.user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment_flag(row._asdict()) if row else None

    async def find_comment_ids_flagged_by_user(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> List[CommentId]:
        if not comment_ids:
            return []

        stmt = select(comment_flags_table.c.comment_id).where(
            and_(
                comment_flags_table.c.user_id == user_id,
                comment_flags_table.c.comment_id.in_(comment_ids),
            )
        )
        result = await self.session.execute(stmt)
        return [CommentId(row) for row in result.scalars().all()]

    async def save(self, flag: CommentFlag) -> CommentFlag:
        """Create a flag. Duplicates violate uq_comment_flag_comment_user."""
        stmt = insert(comment_flags_table).values(**comment_flag_to_dict(flag))
        async with self.session.begin_nested():
            await self.session.execute(stmt)
        return flag

    async def delete_by_comment(self, comment_id: CommentId) -> int:
        stmt = delete(comment_flags_table).where(
            comment_flags_table.c.comment_id == comment_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
