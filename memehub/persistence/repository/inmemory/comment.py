"""In-memory comment repository for testing."""

from typing import Optional

from memehub.domain.model.comment import Comment
from memehub.domain.model.common import utcnow
from memehub.domain.repository.comment import CommentRepository
from memehub.domain.repository.user import UserRepository
from memehub.domain.value import CommentId, MemeId

from .integrity import require_user


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, users: UserRepository) -> None:
        self.users = users
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    def _for_meme(self, meme_id: MemeId, include_flagged: bool) -> list[Comment]:
        comments = [c for c in self._comments.values() if c.meme_id == meme_id]
        if not include_flagged:
            comments = [c for c in comments if not c.flagged]
        return comments

    async def find_by_meme(
        self,
        meme_id: MemeId,
        include_flagged: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Comment]:
        """Find comments on a meme."""
        comments = self._for_meme(meme_id, include_flagged)

        if include_flagged:
            comments.sort(key=lambda c: (c.flag_count, c.created_at), reverse=True)
        else:
            comments.sort(key=lambda c: c.created_at, reverse=True)

        return comments[offset : offset + limit]

    async def count_by_meme(self, meme_id: MemeId, include_flagged: bool = False) -> int:
        """Count comments on a meme."""
        return len(self._for_meme(meme_id, include_flagged))

    async def find_ids_by_meme(self, meme_id: MemeId) -> list[CommentId]:
        return [c.id for c in self._comments.values() if c.meme_id == meme_id]

    async def find_flagged(self, limit: int = 20, offset: int = 0) -> list[Comment]:
        """Find flagged comments, most-flagged then newest first."""
        comments = [c for c in self._comments.values() if c.flagged]
        comments.sort(key=lambda c: (c.flag_count, c.created_at), reverse=True)
        return comments[offset : offset + limit]

    async def count_flagged(self) -> int:
        return sum(1 for c in self._comments.values() if c.flagged)

    async def save(self, comment: Comment) -> Comment:
        """Save a comment.

        Raises:
            IntegrityError: If the author does not exist
        """
        await require_user(self.users, comment.creator_id, "comments", "creator_id")
        self._comments[comment.id] = comment
        return comment

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment."""
        self._comments.pop(comment_id, None)

    async def delete_by_meme(self, meme_id: MemeId) -> int:
        doomed = await self.find_ids_by_meme(meme_id)
        for comment_id in doomed:
            del self._comments[comment_id]
        return len(doomed)

    async def increment_flag_count(
        self, comment_id: CommentId, threshold: int
    ) -> Optional[Comment]:
        """Add one flag; set flagged once the threshold is met."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        flag_count = comment.flag_count + 1
        updated = comment.model_copy(
            update={
                "flag_count": flag_count,
                "flagged": comment.flagged or flag_count >= threshold,
                "updated_at": utcnow(),
            }
        )
        self._comments[comment_id] = updated
        return updated

    async def reset_flags(self, comment_id: CommentId) -> Optional[Comment]:
        """Clear the flag count and flagged state."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        updated = comment.model_copy(
            update={"flag_count": 0, "flagged": False, "updated_at": utcnow()}
        )
        self._comments[comment_id] = updated
        return updated
