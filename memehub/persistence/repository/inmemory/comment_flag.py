"""In-memory comment flag repository for testing."""

from typing import Optional, Sequence

from memehub.domain.model.comment_flag import CommentFlag
from memehub.domain.repository.comment_flag import CommentFlagRepository
from memehub.domain.repository.user import UserRepository
from memehub.domain.value import CommentFlagId, CommentId, UserId

from .integrity import require_user, unique_violation


class InMemoryCommentFlagRepository(CommentFlagRepository):
    """In-memory implementation of CommentFlagRepository for testing."""

    def __init__(self, users: UserRepository) -> None:
        self.users = users
        self._flags: dict[CommentFlagId, CommentFlag] = {}

    async def find_by_comment_and_user(
        self, comment_id: CommentId, user_id: UserId
    ) -> Optional[CommentFlag]:
        for flag in self._flags.values():
            if flag.comment_id == comment_id and flag.user_id == user_id:
                return flag
        return None

    async def find_comment_ids_flagged_by_user(
        self, user_id: UserId, comment_ids: Sequence[CommentId]
    ) -> list[CommentId]:
        wanted = set(comment_ids)
        return [
            f.comment_id
            for f in self._flags.values()
            if f.user_id == user_id and f.comment_id in wanted
        ]

    async def save(self, flag: CommentFlag) -> CommentFlag:
        """Save a flag.

        Raises:
            IntegrityError: If the user already flagged this comment, or the
                user does not exist
        """
        await require_user(self.users, flag.user_id, "comment_flags", "user_id")
        if any(
            f.comment_id == flag.comment_id and f.user_id == flag.user_id
            for f in self._flags.values()
        ):
            raise unique_violation("comment_flags", "uq_comment_flag_comment_user")

        self._flags[flag.id] = flag
        return flag

    async def delete_by_comment(self, comment_id: CommentId) -> int:
        doomed = [f.id for f in self._flags.values() if f.comment_id == comment_id]
        for flag_id in doomed:
            del self._flags[flag_id]
        return len(doomed)
