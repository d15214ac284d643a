"""In-memory meme repository for testing."""

from datetime import datetime
from typing import Optional

from memehub.domain.model.meme import Meme
from memehub.domain.repository.meme import MemeOrderField, MemeRepository
from memehub.domain.repository.user import UserRepository
from memehub.domain.value import MemeId, MemeStatus, SortDirection, UserId

from .integrity import require_user


class InMemoryMemeRepository(MemeRepository):
    """In-memory implementation of MemeRepository for testing."""

    def __init__(self, users: UserRepository) -> None:
        self.users = users
        self._memes: dict[MemeId, Meme] = {}

    def _bump(self, meme_id: MemeId, **changes: int) -> Optional[Meme]:
        meme = self._memes.get(meme_id)
        if meme is None:
            return None
        updated = meme.model_copy(
            update={field: getattr(meme, field) + delta for field, delta in changes.items()}
        )
        self._memes[meme_id] = updated
        return updated

    async def find_by_id(self, meme_id: MemeId) -> Optional[Meme]:
        """Find a meme by ID."""
        return self._memes.get(meme_id)

    async def find_by_id_for_update(self, meme_id: MemeId) -> Optional[Meme]:
        """Find a meme by ID (a single event loop needs no row lock)."""
        return self._memes.get(meme_id)

    def _published(self, created_since: Optional[datetime]) -> list[Meme]:
        memes = [m for m in self._memes.values() if m.status == MemeStatus.PUBLISHED]
        if created_since is not None:
            memes = [m for m in memes if m.created_at >= created_since]
        return memes

    async def find_published(
        self,
        order_by: MemeOrderField = MemeOrderField.CREATED_AT,
        direction: SortDirection = SortDirection.DESC,
        created_since: Optional[datetime] = None,
        limit: int = 12,
        offset: int = 0,
    ) -> list[Meme]:
        """Find published memes with ordering and pagination."""
        memes = self._published(created_since)

        # Stable sorts: tie-break on recency, then the requested order
        memes.sort(key=lambda m: m.created_at, reverse=True)
        memes.sort(
            key=lambda m: getattr(m, order_by.value),
            reverse=direction == SortDirection.DESC,
        )

        return memes[offset : offset + limit]

    async def count_published(self, created_since: Optional[datetime] = None) -> int:
        """Count published memes."""
        return len(self._published(created_since))

    def _by_creator(self, creator_id: UserId, status: Optional[MemeStatus]) -> list[Meme]:
        memes = [m for m in self._memes.values() if m.creator_id == creator_id]
        if status is not None:
            memes = [m for m in memes if m.status == status]
        return memes

    async def find_by_creator(
        self,
        creator_id: UserId,
        status: Optional[MemeStatus] = None,
        limit: int = 12,
        offset: int = 0,
    ) -> list[Meme]:
        """Find a user's memes, newest first."""
        memes = self._by_creator(creator_id, status)
        memes.sort(key=lambda m: m.created_at, reverse=True)
        return memes[offset : offset + limit]

    async def count_by_creator(
        self, creator_id: UserId, status: Optional[MemeStatus] = None
    ) -> int:
        return len(self._by_creator(creator_id, status))

    async def find_all_ids(self) -> list[MemeId]:
        return list(self._memes)

    async def save(self, meme: Meme) -> Meme:
        """Save a meme, keeping stored counters on update.

        Raises:
            IntegrityError: If the creator does not exist
        """
        await require_user(self.users, meme.creator_id, "memes", "creator_id")
        existing = self._memes.get(meme.id)
        if existing:
            meme = meme.model_copy(
                update={
                    "views": existing.views,
                    "votes": existing.votes,
                    "comment_count": existing.comment_count,
                    "created_at": existing.created_at,
                }
            )
        self._memes[meme.id] = meme
        return meme

    async def delete(self, meme_id: MemeId) -> None:
        """Delete a meme."""
        self._memes.pop(meme_id, None)

    async def increment_views(self, meme_id: MemeId) -> None:
        """Increment views by 1."""
        self._bump(meme_id, views=1)

    async def adjust_votes(self, meme_id: MemeId, delta: int) -> int:
        """Add delta to votes and return the new total."""
        updated = self._bump(meme_id, votes=delta)
        if updated is None:
            raise KeyError(meme_id)
        return updated.votes

    async def set_votes(self, meme_id: MemeId, votes: int) -> None:
        meme = self._memes.get(meme_id)
        if meme:
            self._memes[meme_id] = meme.model_copy(update={"votes": votes})

    async def increment_comment_count(self, meme_id: MemeId) -> None:
        """Increment comment_count by 1."""
        self._bump(meme_id, comment_count=1)

    async def decrement_comment_count(self, meme_id: MemeId) -> None:
        """Decrement comment_count by 1 (minimum 0)."""
        meme = self._memes.get(meme_id)
        if meme and meme.comment_count > 0:
            self._bump(meme_id, comment_count=-1)
