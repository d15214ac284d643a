"""Meme domain service."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from memehub.domain.error import NotAuthorizedError, NotFoundError
from memehub.domain.model import Meme
from memehub.domain.model.common import utcnow
from memehub.domain.repository import MemeOrderField, MemeRepository
from memehub.domain.value import (
    HexColor,
    MemeId,
    MemeSort,
    MemeStatus,
    SortDirection,
    UserId,
)

from .base import Service, violated_constraint

MEME_CREATOR_FOREIGN_KEY = "memes_creator_id_fkey"

# Fields a creator may change after the meme exists
EDITABLE_FIELDS = frozenset(
    {
        "title",
        "image_url",
        "top_text",
        "bottom_text",
        "text_color",
        "font_size",
        "status",
    }
)

_TOP_WINDOWS = {
    MemeSort.TOP_DAY: timedelta(days=1),
    MemeSort.TOP_WEEK: timedelta(days=7),
}


@dataclass
class MemePage:
    """One page of a meme listing plus the total across all pages."""

    memes: list[Meme]
    total: int


class MemeService(Service):
    """Domain service for meme operations."""

    def __init__(self, meme_repository: MemeRepository) -> None:
        """Initialize meme service.

        Args:
            meme_repository: Meme repository
        """
        self.meme_repository = meme_repository

    async def create_meme(
        self,
        creator_id: UserId,
        title: str,
        image_url: str,
        original_image_url: str | None = None,
        top_text: str | None = None,
        bottom_text: str | None = None,
        text_color: str = "#FFFFFF",
        font_size: int = 32,
        status: MemeStatus = MemeStatus.DRAFT,
        is_template_of: MemeId | None = None,
    ) -> Meme:
        """Create a new meme.

        Raises:
            NotFoundError: If the creator has no account, or ``is_template_of``
                names a meme that does not exist
            pydantic.ValidationError: If a field violates the meme's constraints
        """
        with logfire.span(
            "meme_service.create_meme",
            creator_id=str(creator_id),
            title=title,
            status=status.value,
        ):
            if is_template_of is not None:
                template = await self.meme_repository.find_by_id(is_template_of)
                if not template:
                    raise NotFoundError("Meme", str(is_template_of))

            now = utcnow()
            meme = Meme(
                id=MemeId(uuid4()),
                title=title,
                image_url=image_url,
                original_image_url=original_image_url or image_url,
                top_text=top_text,
                bottom_text=bottom_text,
                text_color=HexColor(text_color),
                font_size=font_size,
                creator_id=creator_id,
                status=status,
                is_template_of=is_template_of,
                created_at=now,
                updated_at=now,
            )

            try:
                saved = await self.meme_repository.save(meme)
            except IntegrityError as e:
                if violated_constraint(e) == MEME_CREATOR_FOREIGN_KEY:
                    logfire.warn("Meme from unknown user", user_id=str(creator_id))
                    raise NotFoundError("User", str(creator_id)) from e
                raise
            logfire.info("Meme created", meme_id=str(saved.id))
            return saved

    async def get_meme(self, meme_id: MemeId) -> Meme:
        """Get a meme by ID.

        Raises:
            NotFoundError: If the meme does not exist
        """
        with logfire.span("meme_service.get_meme", meme_id=str(meme_id)):
            meme = await self.meme_repository.find_by_id(meme_id)
            if not meme:
                logfire.warn("Meme not found", meme_id=str(meme_id))
                raise NotFoundError("Meme", str(meme_id))
            return meme

    async def lock_meme(self, meme_id: MemeId) -> Meme:
        """Get a meme and hold its row lock for the rest of the transaction.

        Raises:
            NotFoundError: If the meme does not exist
        """
        meme = await self.meme_repository.find_by_id_for_update(meme_id)
        if not meme:
            logfire.warn("Meme not found for update", meme_id=str(meme_id))
            raise NotFoundError("Meme", str(meme_id))
        return meme

    async def record_view(self, meme_id: MemeId) -> Meme:
        """Count a view of a meme and return it with the new view count.

        Raises:
            NotFoundError: If the meme does not exist
        """
        with logfire.span("meme_service.record_view", meme_id=str(meme_id)):
            await self.get_meme(meme_id)
            await self.meme_repository.increment_views(meme_id)
            return await self.get_meme(meme_id)

    async def list_published(
        self,
        sort: MemeSort = MemeSort.CREATED_AT,
        direction: SortDirection = SortDirection.DESC,
        limit: int = 12,
        offset: int = 0,
        now: datetime | None = None,
    ) -> MemePage:
        """List published memes.

        ``top-day`` and ``top-week`` restrict to memes created within the
        last day or week and order them by votes.

        Args:
            sort: Requested ordering
            direction: Ascending or descending
            limit: Page size
            offset: Number of memes to skip
            now: Reference time for the top-* windows (defaults to current time)

        Returns:
            The page of memes and the total number of matches
        """
        with logfire.span(
            "meme_service.list_published",
            sort=sort.value,
            direction=direction.value,
            limit=limit,
            offset=offset,
        ):
            created_since = None
            if sort in _TOP_WINDOWS:
                created_since = (now or utcnow()) - _TOP_WINDOWS[sort]
                order_by = MemeOrderField.VOTES
            elif sort == MemeSort.VOTES:
                order_by = MemeOrderField.VOTES
            elif sort == MemeSort.VIEWS:
                order_by = MemeOrderField.VIEWS
            else:
                order_by = MemeOrderField.CREATED_AT

            total = await self.meme_repository.count_published(
                created_since=created_since
            )
            memes = await self.meme_repository.find_published(
                order_by=order_by,
                direction=direction,
                created_since=created_since,
                limit=limit,
                offset=offset,
            )
            logfire.info("Memes listed", count=len(memes), total=total)
            return MemePage(memes=memes, total=total)

    async def list_by_creator(
        self,
        creator_id: UserId,
        status: MemeStatus | None = None,
        limit: int = 12,
        offset: int = 0,
    ) -> MemePage:
        """List one user's memes, newest first."""
        with logfire.span(
            "meme_service.list_by_creator",
            creator_id=str(creator_id),
            status=status.value if status else None,
        ):
            total = await self.meme_repository.count_by_creator(creator_id, status)
            memes = await self.meme_repository.find_by_creator(
                creator_id, status=status, limit=limit, offset=offset
            )
            return MemePage(memes=memes, total=total)

    async def update_meme(
        self, meme_id: MemeId, requestor_id: UserId, changes: dict[str, Any]
    ) -> Meme:
        """Apply field changes to a meme owned by the requestor.

        Args:
            meme_id: Meme to update
            requestor_id: User asking for the change
            changes: Field name to new value; only editable fields are applied

        Returns:
            The updated meme

        Raises:
            NotFoundError: If the meme does not exist
            NotAuthorizedError: If the requestor is not the creator
        """
        with logfire.span(
            "meme_service.update_meme",
            meme_id=str(meme_id),
            requestor_id=str(requestor_id),
            fields=sorted(changes),
        ):
            meme = await self.get_owned_meme(meme_id, requestor_id, action="update")

            update = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}
            # model_copy skips validation, so rebuild through the constructor
            updated = Meme(
                **{**meme.model_dump(), **update, "updated_at": utcnow()}
            )

            saved = await self.meme_repository.save(updated)
            logfire.info("Meme updated", meme_id=str(meme_id))
            return saved

    async def get_owned_meme(
        self, meme_id: MemeId, requestor_id: UserId, action: str
    ) -> Meme:
        """Get a meme, insisting that the requestor created it.

        Raises:
            NotFoundError: If the meme does not exist
            NotAuthorizedError: If the requestor is not the creator
        """
        meme = await self.get_meme(meme_id)
        if meme.creator_id != requestor_id:
            logfire.warn(
                "Unauthorized meme access",
                action=action,
                meme_id=str(meme_id),
                creator_id=str(meme.creator_id),
                requestor_id=str(requestor_id),
            )
            raise NotAuthorizedError(action, "meme", str(meme_id), str(requestor_id))
        return meme

    async def delete_meme(self, meme_id: MemeId) -> None:
        """Delete a meme row. Callers check ownership and clear dependents."""
        with logfire.span("meme_service.delete_meme", meme_id=str(meme_id)):
            await self.meme_repository.delete(meme_id)
            logfire.info("Meme deleted", meme_id=str(meme_id))

    async def adjust_votes(self, meme_id: MemeId, delta: int) -> int:
        """Atomically shift the meme's vote total and return the new total."""
        return await self.meme_repository.adjust_votes(meme_id, delta)

    async def set_votes(self, meme_id: MemeId, votes: int) -> None:
        await self.meme_repository.set_votes(meme_id, votes)

    async def list_all_ids(self) -> list[MemeId]:
        return await self.meme_repository.find_all_ids()

    async def increment_comment_count(self, meme_id: MemeId) -> None:
        """Atomically increment comment count.

        Args:
            meme_id: Meme ID
        """
        await self.meme_repository.increment_comment_count(meme_id)

    async def decrement_comment_count(self, meme_id: MemeId) -> None:
        """Atomically decrement comment count (minimum 0).

        Args:
            meme_id: Meme ID
        """
        await self.meme_repository.decrement_comment_count(meme_id)
