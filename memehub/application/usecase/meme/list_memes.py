"""List memes use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from memehub.application.usecase.common import (
    MemeItem,
    PaginationInfo,
    author_or_none,
    page_offset,
)
from memehub.domain.service import MemeService, UserService, VoteService
from memehub.domain.value import MemeSort, SortDirection, UserId


class ListMemesRequest(BaseModel):
    """List memes request."""

    sort: MemeSort = MemeSort.CREATED_AT
    direction: SortDirection = SortDirection.DESC
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=12, ge=1, le=100)
    user_id: str | None = None  # Current user ID (if authenticated)


class ListMemesResponse(BaseModel):
    """List memes response."""

    memes: list[MemeItem]
    pagination: PaginationInfo


class ListMemesUseCase:
    """Use case for browsing published memes."""

    def __init__(
        self,
        meme_service: MemeService,
        vote_service: VoteService,
        user_service: UserService,
    ) -> None:
        """Initialize list memes use case.

        Args:
            meme_service: Meme domain service
            vote_service: Vote service for the viewer's votes
            user_service: User service for creator details
        """
        self.meme_service = meme_service
        self.vote_service = vote_service
        self.user_service = user_service

    async def execute(self, request: ListMemesRequest) -> ListMemesResponse:
        """Execute list memes flow.

        Args:
            request: Sort, direction and pagination

        Returns:
            One page of published memes with pagination metadata
        """
        with logfire.span(
            "list_memes.execute",
            sort=request.sort.value,
            page=request.page,
            limit=request.limit,
        ):
            page = await self.meme_service.list_published(
                sort=request.sort,
                direction=request.direction,
                limit=request.limit,
                offset=page_offset(request.page, request.limit),
            )

            # Batch queries to avoid N+1
            user_votes = {}
            if request.user_id and page.memes:
                user_votes = await self.vote_service.get_user_votes_for_memes(
                    UserId(UUID(request.user_id)), [meme.id for meme in page.memes]
                )
            creators = await self.user_service.get_users_by_ids(
                [meme.creator_id for meme in page.memes]
            )

            return ListMemesResponse(
                memes=[
                    MemeItem.from_meme(
                        meme,
                        author_or_none(creators, meme.creator_id),
                        user_votes.get(meme.id),
                    )
                    for meme in page.memes
                ],
                pagination=PaginationInfo.build(
                    page.total, request.page, request.limit
                ),
            )
