"""List user memes use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from memehub.application.usecase.common import (
    MemeItem,
    PaginationInfo,
    author_or_none,
    page_offset,
)
from memehub.domain.service import MemeService, UserService
from memehub.domain.value import MemeStatus, UserId


class ListUserMemesRequest(BaseModel):
    """List user memes request."""

    creator_id: str
    viewer_id: str | None = None
    status: MemeStatus | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=12, ge=1, le=100)


class ListUserMemesResponse(BaseModel):
    """List user memes response."""

    memes: list[MemeItem]
    pagination: PaginationInfo


class ListUserMemesUseCase:
    """Use case for a user's meme gallery.

    Owners see their drafts; everyone else only sees published memes.
    """

    def __init__(self, meme_service: MemeService, user_service: UserService) -> None:
        self.meme_service = meme_service
        self.user_service = user_service

    async def execute(self, request: ListUserMemesRequest) -> ListUserMemesResponse:
        """Execute list user memes flow.

        Raises:
            NotFoundError: If the creator does not exist
        """
        creator = await self.user_service.get_by_id(UserId(UUID(request.creator_id)))

        status = request.status
        if request.viewer_id != request.creator_id:
            status = MemeStatus.PUBLISHED

        page = await self.meme_service.list_by_creator(
            creator.id,
            status=status,
            limit=request.limit,
            offset=page_offset(request.page, request.limit),
        )

        creators = {creator.id: creator}
        return ListUserMemesResponse(
            memes=[
                MemeItem.from_meme(meme, author_or_none(creators, meme.creator_id))
                for meme in page.memes
            ],
            pagination=PaginationInfo.build(page.total, request.page, request.limit),
        )
