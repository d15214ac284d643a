"""Get flagged comments use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from memehub.application.usecase.common import (
    AuthorInfo,
    PaginationInfo,
    author_or_none,
    page_offset,
)
from memehub.domain.error import NotFoundError
from memehub.domain.service import MemeService, ModerationService, UserService
from memehub.domain.value import UserId


class FlaggedMemeInfo(BaseModel):
    """The meme a flagged comment belongs to."""

    meme_id: str
    title: str
    image_url: str


class FlaggedCommentItem(BaseModel):
    """Flagged comment in the moderation queue."""

    comment_id: str
    text: str
    author: AuthorInfo | None
    meme: FlaggedMemeInfo | None
    flag_count: int
    created_at: datetime


class GetFlaggedCommentsRequest(BaseModel):
    """Get flagged comments request."""

    user_id: str  # Must be a moderator
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)


class GetFlaggedCommentsResponse(BaseModel):
    """Get flagged comments response."""

    comments: list[FlaggedCommentItem]
    pagination: PaginationInfo


class GetFlaggedCommentsUseCase:
    """Use case for the moderator review queue."""

    def __init__(
        self,
        moderation_service: ModerationService,
        meme_service: MemeService,
        user_service: UserService,
    ) -> None:
        self.moderation_service = moderation_service
        self.meme_service = meme_service
        self.user_service = user_service

    async def execute(
        self, request: GetFlaggedCommentsRequest
    ) -> GetFlaggedCommentsResponse:
        """Execute get flagged comments flow.

        Raises:
            NotAuthorizedError: If the requestor is not a moderator
        """
        viewer = await self.user_service.get_viewer(UserId(UUID(request.user_id)))
        page = await self.moderation_service.list_flagged(
            viewer,
            limit=request.limit,
            offset=page_offset(request.page, request.limit),
        )

        authors = await self.user_service.get_users_by_ids(
            [comment.creator_id for comment in page.comments]
        )

        memes: dict = {}
        for meme_id in {comment.meme_id for comment in page.comments}:
            try:
                meme = await self.meme_service.get_meme(meme_id)
            except NotFoundError:
                continue
            memes[meme_id] = FlaggedMemeInfo(
                meme_id=str(meme.id), title=meme.title, image_url=meme.image_url
            )

        return GetFlaggedCommentsResponse(
            comments=[
                FlaggedCommentItem(
                    comment_id=str(comment.id),
                    text=comment.text,
                    author=author_or_none(authors, comment.creator_id),
                    meme=memes.get(comment.meme_id),
                    flag_count=comment.flag_count,
                    created_at=comment.created_at,
                )
                for comment in page.comments
            ],
            pagination=PaginationInfo.build(page.total, request.page, request.limit),
        )
