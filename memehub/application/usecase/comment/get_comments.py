"""Get comments use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from memehub.application.usecase.common import (
    AuthorInfo,
    PaginationInfo,
    author_or_none,
    page_offset,
)
from memehub.domain.service import CommentService, MemeService, UserService
from memehub.domain.value import MemeId, UserId


class CommentItem(BaseModel):
    """Comment item in response."""

    comment_id: str
    meme_id: str
    text: str
    author: AuthorInfo | None
    flagged: bool
    flag_count: int
    created_at: datetime


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    meme_id: str  # UUID string
    user_id: str | None = None  # Authenticated viewer, if any
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    meme_id: str
    comments: list[CommentItem]
    user_flagged_comments: list[str]  # IDs on this page the viewer has flagged
    pagination: PaginationInfo


class GetCommentsUseCase:
    """Use case for listing a meme's comments for the current viewer."""

    def __init__(
        self,
        comment_service: CommentService,
        meme_service: MemeService,
        user_service: UserService,
    ) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
            meme_service: Meme domain service
            user_service: User service for viewer role and author details
        """
        self.comment_service = comment_service
        self.meme_service = meme_service
        self.user_service = user_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Regular viewers get visible comments newest first; moderators also
        see flagged comments, most-flagged first.

        Raises:
            NotFoundError: If the meme does not exist
        """
        meme_id = MemeId(UUID(request.meme_id))
        await self.meme_service.get_meme(meme_id)

        viewer = await self.user_service.get_viewer(
            UserId(UUID(request.user_id)) if request.user_id else None
        )

        page = await self.comment_service.list_comments(
            meme_id,
            viewer,
            limit=request.limit,
            offset=page_offset(request.page, request.limit),
        )

        authors = await self.user_service.get_users_by_ids(
            [comment.creator_id for comment in page.comments]
        )

        return GetCommentsResponse(
            meme_id=request.meme_id,
            comments=[
                CommentItem(
                    comment_id=str(comment.id),
                    meme_id=str(comment.meme_id),
                    text=comment.text,
                    author=author_or_none(authors, comment.creator_id),
                    flagged=comment.flagged,
                    flag_count=comment.flag_count,
                    created_at=comment.created_at,
                )
                for comment in page.comments
            ],
            user_flagged_comments=sorted(str(cid) for cid in page.flagged_by_viewer),
            pagination=PaginationInfo.build(page.total, request.page, request.limit),
        )
