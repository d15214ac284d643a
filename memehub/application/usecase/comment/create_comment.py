"""Create comment use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from memehub.application.usecase.common import AuthorInfo
from memehub.domain.service import CommentService, UserService
from memehub.domain.value import MemeId, UserId


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    meme_id: str  # UUID string
    text: str
    creator_id: str  # User ID from authenticated user


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment_id: str
    meme_id: str
    text: str
    author: AuthorInfo
    created_at: datetime


class CreateCommentUseCase:
    """Use case for commenting on a meme."""

    def __init__(
        self,
        comment_service: CommentService,
        user_service: UserService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            user_service: User domain service
        """
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Steps:
        1. Load the author (must exist)
        2. Create the comment; the service bumps the meme's comment count

        Args:
            request: Create comment request

        Returns:
            Created comment with author details

        Raises:
            NotFoundError: If the author or meme does not exist
            ValidationError: If the text is empty or longer than 140 characters
        """
        author = await self.user_service.get_by_id(UserId(UUID(request.creator_id)))

        comment = await self.comment_service.create_comment(
            meme_id=MemeId(UUID(request.meme_id)),
            creator_id=author.id,
            text=request.text,
        )

        return CreateCommentResponse(
            comment_id=str(comment.id),
            meme_id=str(comment.meme_id),
            text=comment.text,
            author=AuthorInfo.from_user(author),
            created_at=comment.created_at,
        )
