"""Comment routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel

from memehub.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
)
from memehub.config import PaginationSettings
from memehub.domain.error import DomainError
from memehub.domain.service import JWTService
from memehub.interface.error import require_user_id, to_http_exception

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment.

    Length is checked by the comment service after trimming whitespace.
    """

    text: str


@router.get("/memes/{meme_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    meme_id: str,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    pagination: FromDishka[PaginationSettings],
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=100),
    auth_token: str | None = Cookie(default=None),
) -> GetCommentsResponse:
    """List comments on a meme, newest first.

    Flagged comments are hidden unless the viewer is a moderator, who sees
    every comment with the most-flagged first.

    Raises:
        HTTPException: 404 if the meme does not exist
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await get_comments_use_case.execute(
            GetCommentsRequest(
                meme_id=meme_id,
                user_id=user_id,
                page=page,
                limit=limit or pagination.comments_per_page,
            )
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.post(
    "/memes/{meme_id}/comments",
    response_model=CreateCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    meme_id: str,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateCommentResponse:
    """Comment on a meme. Requires authentication.

    Raises:
        HTTPException: 401 if not authenticated, 400 if the text is empty or
            longer than 140 characters, 404 if the meme does not exist
    """
    user_id = require_user_id(jwt_service, auth_token, "create comments")

    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(meme_id=meme_id, text=request.text, creator_id=user_id)
        )
    except (DomainError, ValueError) as e:
        logfire.warn("Comment creation failed", meme_id=meme_id, error=str(e))
        raise to_http_exception(e)


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Delete a comment. Allowed for its creator and for moderators.

    Raises:
        HTTPException: 401 if not authenticated, 403 if not allowed,
            404 if the comment does not exist
    """
    user_id = require_user_id(jwt_service, auth_token, "delete comments")

    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=comment_id, user_id=user_id)
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)
