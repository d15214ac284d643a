"""Comment moderation routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from memehub.application.usecase.moderation import (
    FlagCommentRequest,
    FlagCommentResponse,
    FlagCommentUseCase,
    GetFlaggedCommentsRequest,
    GetFlaggedCommentsResponse,
    GetFlaggedCommentsUseCase,
    UnflagCommentRequest,
    UnflagCommentResponse,
    UnflagCommentUseCase,
)
from memehub.config import PaginationSettings
from memehub.domain.error import DomainError
from memehub.domain.service import JWTService
from memehub.interface.error import require_user_id, to_http_exception

router = APIRouter(prefix="/comments", tags=["moderation"], route_class=DishkaRoute)


@router.get("/flagged", response_model=GetFlaggedCommentsResponse)
async def get_flagged_comments(
    get_flagged_comments_use_case: FromDishka[GetFlaggedCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    pagination: FromDishka[PaginationSettings],
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=100),
    auth_token: str | None = Cookie(default=None),
) -> GetFlaggedCommentsResponse:
    """List flagged comments across all memes, most-flagged first.

    Raises:
        HTTPException: 401 if not authenticated, 403 if not a moderator
    """
    user_id = require_user_id(jwt_service, auth_token, "review flagged comments")

    try:
        return await get_flagged_comments_use_case.execute(
            GetFlaggedCommentsRequest(
                user_id=user_id,
                page=page,
                limit=limit or pagination.flagged_comments_per_page,
            )
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.post("/{comment_id}/flag", response_model=FlagCommentResponse)
async def flag_comment(
    comment_id: str,
    flag_comment_use_case: FromDishka[FlagCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> FlagCommentResponse:
    """Flag a comment as inappropriate. Each user may flag a comment once.

    Raises:
        HTTPException: 401 if not authenticated, 404 if the comment does not
            exist, 409 if this user already flagged it
    """
    user_id = require_user_id(jwt_service, auth_token, "flag comments")

    try:
        return await flag_comment_use_case.execute(
            FlagCommentRequest(comment_id=comment_id, user_id=user_id)
        )
    except (DomainError, ValueError) as e:
        logfire.info("Flag rejected", comment_id=comment_id, error=str(e))
        raise to_http_exception(e)


@router.post("/{comment_id}/unflag", response_model=UnflagCommentResponse)
async def unflag_comment(
    comment_id: str,
    unflag_comment_use_case: FromDishka[UnflagCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UnflagCommentResponse:
    """Clear every flag on a comment and restore it. Moderators only.

    Raises:
        HTTPException: 401 if not authenticated, 403 if not a moderator,
            404 if the comment does not exist
    """
    user_id = require_user_id(jwt_service, auth_token, "unflag comments")

    try:
        return await unflag_comment_use_case.execute(
            UnflagCommentRequest(comment_id=comment_id, user_id=user_id)
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)
