"""Vote routes."""

from typing import Any

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Response, status
from pydantic import BaseModel

from memehub.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    GetUserVoteRequest,
    GetUserVoteResponse,
    GetUserVoteUseCase,
    RemoveVoteRequest,
    RemoveVoteUseCase,
)
from memehub.domain.error import DomainError
from memehub.domain.service import JWTService
from memehub.domain.value import VoteAction
from memehub.interface.error import require_user_id, to_http_exception

router = APIRouter(prefix="/memes", tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(BaseModel):
    """API request for casting a vote.

    ``value`` is left untyped so that anything other than 1 or -1 is
    reported as an invalid vote rather than coerced.
    """

    value: Any = None


@router.post("/{meme_id}/vote", response_model=CastVoteResponse)
async def cast_vote(
    meme_id: str,
    request: CastVoteAPIRequest,
    response: Response,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Upvote (1) or downvote (-1) a meme.

    Sending the same value again withdraws the vote; sending the opposite
    value flips it. Requires authentication. Answers 201 when a new vote
    was recorded, 200 when an existing one was flipped or withdrawn.

    Example:
        POST /memes/{meme_id}/vote {"value": 1}

        Response:
        {"meme_id": "...", "action": "added", "value": 1, "votes": 5, ...}

    Raises:
        HTTPException: 401 if not authenticated, 400 for an invalid value,
            404 if the meme does not exist, 409 on a concurrent duplicate
    """
    user_id = require_user_id(jwt_service, auth_token, "vote")

    try:
        result = await cast_vote_use_case.execute(
            CastVoteRequest(meme_id=meme_id, user_id=user_id, value=request.value)
        )
    except (DomainError, ValueError) as e:
        logfire.warn("Vote rejected", meme_id=meme_id, error=str(e))
        raise to_http_exception(e)

    if result.action == VoteAction.ADDED:
        response.status_code = status.HTTP_201_CREATED
    return result


@router.delete("/{meme_id}/vote", response_model=CastVoteResponse)
async def remove_vote(
    meme_id: str,
    remove_vote_use_case: FromDishka[RemoveVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Withdraw the current user's vote on a meme, up or down.

    Raises:
        HTTPException: 401 if not authenticated, 404 if the meme does not
            exist or the user has not voted on it
    """
    user_id = require_user_id(jwt_service, auth_token, "remove your vote")

    try:
        return await remove_vote_use_case.execute(
            RemoveVoteRequest(meme_id=meme_id, user_id=user_id)
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.get("/{meme_id}/vote", response_model=GetUserVoteResponse)
async def get_user_vote(
    meme_id: str,
    get_user_vote_use_case: FromDishka[GetUserVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetUserVoteResponse:
    """Get the current user's vote on a meme (``value`` is null if none).

    Raises:
        HTTPException: 401 if not authenticated, 404 if the meme does not exist
    """
    user_id = require_user_id(jwt_service, auth_token, "view your vote")

    try:
        return await get_user_vote_use_case.execute(
            GetUserVoteRequest(meme_id=meme_id, user_id=user_id)
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)
