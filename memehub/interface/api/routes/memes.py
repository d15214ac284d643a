"""Meme routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel

from memehub.application.usecase.common import MemeItem
from memehub.application.usecase.meme import (
    CreateMemeRequest,
    CreateMemeUseCase,
    DeleteMemeRequest,
    DeleteMemeResponse,
    DeleteMemeUseCase,
    GetMemeRequest,
    GetMemeUseCase,
    ListMemesRequest,
    ListMemesResponse,
    ListMemesUseCase,
    ListUserMemesRequest,
    ListUserMemesResponse,
    ListUserMemesUseCase,
    UpdateMemeRequest,
    UpdateMemeUseCase,
)
from memehub.config import PaginationSettings
from memehub.domain.error import DomainError
from memehub.domain.service import JWTService
from memehub.domain.value import MemeSort, MemeStatus, SortDirection
from memehub.interface.error import require_user_id, to_http_exception

router = APIRouter(prefix="/memes", tags=["memes"], route_class=DishkaRoute)


class CreateMemeAPIRequest(BaseModel):
    """API request for creating a meme."""

    title: str
    image_url: str
    original_image_url: str | None = None
    top_text: str | None = None
    bottom_text: str | None = None
    text_color: str = "#FFFFFF"
    font_size: int = 32
    status: MemeStatus = MemeStatus.DRAFT
    is_template_of: str | None = None


class UpdateMemeAPIRequest(BaseModel):
    """API request for updating a meme. Omitted fields are left unchanged."""

    title: str | None = None
    image_url: str | None = None
    top_text: str | None = None
    bottom_text: str | None = None
    text_color: str | None = None
    font_size: int | None = None
    status: MemeStatus | None = None


@router.get("", response_model=ListMemesResponse)
async def list_memes(
    list_memes_use_case: FromDishka[ListMemesUseCase],
    jwt_service: FromDishka[JWTService],
    pagination: FromDishka[PaginationSettings],
    sort: MemeSort = Query(MemeSort.CREATED_AT),
    direction: SortDirection = Query(SortDirection.DESC),
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=100),
    auth_token: str | None = Cookie(default=None),
) -> ListMemesResponse:
    """List published memes.

    Authentication is optional; signed-in users also get their own vote on
    each meme.

    Args:
        sort: createdAt (default), votes, views, top-day or top-week
        direction: asc or desc (default)
        page: 1-based page number
        limit: Page size (defaults to the configured memes per page)
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)

    return await list_memes_use_case.execute(
        ListMemesRequest(
            sort=sort,
            direction=direction,
            page=page,
            limit=limit or pagination.memes_per_page,
            user_id=user_id,
        )
    )


@router.get("/mine", response_model=ListUserMemesResponse)
async def list_my_memes(
    list_user_memes_use_case: FromDishka[ListUserMemesUseCase],
    jwt_service: FromDishka[JWTService],
    pagination: FromDishka[PaginationSettings],
    meme_status: MemeStatus | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=100),
    auth_token: str | None = Cookie(default=None),
) -> ListUserMemesResponse:
    """List the current user's memes, drafts included."""
    user_id = require_user_id(jwt_service, auth_token, "view your memes")

    try:
        return await list_user_memes_use_case.execute(
            ListUserMemesRequest(
                creator_id=user_id,
                viewer_id=user_id,
                status=meme_status,
                page=page,
                limit=limit or pagination.memes_per_page,
            )
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.get("/user/{user_id}", response_model=ListUserMemesResponse)
async def list_user_memes(
    user_id: str,
    list_user_memes_use_case: FromDishka[ListUserMemesUseCase],
    jwt_service: FromDishka[JWTService],
    pagination: FromDishka[PaginationSettings],
    meme_status: MemeStatus | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=100),
    auth_token: str | None = Cookie(default=None),
) -> ListUserMemesResponse:
    """List a user's memes. Drafts are only shown to their creator."""
    viewer_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await list_user_memes_use_case.execute(
            ListUserMemesRequest(
                creator_id=user_id,
                viewer_id=viewer_id,
                status=meme_status,
                page=page,
                limit=limit or pagination.memes_per_page,
            )
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.post("", response_model=MemeItem, status_code=status.HTTP_201_CREATED)
async def create_meme(
    request: CreateMemeAPIRequest,
    create_meme_use_case: FromDishka[CreateMemeUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MemeItem:
    """Create a meme. Requires authentication.

    Raises:
        HTTPException: 401 if not authenticated, 400 if a field is invalid,
            404 if the template meme does not exist
    """
    user_id = require_user_id(jwt_service, auth_token, "create memes")

    try:
        return await create_meme_use_case.execute(
            CreateMemeRequest(creator_id=user_id, **request.model_dump())
        )
    except (DomainError, ValueError) as e:
        logfire.warn("Meme creation failed", error=str(e))
        raise to_http_exception(e)


@router.get("/{meme_id}", response_model=MemeItem)
async def get_meme(
    meme_id: str,
    get_meme_use_case: FromDishka[GetMemeUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MemeItem:
    """Get a meme. Each call counts as a view."""
    user_id = jwt_service.get_user_id_from_token(auth_token)

    try:
        return await get_meme_use_case.execute(
            GetMemeRequest(meme_id=meme_id, user_id=user_id)
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.patch("/{meme_id}", response_model=MemeItem)
async def update_meme(
    meme_id: str,
    request: UpdateMemeAPIRequest,
    update_meme_use_case: FromDishka[UpdateMemeUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MemeItem:
    """Update a meme. Only its creator may edit it.

    Raises:
        HTTPException: 401 if not authenticated, 403 if not the creator,
            404 if the meme does not exist, 400 if a field is invalid
    """
    user_id = require_user_id(jwt_service, auth_token, "edit memes")

    try:
        return await update_meme_use_case.execute(
            UpdateMemeRequest(
                meme_id=meme_id,
                user_id=user_id,
                **request.model_dump(exclude_unset=True),
            )
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)


@router.delete("/{meme_id}", response_model=DeleteMemeResponse)
async def delete_meme(
    meme_id: str,
    delete_meme_use_case: FromDishka[DeleteMemeUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteMemeResponse:
    """Delete a meme with all of its votes and comments. Creator only."""
    user_id = require_user_id(jwt_service, auth_token, "delete memes")

    try:
        return await delete_meme_use_case.execute(
            DeleteMemeRequest(meme_id=meme_id, user_id=user_id)
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)
