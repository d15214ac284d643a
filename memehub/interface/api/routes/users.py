"""User profile routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from memehub.application.usecase.user import (
    GetUserProfileRequest,
    GetUserProfileResponse,
    GetUserProfileUseCase,
)
from memehub.domain.error import DomainError
from memehub.interface.error import to_http_exception

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("/{user_id}", response_model=GetUserProfileResponse)
async def get_user_profile(
    user_id: str,
    get_user_profile_use_case: FromDishka[GetUserProfileUseCase],
) -> GetUserProfileResponse:
    """Get a user's public profile.

    Raises:
        HTTPException: 404 if user not found, 400 if the ID is malformed
    """
    try:
        return await get_user_profile_use_case.execute(
            GetUserProfileRequest(user_id=user_id)
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)
