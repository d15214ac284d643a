"""Authentication routes.

Sign-in happens in the frontend, which issues the ``auth_token`` cookie.
The API reads it, registers the account behind it and lets the user edit
their profile.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Response, status
from pydantic import BaseModel

from memehub.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
    RegisterUserRequest,
    RegisterUserResponse,
    RegisterUserUseCase,
)
from memehub.application.usecase.user import (
    UpdateUserProfileRequest,
    UpdateUserProfileResponse,
    UpdateUserProfileUseCase,
)
from memehub.domain.error import DomainError, NotFoundError
from memehub.domain.service import JWTService
from memehub.interface.error import require_user_id, to_http_exception
from memehub.util.jwt import JWTError

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class AuthStatusResponse(BaseModel):
    """Response for checking authentication status.

    Used by /auth/me to return current user if authenticated,
    or indicate unauthenticated state without raising an error.
    """

    authenticated: bool
    user: GetCurrentUserResponse | None = None


class RegisterAPIRequest(BaseModel):
    """API request for registering the signed-in identity."""

    name: str
    email: str
    image: str | None = None


class UpdateProfileAPIRequest(BaseModel):
    """API request for a profile edit; omitted fields are left alone."""

    name: str | None = None
    bio: str | None = None
    image: str | None = None


@router.get("/me", response_model=AuthStatusResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AuthStatusResponse:
    """Get current user if authenticated, or return unauthenticated status.

    Safe to call without a cookie; the frontend uses it to learn who is
    signed in and whether they are a moderator.

    Examples:
        Authenticated:
        {
            "authenticated": true,
            "user": {"user_id": "...", "name": "Alice", "role": "moderator", ...}
        }

        Unauthenticated:
        {
            "authenticated": false,
            "user": null
        }
    """
    if not auth_token:
        return AuthStatusResponse(authenticated=False)

    try:
        user = await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=auth_token)
        )
        return AuthStatusResponse(authenticated=True, user=user)

    except JWTError:
        # Invalid or expired token
        return AuthStatusResponse(authenticated=False)
    except NotFoundError:
        # Valid token, but the account is not registered (or was deleted)
        return AuthStatusResponse(authenticated=False)


@router.post("/register", response_model=RegisterUserResponse)
async def register(
    request: RegisterAPIRequest,
    response: Response,
    register_user_use_case: FromDishka[RegisterUserUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RegisterUserResponse:
    """Create the account for the signed-in identity.

    Answers 201 when the account is created and 200 when it already
    existed, so the frontend can call it after every sign-in.

    Raises:
        HTTPException: 401 if not authenticated, 400 for invalid fields,
            409 if another account uses the email
    """
    user_id = require_user_id(jwt_service, auth_token, "register")

    try:
        result = await register_user_use_case.execute(
            RegisterUserRequest(user_id=user_id, **request.model_dump())
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)

    if result.created:
        response.status_code = status.HTTP_201_CREATED
    return result


@router.put("/profile", response_model=UpdateUserProfileResponse)
async def update_profile(
    request: UpdateProfileAPIRequest,
    update_user_profile_use_case: FromDishka[UpdateUserProfileUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> UpdateUserProfileResponse:
    """Edit the signed-in user's name, bio or avatar URL.

    Raises:
        HTTPException: 401 if not authenticated, 400 for invalid fields,
            404 if the account is not registered
    """
    user_id = require_user_id(jwt_service, auth_token, "edit your profile")

    try:
        return await update_user_profile_use_case.execute(
            UpdateUserProfileRequest(
                user_id=user_id, **request.model_dump(exclude_unset=True)
            )
        )
    except (DomainError, ValueError) as e:
        raise to_http_exception(e)
