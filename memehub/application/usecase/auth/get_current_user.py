"""Get current user use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from memehub.domain.service import JWTService, UserService
from memehub.domain.value import UserId, UserRole


class GetCurrentUserRequest(BaseModel):
    token: str  # Value of the auth_token cookie


class GetCurrentUserResponse(BaseModel):
    """The signed-in user, as shown in the header and the dashboard.

    ``is_moderator`` tells the frontend whether to offer the flagged
    comment queue; the API checks the role again on every moderator call.
    """

    user_id: str
    name: str
    email: str
    image: str | None
    bio: str | None
    role: UserRole
    is_moderator: bool
    created_at: datetime


class GetCurrentUserUseCase:
    """Use case resolving the auth cookie to the stored user."""

    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Execute get current user flow.

        Raises:
            JWTError: If the token is invalid or expired
            NotFoundError: If the token names a user that no longer exists
        """
        user_id = UserId(UUID(self.jwt_service.verify_token(request.token).user_id))
        user = await self.user_service.get_by_id(user_id)

        return GetCurrentUserResponse(
            user_id=str(user.id),
            name=user.name,
            email=user.email,
            image=user.image,
            bio=user.bio,
            role=user.role,
            is_moderator=user.is_moderator,
            created_at=user.created_at,
        )
