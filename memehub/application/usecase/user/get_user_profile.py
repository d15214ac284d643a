"""Get user profile use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from memehub.domain.service import UserService
from memehub.domain.value import UserId, UserRole


class GetUserProfileRequest(BaseModel):
    """Get user profile request."""

    user_id: str


class GetUserProfileResponse(BaseModel):
    """Public profile. Email is not exposed."""

    user_id: str
    name: str
    image: str | None
    bio: str | None
    role: UserRole
    created_at: datetime


class GetUserProfileUseCase:
    """Use case for getting a user's public profile."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: GetUserProfileRequest) -> GetUserProfileResponse:
        """Execute get user profile flow.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))

        return GetUserProfileResponse(
            user_id=str(user.id),
            name=user.name,
            image=user.image,
            bio=user.bio,
            role=user.role,
            created_at=user.created_at,
        )
