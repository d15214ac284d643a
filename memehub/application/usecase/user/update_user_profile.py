"""Update user profile use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from memehub.domain.service import UserService
from memehub.domain.value import UserId


class UpdateUserProfileRequest(BaseModel):
    """Update user profile request.

    Fields left out of the request keep their stored value. ``bio`` and
    ``image`` may be set to null to clear them.
    """

    user_id: str  # From authenticated user
    name: str | None = Field(default=None, min_length=1, max_length=100)
    bio: str | None = Field(default=None, max_length=500)
    image: str | None = None


class UpdateUserProfileResponse(BaseModel):
    """Update user profile response."""

    user_id: str
    name: str
    email: str
    image: str | None
    bio: str | None
    updated_at: datetime


class UpdateUserProfileUseCase:
    """Use case for editing one's own name, bio and avatar.

    Email and role cannot be changed through this use case.
    """

    def __init__(self, user_service: UserService) -> None:
        """Initialize update user profile use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(
        self, request: UpdateUserProfileRequest
    ) -> UpdateUserProfileResponse:
        """Execute update user profile flow.

        Raises:
            NotFoundError: If the user has no account
        """
        changes = request.model_dump(exclude_unset=True, exclude={"user_id"})
        user = await self.user_service.update_profile(
            UserId(UUID(request.user_id)), changes
        )

        return UpdateUserProfileResponse(
            user_id=str(user.id),
            name=user.name,
            email=user.email,
            image=user.image,
            bio=user.bio,
            updated_at=user.updated_at,
        )
