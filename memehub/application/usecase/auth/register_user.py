"""Register user use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from memehub.domain.service import UserService
from memehub.domain.value import UserId, UserRole


class RegisterUserRequest(BaseModel):
    """Register user request."""

    user_id: str  # From the verified auth token
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    image: str | None = None


class RegisterUserResponse(BaseModel):
    """The account, and whether this request created it."""

    user_id: str
    name: str
    email: str
    image: str | None
    role: UserRole
    created: bool
    created_at: datetime


class RegisterUserUseCase:
    """Use case creating the account row for a signed-in identity.

    Sign-in itself happens in the frontend. Until this runs, votes,
    comments, flags and memes from the identity are refused because no
    account exists to own them.
    """

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: RegisterUserRequest) -> RegisterUserResponse:
        """Execute register user flow.

        Steps:
        1. Return the account if the token's user ID already has one
        2. Otherwise create it, refusing an email another account uses

        Raises:
            EmailTakenError: If the email belongs to another account
        """
        registration = await self.user_service.register_user(
            user_id=UserId(UUID(request.user_id)),
            name=request.name,
            email=request.email,
            image=request.image,
        )
        user = registration.user

        return RegisterUserResponse(
            user_id=str(user.id),
            name=user.name,
            email=user.email,
            image=user.image,
            role=user.role,
            created=registration.created,
            created_at=user.created_at,
        )
