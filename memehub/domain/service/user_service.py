"""User domain service."""

from dataclasses import dataclass
from typing import Any

import logfire

from memehub.domain.error import EmailTakenError, NotFoundError
from memehub.domain.model import User
from memehub.domain.model.common import utcnow
from memehub.domain.repository import UserRepository
from memehub.domain.value import UserId, UserRole, Viewer

from .base import Service

# Profile fields a user may change themselves; role and email are not among them
PROFILE_FIELDS = frozenset({"name", "bio", "image"})


@dataclass
class Registration:
    """Result of registering an account."""

    user: User
    created: bool  # False when the account already existed


class UserService(Service):
    """Domain service for user operations."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_users_by_ids(self, user_ids: list[UserId]) -> dict[UserId, User]:
        """Load several users at once, skipping IDs that no longer exist."""
        users = await self.user_repository.find_by_ids(user_ids)
        return {user.id: user for user in users}

    async def register_user(
        self,
        user_id: UserId,
        name: str,
        email: str,
        image: str | None = None,
    ) -> Registration:
        """Create the account row for an authenticated identity.

        The ID comes from the verified auth token. Registering again with
        the same ID returns the existing account unchanged.

        Args:
            user_id: ID carried by the auth token
            name: Display name
            email: Contact email, stored lowercased
            image: Avatar URL

        Returns:
            The account and whether this call created it

        Raises:
            EmailTakenError: If another account already uses this email
            pydantic.ValidationError: If a field violates the user's constraints
        """
        with logfire.span("user_service.register_user", user_id=str(user_id)):
            existing = await self.user_repository.find_by_id(user_id)
            if existing:
                logfire.info("User already registered", user_id=str(user_id))
                return Registration(user=existing, created=False)

            normalized_email = email.strip().lower()
            if await self.user_repository.find_by_email(normalized_email):
                logfire.warn("Registration with taken email", user_id=str(user_id))
                raise EmailTakenError(normalized_email)

            now = utcnow()
            user = User(
                id=user_id,
                name=name.strip(),
                email=normalized_email,
                image=image,
                created_at=now,
                updated_at=now,
            )
            saved = await self.user_repository.save(user)
            logfire.info("User registered", user_id=str(saved.id))
            return Registration(user=saved, created=True)

    async def update_profile(self, user_id: UserId, changes: dict[str, Any]) -> User:
        """Apply profile changes to the user's own account.

        Only name, bio and image are applied. A null name is ignored since
        every account needs one.

        Raises:
            NotFoundError: If the user does not exist
            pydantic.ValidationError: If a value violates the user's constraints
        """
        with logfire.span(
            "user_service.update_profile", user_id=str(user_id), fields=sorted(changes)
        ):
            user = await self.get_by_id(user_id)

            update = {k: v for k, v in changes.items() if k in PROFILE_FIELDS}
            if update.get("name", "") is None:
                del update["name"]

            # model_copy skips validation, so rebuild through the constructor
            updated = User(**{**user.model_dump(), **update, "updated_at": utcnow()})
            saved = await self.user_repository.save(updated)
            logfire.info("Profile updated", user_id=str(user_id))
            return saved

    async def get_viewer(self, user_id: UserId | None) -> Viewer:
        """Resolve who is making a request.

        The role comes from the stored user record on every call, so a
        demoted moderator loses access immediately.

        Args:
            user_id: Authenticated user ID, or None for anonymous requests

        Returns:
            Viewer with the user's current role (anonymous if unknown)
        """
        if user_id is None:
            return Viewer()

        user = await self.user_repository.find_by_id(user_id)
        if not user:
            logfire.warn("Token refers to unknown user", user_id=str(user_id))
            return Viewer()
        return Viewer(user_id=user.id, role=user.role)

    async def set_role(self, email: str, role: UserRole) -> User:
        """Change a user's role, looked up by email.

        Raises:
            NotFoundError: If no user has this email
        """
        with logfire.span("user_service.set_role", email=email, role=role.value):
            user = await self.user_repository.find_by_email(email)
            if not user:
                raise NotFoundError("User", email)

            updated = await self.user_repository.save(
                user.model_copy(update={"role": role, "updated_at": utcnow()})
            )
            logfire.info("User role changed", user_id=str(user.id), role=role.value)
            return updated
