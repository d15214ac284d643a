"""User aggregate root.

Sign-in happens in the frontend; an account row is registered here the
first time a signed-in identity calls the API, keyed on the token's user ID.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from memehub.domain.model.common import DomainModel, utcnow
from memehub.domain.value import UserId, UserRole


class User(DomainModel):
    """A registered member of the community."""

    id: UserId
    name: str = Field(min_length=1, max_length=100)
    email: str
    image: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=500)
    role: UserRole = UserRole.USER
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_moderator(self) -> bool:
        return self.role == UserRole.MODERATOR
