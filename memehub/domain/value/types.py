"""Domain value objects for MemeGenHub.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum, IntEnum
from typing import Optional

from pydantic import field_validator

from memehub.domain.value.common import RootValueObject, ValueObject
from memehub.domain.value.identifiers import UserId

# Number of distinct user flags that hides a comment from regular viewers
FLAG_THRESHOLD = 3


class VoteValue(IntEnum):
    """Direction of a vote. The integer is the contribution to Meme.votes."""

    UP = 1
    DOWN = -1


class VoteAction(str, Enum):
    """Outcome of casting a vote."""

    ADDED = "added"
    UPDATED = "updated"
    REMOVED = "removed"


class MemeStatus(str, Enum):
    """Publication status of a meme."""

    DRAFT = "draft"
    PUBLISHED = "published"


class MemeSort(str, Enum):
    """Orderings available for the public meme listing."""

    CREATED_AT = "createdAt"
    VOTES = "votes"
    VIEWS = "views"
    TOP_DAY = "top-day"
    TOP_WEEK = "top-week"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class UserRole(str, Enum):
    """Capability level of a user.

    Moderators may unflag and delete any comment and see flagged content.
    """

    USER = "user"
    MODERATOR = "moderator"


class HexColor(RootValueObject[str]):
    """CSS hex colour for meme overlay text, e.g. '#FFFFFF' or '#fff'."""

    @field_validator("root")
    @classmethod
    def validate_hex_color(cls, v: str) -> str:
        if not re.match(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$", v):
            raise ValueError("Color must be a hex value like #FFFFFF")
        return v


class Viewer(ValueObject):
    """Who is looking at a listing.

    Anonymous viewers have no user_id. The role is always loaded from the
    user record, never taken from the token.
    """

    user_id: Optional[UserId] = None
    role: UserRole = UserRole.USER

    @property
    def is_moderator(self) -> bool:
        return self.role == UserRole.MODERATOR

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None
