"""Domain value objects for MemeGenHub."""

from memehub.domain.value.identifiers import (
    CommentFlagId,
    CommentId,
    MemeId,
    UserId,
    VoteId,
)
from memehub.domain.value.types import (
    FLAG_THRESHOLD,
    HexColor,
    MemeSort,
    MemeStatus,
    SortDirection,
    UserRole,
    Viewer,
    VoteAction,
    VoteValue,
)

__all__ = [
    # Identifiers
    "UserId",
    "MemeId",
    "VoteId",
    "CommentId",
    "CommentFlagId",
    # Types
    "FLAG_THRESHOLD",
    "HexColor",
    "MemeSort",
    "MemeStatus",
    "SortDirection",
    "UserRole",
    "Viewer",
    "VoteAction",
    "VoteValue",
]
