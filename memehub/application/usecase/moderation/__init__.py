"""Comment moderation use cases."""

from .flag_comment import FlagCommentRequest, FlagCommentResponse, FlagCommentUseCase
from .get_flagged_comments import (
    GetFlaggedCommentsRequest,
    GetFlaggedCommentsResponse,
    GetFlaggedCommentsUseCase,
)
from .unflag_comment import (
    UnflagCommentRequest,
    UnflagCommentResponse,
    UnflagCommentUseCase,
)

__all__ = [
    "FlagCommentRequest",
    "FlagCommentResponse",
    "FlagCommentUseCase",
    "GetFlaggedCommentsRequest",
    "GetFlaggedCommentsResponse",
    "GetFlaggedCommentsUseCase",
    "UnflagCommentRequest",
    "UnflagCommentResponse",
    "UnflagCommentUseCase",
]
