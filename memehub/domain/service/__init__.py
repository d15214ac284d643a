"""Domain services."""

from .base import Service
from .comment_service import CommentPage, CommentService
from .jwt_service import JWTService
from .meme_service import MemePage, MemeService
from .moderation_service import ModerationService
from .user_service import Registration, UserService
from .vote_service import VoteDrift, VoteOutcome, VoteService

__all__ = [
    "CommentPage",
    "CommentService",
    "JWTService",
    "MemePage",
    "MemeService",
    "ModerationService",
    "Registration",
    "Service",
    "UserService",
    "VoteDrift",
    "VoteOutcome",
    "VoteService",
]
