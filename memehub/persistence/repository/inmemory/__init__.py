"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .comment_flag import InMemoryCommentFlagRepository
from .meme import InMemoryMemeRepository
from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryCommentFlagRepository",
    "InMemoryMemeRepository",
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
