"""Repository interfaces for MemeGenHub domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from memehub.domain.repository.comment import CommentRepository
from memehub.domain.repository.comment_flag import CommentFlagRepository
from memehub.domain.repository.meme import MemeOrderField, MemeRepository
from memehub.domain.repository.user import UserRepository
from memehub.domain.repository.vote import VoteRepository

__all__ = [
    "UserRepository",
    "MemeRepository",
    "MemeOrderField",
    "VoteRepository",
    "CommentRepository",
    "CommentFlagRepository",
]
