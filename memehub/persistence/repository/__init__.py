"""PostgreSQL repository implementations."""

from memehub.persistence.repository.comment import PostgresCommentRepository
from memehub.persistence.repository.comment_flag import PostgresCommentFlagRepository
from memehub.persistence.repository.meme import PostgresMemeRepository
from memehub.persistence.repository.user import PostgresUserRepository
from memehub.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresMemeRepository",
    "PostgresVoteRepository",
    "PostgresCommentRepository",
    "PostgresCommentFlagRepository",
]
