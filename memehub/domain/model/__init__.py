"""Domain model entities for MemeGenHub."""

from memehub.domain.model.comment import Comment
from memehub.domain.model.comment_flag import CommentFlag
from memehub.domain.model.meme import Meme
from memehub.domain.model.user import User
from memehub.domain.model.vote import Vote

__all__ = [
    "User",
    "Meme",
    "Vote",
    "Comment",
    "CommentFlag",
]
