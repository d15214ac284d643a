"""Comment flag entity: one user's report against one comment."""

from datetime import datetime

from pydantic import Field

from memehub.domain.model.common import DomainModel, utcnow
from memehub.domain.value import CommentFlagId, CommentId, UserId


class CommentFlag(DomainModel):
    """At most one flag exists per (comment, user) pair."""

    id: CommentFlagId
    comment_id: CommentId
    user_id: UserId
    created_at: datetime = Field(default_factory=utcnow)
