"""Comment entity.

Comments are flat, short remarks on a meme. Community flags move a
comment into the hidden state once FLAG_THRESHOLD distinct users flag it.
"""

from datetime import datetime

from pydantic import Field

from memehub.domain.model.common import DomainModel, utcnow
from memehub.domain.value import FLAG_THRESHOLD, CommentId, MemeId, UserId


class Comment(DomainModel):
    """Comment entity.

    ``flagged`` is true once ``flag_count`` reaches FLAG_THRESHOLD and stays
    true until a moderator unflags the comment, which resets both fields.
    """

    id: CommentId
    meme_id: MemeId
    creator_id: UserId
    text: str = Field(min_length=1, max_length=140)
    flagged: bool = False
    flag_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def over_threshold(self) -> bool:
        return self.flag_count >= FLAG_THRESHOLD
