"""Vote entity.

Each user holds at most one vote per meme, either up (+1) or down (-1).
"""

from datetime import datetime

from pydantic import Field

from memehub.domain.model.common import DomainModel, utcnow
from memehub.domain.value import MemeId, UserId, VoteId, VoteValue


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per meme (enforced by database unique constraint)
    - Re-casting the same value removes the vote; the opposite value flips it
    """

    id: VoteId
    meme_id: MemeId
    user_id: UserId
    value: VoteValue
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
