"""Meme aggregate root.

A meme is an image URL with overlay text. ``votes`` and ``comment_count``
are denormalised counters maintained by the vote and comment services.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from memehub.domain.model.common import DomainModel, utcnow
from memehub.domain.value import HexColor, MemeId, MemeStatus, UserId


class Meme(DomainModel):
    """Meme aggregate root.

    Business rules:
    - ``votes`` always equals the sum of the meme's vote values
    - ``comment_count`` never drops below zero
    - Only published memes appear in the public listing
    """

    id: MemeId
    title: str = Field(min_length=1, max_length=100)
    image_url: str = Field(min_length=1)
    original_image_url: Optional[str] = None
    top_text: Optional[str] = Field(default=None, max_length=200)
    bottom_text: Optional[str] = Field(default=None, max_length=200)
    text_color: HexColor = HexColor("#FFFFFF")
    font_size: int = Field(default=32, ge=8, le=200)
    creator_id: UserId
    status: MemeStatus = MemeStatus.DRAFT
    views: int = Field(default=0, ge=0)
    votes: int = 0
    comment_count: int = Field(default=0, ge=0)
    is_template_of: Optional[MemeId] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_published(self) -> bool:
        return self.status == MemeStatus.PUBLISHED
