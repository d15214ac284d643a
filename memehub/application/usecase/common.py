"""Response pieces shared by several use cases."""

import math
from datetime import datetime

from pydantic import BaseModel

from memehub.domain.model import Meme, User
from memehub.domain.value import MemeStatus, VoteValue


class PaginationInfo(BaseModel):
    """Page metadata returned alongside every paginated listing."""

    total_items: int
    total_pages: int
    current_page: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool
    next_page: int | None
    prev_page: int | None

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PaginationInfo":
        total_pages = math.ceil(total / limit) if limit else 0
        has_next = page < total_pages
        has_prev = page > 1
        return cls(
            total_items=total,
            total_pages=total_pages,
            current_page=page,
            items_per_page=limit,
            has_next_page=has_next,
            has_prev_page=has_prev,
            next_page=page + 1 if has_next else None,
            prev_page=page - 1 if has_prev else None,
        )


def page_offset(page: int, limit: int) -> int:
    """Row offset of a 1-based page."""
    return (page - 1) * limit


class AuthorInfo(BaseModel):
    """Public identity of a meme or comment creator."""

    user_id: str
    name: str
    image: str | None

    @classmethod
    def from_user(cls, user: User) -> "AuthorInfo":
        return cls(user_id=str(user.id), name=user.name, image=user.image)


def author_or_none(users: dict, user_id) -> AuthorInfo | None:
    """Look up an author, tolerating accounts that have since been removed."""
    user = users.get(user_id)
    return AuthorInfo.from_user(user) if user else None


class MemeItem(BaseModel):
    """A meme as returned by the API.

    ``user_vote`` is the viewer's vote (+1/-1), or None when anonymous or
    not voted.
    """

    meme_id: str
    title: str
    image_url: str
    original_image_url: str | None
    top_text: str | None
    bottom_text: str | None
    text_color: str
    font_size: int
    status: MemeStatus
    views: int
    votes: int
    comment_count: int
    is_template_of: str | None
    creator: AuthorInfo | None
    user_vote: int | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_meme(
        cls,
        meme: Meme,
        creator: AuthorInfo | None,
        user_vote: VoteValue | None = None,
    ) -> "MemeItem":
        return cls(
            meme_id=str(meme.id),
            title=meme.title,
            image_url=meme.image_url,
            original_image_url=meme.original_image_url,
            top_text=meme.top_text,
            bottom_text=meme.bottom_text,
            text_color=meme.text_color.root,
            font_size=meme.font_size,
            status=meme.status,
            views=meme.views,
            votes=meme.votes,
            comment_count=meme.comment_count,
            is_template_of=str(meme.is_template_of) if meme.is_template_of else None,
            creator=creator,
            user_vote=int(user_vote) if user_vote is not None else None,
            created_at=meme.created_at,
            updated_at=meme.updated_at,
        )
