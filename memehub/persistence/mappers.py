"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from memehub.domain.model import Comment, CommentFlag, Meme, User, Vote
from memehub.domain.value import (
    CommentFlagId,
    CommentId,
    HexColor,
    MemeId,
    MemeStatus,
    UserId,
    UserRole,
    VoteId,
    VoteValue,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        name=row["name"],
        email=row["email"],
        image=row.get("image"),
        bio=row.get("bio"),
        role=UserRole(row["role"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = user.model_dump()
    data["role"] = user.role.value
    return data


def row_to_meme(row: Dict[str, Any]) -> Meme:
    """Convert database row to Meme domain model.

    Args:
        row: Database row as dict

    Returns:
        Meme domain model
    """
    return Meme(
        id=MemeId(_uuid(row["id"])),
        title=row["title"],
        image_url=row["image_url"],
        original_image_url=row.get("original_image_url"),
        top_text=row.get("top_text"),
        bottom_text=row.get("bottom_text"),
        text_color=HexColor(row["text_color"]),
        font_size=row["font_size"],
        creator_id=UserId(_uuid(row["creator_id"])),
        status=MemeStatus(row["status"]),
        views=row["views"],
        votes=row["votes"],
        comment_count=row["comment_count"],
        is_template_of=MemeId(_uuid(row["is_template_of"]))
        if row.get("is_template_of")
        else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def meme_to_dict(meme: Meme) -> Dict[str, Any]:
    """Convert Meme domain model to database dict.

    HexColor dumps to its bare string; the status enum is stored by value.
    """
    data = meme.model_dump()
    data["status"] = meme.status.value
    return data


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(_uuid(row["id"])),
        meme_id=MemeId(_uuid(row["meme_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        value=VoteValue(row["value"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    data = vote.model_dump()
    data["value"] = int(vote.value)
    return data


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        meme_id=MemeId(_uuid(row["meme_id"])),
        creator_id=UserId(_uuid(row["creator_id"])),
        text=row["text"],
        flagged=row["flagged"],
        flag_count=row["flag_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    return comment.model_dump()


def row_to_comment_flag(row: Dict[str, Any]) -> CommentFlag:
    return CommentFlag(
        id=CommentFlagId(_uuid(row["id"])),
        comment_id=CommentId(_uuid(row["comment_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        created_at=row["created_at"],
    )


def comment_flag_to_dict(flag: CommentFlag) -> Dict[str, Any]:
    return flag.model_dump()
