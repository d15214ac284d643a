"""Test configuration and shared builders."""

from datetime import timedelta
from uuid import uuid4

import logfire

from memehub.domain.model import Comment, Meme, User
from memehub.domain.model.common import utcnow
from memehub.domain.repository import UserRepository
from memehub.domain.value import (
    CommentId,
    MemeId,
    MemeStatus,
    UserId,
    UserRole,
)

# Keep spans local; tests never talk to Logfire cloud
logfire.configure(send_to_logfire=False, console=False)


def make_user(
    name: str = "alice",
    role: UserRole = UserRole.USER,
    email: str | None = None,
    user_id: UserId | None = None,
) -> User:
    """Build a user with a unique id and email."""
    user_id = user_id or UserId(uuid4())
    return User(
        id=user_id,
        name=name,
        email=email or f"{name}-{user_id.hex[:8]}@example.com",
        role=role,
    )


async def seed_user(
    env, name: str = "alice", role: UserRole = UserRole.USER
) -> User:
    """Register a user in the container's user repository.

    Votes, flags, comments and memes must belong to a stored user.
    """
    user = make_user(name, role=role)
    user_repo = await env.get(UserRepository)
    await user_repo.save(user)
    return user


def make_meme(
    creator_id: UserId,
    title: str = "Distracted boyfriend",
    status: MemeStatus = MemeStatus.PUBLISHED,
    votes: int = 0,
    views: int = 0,
    age: timedelta = timedelta(0),
) -> Meme:
    """Build a meme created ``age`` ago."""
    created = utcnow() - age
    return Meme(
        id=MemeId(uuid4()),
        title=title,
        image_url="https://img.example.com/boyfriend.png",
        top_text="me",
        bottom_text="new framework",
        creator_id=creator_id,
        status=status,
        votes=votes,
        views=views,
        created_at=created,
        updated_at=created,
    )


def make_comment(
    meme_id: MemeId,
    creator_id: UserId,
    text: str = "lol",
    flag_count: int = 0,
    flagged: bool = False,
    age: timedelta = timedelta(0),
) -> Comment:
    """Build a comment created ``age`` ago."""
    created = utcnow() - age
    return Comment(
        id=CommentId(uuid4()),
        meme_id=meme_id,
        creator_id=creator_id,
        text=text,
        flag_count=flag_count,
        flagged=flagged,
        created_at=created,
        updated_at=created,
    )


async def seed_creators(env, *entities) -> None:
    """Register the creator of each meme or comment that is not yet stored."""
    user_repo = await env.get(UserRepository)
    for entity in entities:
        if await user_repo.find_by_id(entity.creator_id) is None:
            await user_repo.save(make_user("creator", user_id=entity.creator_id))
