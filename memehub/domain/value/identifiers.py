"""Strongly typed identifiers for MemeGenHub domain entities.

NewType keeps a MemeId from being passed where a CommentId is expected.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
MemeId = NewType("MemeId", UUID)
VoteId = NewType("VoteId", UUID)
CommentId = NewType("CommentId", UUID)
CommentFlagId = NewType("CommentFlagId", UUID)
