"""Vote use cases."""

from .cast_vote import CastVoteRequest, CastVoteResponse, CastVoteUseCase
from .get_user_vote import GetUserVoteRequest, GetUserVoteResponse, GetUserVoteUseCase
from .reconcile_votes import ReconcileVotesResponse, ReconcileVotesUseCase
from .remove_vote import RemoveVoteRequest, RemoveVoteUseCase

__all__ = [
    "CastVoteRequest",
    "CastVoteResponse",
    "CastVoteUseCase",
    "GetUserVoteRequest",
    "GetUserVoteResponse",
    "GetUserVoteUseCase",
    "ReconcileVotesResponse",
    "ReconcileVotesUseCase",
    "RemoveVoteRequest",
    "RemoveVoteUseCase",
]
