"""Reconcile votes use case.

Recomputes every meme's vote total from the vote ledger. Run periodically
via ``scripts/reconcile_votes.py``; totals only drift through manual data
edits, since casts update ledger and total in one transaction.
"""

from pydantic import BaseModel

from memehub.domain.service import VoteService


class VoteDriftItem(BaseModel):
    """A corrected meme total."""

    meme_id: str
    stored: int
    actual: int


class ReconcileVotesResponse(BaseModel):
    """Reconcile votes response."""

    corrected: list[VoteDriftItem]


class ReconcileVotesUseCase:
    """Use case for repairing drift between meme totals and their votes."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self) -> ReconcileVotesResponse:
        drifts = await self.vote_service.reconcile_all()
        return ReconcileVotesResponse(
            corrected=[
                VoteDriftItem(
                    meme_id=str(drift.meme_id),
                    stored=drift.stored,
                    actual=drift.actual,
                )
                for drift in drifts
            ]
        )
