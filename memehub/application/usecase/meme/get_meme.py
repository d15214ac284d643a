"""Get meme use case."""

from uuid import UUID

from pydantic import BaseModel

from memehub.application.usecase.common import MemeItem, author_or_none
from memehub.domain.service import MemeService, UserService, VoteService
from memehub.domain.value import MemeId, UserId


class GetMemeRequest(BaseModel):
    """Get meme request."""

    meme_id: str
    user_id: str | None = None  # Authenticated viewer, if any


class GetMemeUseCase:
    """Use case for viewing a single meme. Each view is counted."""

    def __init__(
        self,
        meme_service: MemeService,
        vote_service: VoteService,
        user_service: UserService,
    ) -> None:
        self.meme_service = meme_service
        self.vote_service = vote_service
        self.user_service = user_service

    async def execute(self, request: GetMemeRequest) -> MemeItem:
        """Execute get meme flow.

        Raises:
            NotFoundError: If the meme does not exist
        """
        meme = await self.meme_service.record_view(MemeId(UUID(request.meme_id)))

        user_vote = None
        if request.user_id:
            votes = await self.vote_service.get_user_votes_for_memes(
                UserId(UUID(request.user_id)), [meme.id]
            )
            user_vote = votes.get(meme.id)

        creators = await self.user_service.get_users_by_ids([meme.creator_id])
        return MemeItem.from_meme(
            meme, author_or_none(creators, meme.creator_id), user_vote
        )
