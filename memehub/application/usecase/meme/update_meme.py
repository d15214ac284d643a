"""Update meme use case."""

from uuid import UUID

from pydantic import BaseModel

from memehub.application.usecase.common import MemeItem, author_or_none
from memehub.domain.service import MemeService, UserService
from memehub.domain.value import MemeId, MemeStatus, UserId


class UpdateMemeRequest(BaseModel):
    """Update meme request. Only fields that are set are changed."""

    meme_id: str
    user_id: str  # Requestor
    title: str | None = None
    image_url: str | None = None
    top_text: str | None = None
    bottom_text: str | None = None
    text_color: str | None = None
    font_size: int | None = None
    status: MemeStatus | None = None


class UpdateMemeUseCase:
    """Use case for a creator editing their meme (e.g. publishing a draft)."""

    def __init__(self, meme_service: MemeService, user_service: UserService) -> None:
        self.meme_service = meme_service
        self.user_service = user_service

    async def execute(self, request: UpdateMemeRequest) -> MemeItem:
        """Execute update meme flow.

        Raises:
            NotFoundError: If the meme does not exist
            NotAuthorizedError: If the requestor did not create the meme
            ValueError: If a changed field fails validation
        """
        changes = request.model_dump(
            exclude_unset=True, exclude={"meme_id", "user_id"}
        )
        meme = await self.meme_service.update_meme(
            MemeId(UUID(request.meme_id)), UserId(UUID(request.user_id)), changes
        )

        creators = await self.user_service.get_users_by_ids([meme.creator_id])
        return MemeItem.from_meme(meme, author_or_none(creators, meme.creator_id))
