"""Create meme use case."""

from uuid import UUID

from pydantic import BaseModel

from memehub.application.usecase.common import AuthorInfo, MemeItem
from memehub.domain.service import MemeService, UserService
from memehub.domain.value import MemeId, MemeStatus, UserId


class CreateMemeRequest(BaseModel):
    """Create meme request.

    Image URLs are accepted as given; uploading and hosting images is the
    frontend's concern.
    """

    creator_id: str  # User ID from authenticated user
    title: str
    image_url: str
    original_image_url: str | None = None
    top_text: str | None = None
    bottom_text: str | None = None
    text_color: str = "#FFFFFF"
    font_size: int = 32
    status: MemeStatus = MemeStatus.DRAFT
    is_template_of: str | None = None


class CreateMemeUseCase:
    """Use case for creating a meme."""

    def __init__(self, meme_service: MemeService, user_service: UserService) -> None:
        """Initialize create meme use case.

        Args:
            meme_service: Meme domain service
            user_service: User domain service
        """
        self.meme_service = meme_service
        self.user_service = user_service

    async def execute(self, request: CreateMemeRequest) -> MemeItem:
        """Execute create meme flow.

        Raises:
            NotFoundError: If the creator or template meme does not exist
            ValueError: If a field fails validation
        """
        creator = await self.user_service.get_by_id(UserId(UUID(request.creator_id)))

        meme = await self.meme_service.create_meme(
            creator_id=creator.id,
            title=request.title,
            image_url=request.image_url,
            original_image_url=request.original_image_url,
            top_text=request.top_text,
            bottom_text=request.bottom_text,
            text_color=request.text_color,
            font_size=request.font_size,
            status=request.status,
            is_template_of=MemeId(UUID(request.is_template_of))
            if request.is_template_of
            else None,
        )

        return MemeItem.from_meme(meme, AuthorInfo.from_user(creator))
