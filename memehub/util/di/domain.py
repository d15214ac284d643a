"""Domain layer DI providers."""

from dishka import Scope, provide

from memehub.config import AuthSettings
from memehub.domain.repository import (
    CommentFlagRepository,
    CommentRepository,
    MemeRepository,
    UserRepository,
    VoteRepository,
)
from memehub.domain.service import (
    CommentService,
    JWTService,
    MemeService,
    ModerationService,
    UserService,
    VoteService,
)
from memehub.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_meme_service(self, meme_repository: MemeRepository) -> MemeService:
        """Provide meme domain service."""
        return MemeService(meme_repository=meme_repository)

    @provide
    def get_vote_service(
        self, vote_repository: VoteRepository, meme_service: MemeService
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(vote_repository=vote_repository, meme_service=meme_service)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        comment_flag_repository: CommentFlagRepository,
        meme_service: MemeService,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            comment_flag_repository=comment_flag_repository,
            meme_service=meme_service,
        )

    @provide
    def get_moderation_service(
        self,
        comment_repository: CommentRepository,
        comment_flag_repository: CommentFlagRepository,
    ) -> ModerationService:
        """Provide comment moderation domain service."""
        return ModerationService(
            comment_repository=comment_repository,
            comment_flag_repository=comment_flag_repository,
        )
