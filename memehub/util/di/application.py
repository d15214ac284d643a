"""Application layer DI providers."""

from dishka import Scope, provide

from memehub.application.usecase.auth import GetCurrentUserUseCase, RegisterUserUseCase
from memehub.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentsUseCase,
)
from memehub.application.usecase.meme import (
    CreateMemeUseCase,
    DeleteMemeUseCase,
    GetMemeUseCase,
    ListMemesUseCase,
    ListUserMemesUseCase,
    UpdateMemeUseCase,
)
from memehub.application.usecase.moderation import (
    FlagCommentUseCase,
    GetFlaggedCommentsUseCase,
    UnflagCommentUseCase,
)
from memehub.application.usecase.user import (
    GetUserProfileUseCase,
    UpdateUserProfileUseCase,
)
from memehub.application.usecase.vote import (
    CastVoteUseCase,
    GetUserVoteUseCase,
    ReconcileVotesUseCase,
    RemoveVoteUseCase,
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


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth and user use cases
    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, jwt_service: JWTService, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(jwt_service=jwt_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_user_profile_use_case(
        self, user_service: UserService
    ) -> GetUserProfileUseCase:
        """Provide get user profile use case."""
        return GetUserProfileUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_register_user_use_case(
        self, user_service: UserService
    ) -> RegisterUserUseCase:
        """Provide register user use case."""
        return RegisterUserUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_update_user_profile_use_case(
        self, user_service: UserService
    ) -> UpdateUserProfileUseCase:
        """Provide update user profile use case."""
        return UpdateUserProfileUseCase(user_service=user_service)

    # Meme use cases
    @provide(scope=Scope.REQUEST)
    def get_create_meme_use_case(
        self, meme_service: MemeService, user_service: UserService
    ) -> CreateMemeUseCase:
        """Provide create meme use case."""
        return CreateMemeUseCase(meme_service=meme_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_meme_use_case(
        self,
        meme_service: MemeService,
        vote_service: VoteService,
        user_service: UserService,
    ) -> GetMemeUseCase:
        """Provide get meme use case."""
        return GetMemeUseCase(
            meme_service=meme_service,
            vote_service=vote_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_memes_use_case(
        self,
        meme_service: MemeService,
        vote_service: VoteService,
        user_service: UserService,
    ) -> ListMemesUseCase:
        """Provide list memes use case."""
        return ListMemesUseCase(
            meme_service=meme_service,
            vote_service=vote_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_user_memes_use_case(
        self, meme_service: MemeService, user_service: UserService
    ) -> ListUserMemesUseCase:
        """Provide list user memes use case."""
        return ListUserMemesUseCase(
            meme_service=meme_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_update_meme_use_case(
        self, meme_service: MemeService, user_service: UserService
    ) -> UpdateMemeUseCase:
        """Provide update meme use case."""
        return UpdateMemeUseCase(meme_service=meme_service, user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_meme_use_case(
        self,
        meme_service: MemeService,
        vote_service: VoteService,
        comment_service: CommentService,
    ) -> DeleteMemeUseCase:
        """Provide delete meme use case."""
        return DeleteMemeUseCase(
            meme_service=meme_service,
            vote_service=vote_service,
            comment_service=comment_service,
        )

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_user_vote_use_case(self, vote_service: VoteService) -> GetUserVoteUseCase:
        """Provide get user vote use case."""
        return GetUserVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_remove_vote_use_case(self, vote_service: VoteService) -> RemoveVoteUseCase:
        """Provide remove vote use case."""
        return RemoveVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_reconcile_votes_use_case(
        self, vote_service: VoteService
    ) -> ReconcileVotesUseCase:
        """Provide vote reconciliation use case."""
        return ReconcileVotesUseCase(vote_service=vote_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService, user_service: UserService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_comments_use_case(
        self,
        comment_service: CommentService,
        meme_service: MemeService,
        user_service: UserService,
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(
            comment_service=comment_service,
            meme_service=meme_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService, user_service: UserService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            comment_service=comment_service, user_service=user_service
        )

    # Moderation use cases
    @provide(scope=Scope.REQUEST)
    def get_flag_comment_use_case(
        self, moderation_service: ModerationService
    ) -> FlagCommentUseCase:
        """Provide flag comment use case."""
        return FlagCommentUseCase(moderation_service=moderation_service)

    @provide(scope=Scope.REQUEST)
    def get_unflag_comment_use_case(
        self, moderation_service: ModerationService, user_service: UserService
    ) -> UnflagCommentUseCase:
        """Provide unflag comment use case."""
        return UnflagCommentUseCase(
            moderation_service=moderation_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_flagged_comments_use_case(
        self,
        moderation_service: ModerationService,
        meme_service: MemeService,
        user_service: UserService,
    ) -> GetFlaggedCommentsUseCase:
        """Provide flagged comments use case."""
        return GetFlaggedCommentsUseCase(
            moderation_service=moderation_service,
            meme_service=meme_service,
            user_service=user_service,
        )
