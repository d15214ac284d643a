"""Unit tests for UserService."""

from uuid import uuid4

import pydantic
import pytest

from memehub.domain.error import EmailTakenError, NotFoundError
from memehub.domain.repository import MemeRepository, UserRepository
from memehub.domain.service import UserService, VoteService
from memehub.domain.value import UserId, UserRole
from tests.conftest import make_meme, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetViewer:
    """Tests for resolving the requesting user's capabilities."""

    @pytest.mark.asyncio
    async def test_anonymous_when_no_user(self, unit_env):
        user_service = await unit_env.get(UserService)

        viewer = await user_service.get_viewer(None)

        assert viewer.user_id is None
        assert not viewer.is_moderator

    @pytest.mark.asyncio
    async def test_unknown_user_is_anonymous(self, unit_env):
        user_service = await unit_env.get(UserService)

        viewer = await user_service.get_viewer(UserId(uuid4()))

        assert not viewer.is_authenticated

    @pytest.mark.asyncio
    async def test_role_comes_from_stored_user(self, unit_env):
        # Arrange
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        mod = make_user("mod", role=UserRole.MODERATOR)
        await user_repo.save(mod)

        # Act
        viewer = await user_service.get_viewer(mod.id)

        # Assert
        assert viewer.user_id == mod.id
        assert viewer.is_moderator


class TestSetRole:
    """Tests for granting and revoking the moderator role."""

    @pytest.mark.asyncio
    async def test_grant_then_revoke(self, unit_env):
        # Arrange
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        user = make_user("bob")
        await user_repo.save(user)

        # Act & Assert
        granted = await user_service.set_role(user.email, UserRole.MODERATOR)
        assert granted.role == UserRole.MODERATOR
        assert (await user_service.get_viewer(user.id)).is_moderator

        revoked = await user_service.set_role(user.email, UserRole.USER)
        assert revoked.role == UserRole.USER
        assert not (await user_service.get_viewer(user.id)).is_moderator

    @pytest.mark.asyncio
    async def test_unknown_email_raises_not_found(self, unit_env):
        user_service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError):
            await user_service.set_role("nobody@example.com", UserRole.MODERATOR)


class TestGetUsersByIds:
    @pytest.mark.asyncio
    async def test_skips_missing_users(self, unit_env):
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        alice = make_user("alice")
        await user_repo.save(alice)

        users = await user_service.get_users_by_ids([alice.id, UserId(uuid4())])

        assert users == {alice.id: alice}


class TestFindByEmail:
    @pytest.mark.asyncio
    async def test_email_lookup_ignores_case(self, unit_env):
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        carol = make_user("carol")
        await user_repo.save(carol)

        updated = await user_service.set_role(
            f"  {carol.email.upper()} ", UserRole.MODERATOR
        )

        assert updated.id == carol.id


class TestRegisterUser:
    """Tests for creating the account row of an authenticated identity."""

    @pytest.mark.asyncio
    async def test_register_creates_account(self, unit_env):
        # Arrange
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        user_id = UserId(uuid4())

        # Act
        registration = await user_service.register_user(
            user_id, "  Dana  ", "  Dana@Example.COM "
        )

        # Assert
        assert registration.created is True
        assert registration.user.id == user_id
        assert registration.user.name == "Dana"
        assert registration.user.email == "dana@example.com"
        assert registration.user.role == UserRole.USER
        assert await user_repo.find_by_id(user_id) == registration.user

    @pytest.mark.asyncio
    async def test_registering_twice_returns_existing_account(self, unit_env):
        # Arrange
        user_service = await unit_env.get(UserService)
        user_id = UserId(uuid4())
        first = await user_service.register_user(user_id, "Dana", "dana@example.com")

        # Act
        second = await user_service.register_user(
            user_id, "Someone Else", "other@example.com"
        )

        # Assert
        assert second.created is False
        assert second.user == first.user

    @pytest.mark.asyncio
    async def test_email_of_another_account_is_refused(self, unit_env):
        # Arrange
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        await user_service.register_user(UserId(uuid4()), "Dana", "dana@example.com")
        newcomer = UserId(uuid4())

        # Act & Assert
        with pytest.raises(EmailTakenError):
            await user_service.register_user(newcomer, "Dana", "DANA@example.com")

        assert await user_repo.find_by_id(newcomer) is None

    @pytest.mark.asyncio
    async def test_registered_user_can_vote(self, unit_env):
        """Registration is what lets a token holder write."""
        # Arrange
        user_service = await unit_env.get(UserService)
        vote_service = await unit_env.get(VoteService)
        meme_repo = await unit_env.get(MemeRepository)
        registration = await user_service.register_user(
            UserId(uuid4()), "Dana", "dana@example.com"
        )
        meme = make_meme(registration.user.id)
        await meme_repo.save(meme)

        # Act
        outcome = await vote_service.cast_vote(meme.id, registration.user.id, 1)

        # Assert
        assert outcome.votes == 1


class TestUpdateProfile:
    """Tests for editing one's own profile."""

    @pytest.mark.asyncio
    async def test_updates_name_bio_and_image(self, unit_env):
        # Arrange
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        user = make_user("erin")
        await user_repo.save(user)

        # Act
        updated = await user_service.update_profile(
            user.id,
            {
                "name": "Erin M",
                "bio": "I make memes",
                "image": "https://i.example.com/e.png",
            },
        )

        # Assert
        assert (updated.name, updated.bio, updated.image) == (
            "Erin M",
            "I make memes",
            "https://i.example.com/e.png",
        )
        assert updated.updated_at >= user.updated_at
        assert await user_repo.find_by_id(user.id) == updated

    @pytest.mark.asyncio
    async def test_role_and_email_cannot_be_changed(self, unit_env):
        # Arrange
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        user = make_user("erin")
        await user_repo.save(user)

        # Act
        updated = await user_service.update_profile(
            user.id, {"role": UserRole.MODERATOR, "email": "boss@example.com"}
        )

        # Assert
        assert updated.role == UserRole.USER
        assert updated.email == user.email

    @pytest.mark.asyncio
    async def test_null_name_is_ignored_and_bio_can_be_cleared(self, unit_env):
        # Arrange
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        user = make_user("erin").model_copy(update={"bio": "old bio"})
        await user_repo.save(user)

        # Act
        updated = await user_service.update_profile(
            user.id, {"name": None, "bio": None}
        )

        # Assert
        assert updated.name == "erin"
        assert updated.bio is None

    @pytest.mark.asyncio
    async def test_overlong_bio_is_rejected(self, unit_env):
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        user = make_user("erin")
        await user_repo.save(user)

        with pytest.raises(pydantic.ValidationError):
            await user_service.update_profile(user.id, {"bio": "x" * 501})

    @pytest.mark.asyncio
    async def test_unknown_user_raises_not_found(self, unit_env):
        user_service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError):
            await user_service.update_profile(UserId(uuid4()), {"name": "Ghost"})
