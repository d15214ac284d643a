"""Unit tests for RegisterUserUseCase."""

from uuid import uuid4

import pydantic
import pytest

from memehub.application.usecase.auth import RegisterUserRequest, RegisterUserUseCase
from memehub.domain.error import EmailTakenError
from memehub.domain.value import UserRole
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestRegisterUserUseCase:
    @pytest.mark.asyncio
    async def test_first_call_creates_then_returns_existing(self, unit_env):
        # Arrange
        use_case = await unit_env.get(RegisterUserUseCase)
        user_id = str(uuid4())
        request = RegisterUserRequest(
            user_id=user_id, name="Frank", email="Frank@Example.com"
        )

        # Act
        created = await use_case.execute(request)
        again = await use_case.execute(request)

        # Assert
        assert created.created is True
        assert created.user_id == user_id
        assert created.email == "frank@example.com"
        assert created.role == UserRole.USER
        assert again.created is False
        assert again.created_at == created.created_at

    @pytest.mark.asyncio
    async def test_taken_email_is_a_conflict(self, unit_env):
        use_case = await unit_env.get(RegisterUserUseCase)
        await use_case.execute(
            RegisterUserRequest(user_id=str(uuid4()), name="A", email="a@example.com")
        )

        with pytest.raises(EmailTakenError):
            await use_case.execute(
                RegisterUserRequest(
                    user_id=str(uuid4()), name="B", email="a@example.com"
                )
            )

    @pytest.mark.parametrize("email", ["not-an-email", "two@@example.com", "a b@c.d"])
    def test_malformed_email_is_rejected(self, email):
        with pytest.raises(pydantic.ValidationError):
            RegisterUserRequest(user_id=str(uuid4()), name="A", email=email)
