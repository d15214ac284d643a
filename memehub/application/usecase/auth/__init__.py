"""Authentication use cases."""

from .get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
)
from .register_user import (
    RegisterUserRequest,
    RegisterUserResponse,
    RegisterUserUseCase,
)

__all__ = [
    "GetCurrentUserRequest",
    "GetCurrentUserResponse",
    "GetCurrentUserUseCase",
    "RegisterUserRequest",
    "RegisterUserResponse",
    "RegisterUserUseCase",
]
