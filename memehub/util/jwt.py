"""Auth token encoding and verification (PyJWT).

Tokens carry the user's ID in a ``userId`` claim, plus ``iat`` and
``exp``. They are signed with the secret shared with the frontend.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from memehub.config import AuthSettings


class JWTError(Exception):
    """Token missing, malformed, badly signed or expired."""

    pass


class TokenPayload(BaseModel):
    """Decoded claims."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    issued_at: datetime | None = Field(default=None, alias="iat")
    exp: datetime

    @field_validator("user_id")
    @classmethod
    def must_be_uuid(cls, v: str) -> str:
        UUID(v)
        return v


def create_token(user_id: str, settings: AuthSettings) -> str:
    """Sign a token for ``user_id`` valid for ``settings.jwt_expiry_days``."""
    now = datetime.now(timezone.utc)
    claims = {
        "userId": user_id,
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check the signature and expiry of ``token`` and return its claims.

    Raises:
        JWTError: If the token is expired, invalid or has no usable user ID
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError("Invalid token") from e

    try:
        return TokenPayload.model_validate(claims)
    except ValidationError as e:
        raise JWTError("Invalid token payload") from e
