"""Auth token domain service."""

import logfire

from memehub.config import AuthSettings
from memehub.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Reads the ``auth_token`` cookie issued by the frontend.

    ``create_token`` exists for scripts and tests; in production the
    frontend signs tokens with the same shared secret.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(self, user_id: str) -> str:
        return create_token(user_id, self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Decode a token, logging why it was rejected.

        Raises:
            JWTError: If the token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("Auth token rejected", reason=str(e))
                raise

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """User ID from an optional cookie; None when absent or invalid.

        Routes that work for anonymous visitors (listings, meme pages) use
        this so a stale cookie degrades to anonymous instead of failing.
        """
        if not token:
            return None

        try:
            return self.verify_token(token).user_id
        except JWTError:
            return None
