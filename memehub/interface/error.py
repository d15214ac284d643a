"""Translation of domain and infrastructure errors into HTTP responses."""

import logfire
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from memehub.domain.error import (
    ConflictError,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from memehub.domain.service import JWTService
from memehub.persistence.error import StorageUnavailableError

_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
]


def to_http_exception(error: DomainError | ValueError) -> HTTPException:
    """Map a domain error (or a rejected input value) to an HTTPException.

    ``ValueError`` covers pydantic validation failures and malformed UUIDs.
    """
    if isinstance(error, ValueError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))

    logfire.error("Unmapped domain error", error=str(error), type=type(error).__name__)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error)
    )


def require_user_id(jwt_service: JWTService, auth_token: str | None, action: str) -> str:
    """Return the authenticated user's ID or raise 401.

    Args:
        jwt_service: JWT service for token verification
        auth_token: JWT token from cookie
        action: Human-readable action for the error message, e.g. "vote"
    """
    user_id = jwt_service.get_user_id_from_token(auth_token)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return user_id


def register_exception_handlers(app: FastAPI) -> None:
    """Register handlers for failures no route can recover from.

    A lost database connection becomes 503 so clients know to retry.
    """

    @app.exception_handler(StorageUnavailableError)
    async def handle_storage_unavailable(
        request: Request, exc: StorageUnavailableError
    ) -> JSONResponse:
        logfire.error("Storage unavailable", path=request.url.path, error=exc.detail)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Storage temporarily unavailable"},
        )

    @app.exception_handler(OperationalError)
    async def handle_operational_error(
        request: Request, exc: OperationalError
    ) -> JSONResponse:
        logfire.error("Database operational error", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Storage temporarily unavailable"},
        )
