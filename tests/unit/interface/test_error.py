"""Tests for mapping domain errors to HTTP responses."""

import pytest

from memehub.domain.error import (
    AlreadyFlaggedError,
    DomainError,
    DuplicateVoteError,
    EmailTakenError,
    InvalidVoteValueError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from memehub.interface.error import to_http_exception


@pytest.mark.parametrize(
    "error, status_code",
    [
        (InvalidVoteValueError(2), 400),
        (ValidationError("Comment text is required"), 400),
        (ValueError("badly formed hexadecimal UUID string"), 400),
        (NotFoundError("Meme", "abc"), 404),
        (AlreadyFlaggedError("c", "u"), 409),
        (DuplicateVoteError("m", "u"), 409),
        (EmailTakenError("a@example.com"), 409),
        (NotFoundError("User", "u"), 404),
        (NotAuthorizedError("unflag", "comment", "c", "u"), 403),
        (DomainError("something else"), 500),
    ],
)
def test_to_http_exception(error, status_code):
    exc = to_http_exception(error)

    assert exc.status_code == status_code
    assert exc.detail == str(error)
