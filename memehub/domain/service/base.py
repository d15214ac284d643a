"""Base service class for domain services."""

import re

from sqlalchemy.exc import IntegrityError

_CONSTRAINT_NAME = re.compile(r'constraint "(?P<name>[^"]+)"')


class Service:
    """Base class for all domain services.

    Domain services hold the business rules that span several aggregates,
    such as keeping a meme's vote total in step with its vote ledger.
    """

    pass


def violated_constraint(error: IntegrityError) -> str | None:
    """Name of the database constraint behind an IntegrityError.

    asyncpg reports it on the driver exception; otherwise it is read from
    the PostgreSQL message, e.g. ``violates unique constraint "uq_vote_meme_user"``.
    """
    driver_error = getattr(error.orig, "__cause__", None)
    name = getattr(driver_error, "constraint_name", None)
    if name:
        return name

    match = _CONSTRAINT_NAME.search(str(error.orig))
    return match.group("name") if match else None
