"""Constraint checks for the in-memory repositories.

Errors carry the same constraint names and message shape PostgreSQL
reports, so services translate them exactly as they do in production.
"""

from sqlalchemy.exc import IntegrityError

from memehub.domain.repository.user import UserRepository
from memehub.domain.value import UserId


def unique_violation(table: str, constraint: str) -> IntegrityError:
    return IntegrityError(
        f"INSERT INTO {table}",
        None,
        Exception(f'duplicate key value violates unique constraint "{constraint}"'),
    )


async def require_user(
    users: UserRepository, user_id: UserId, table: str, column: str
) -> None:
    """Enforce ``<table>.<column>`` REFERENCES users(id).

    Raises:
        IntegrityError: If no user has this ID
    """
    if await users.find_by_id(user_id) is not None:
        return

    constraint = f"{table}_{column}_fkey"
    raise IntegrityError(
        f"INSERT INTO {table}",
        None,
        Exception(
            f'insert or update on table "{table}" violates foreign key '
            f'constraint "{constraint}"'
        ),
    )
