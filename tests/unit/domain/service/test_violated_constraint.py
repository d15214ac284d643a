"""Unit tests for reading constraint names off IntegrityError."""

from sqlalchemy.exc import IntegrityError

from memehub.domain.service.base import violated_constraint


class UniqueViolation(Exception):
    """Stand-in for the driver exception asyncpg chains under the DBAPI error."""

    def __init__(self, constraint_name):
        super().__init__("duplicate key")
        self.constraint_name = constraint_name


def _integrity_error(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT INTO votes", None, orig)


class TestViolatedConstraint:
    def test_prefers_driver_constraint_name(self):
        orig = Exception("something unhelpful")
        orig.__cause__ = UniqueViolation("uq_vote_meme_user")

        assert violated_constraint(_integrity_error(orig)) == "uq_vote_meme_user"

    def test_falls_back_to_postgres_message(self):
        orig = Exception(
            'insert or update on table "votes" violates foreign key constraint '
            '"votes_user_id_fkey"\nDETAIL:  Key (user_id)=(...) is not present.'
        )

        assert violated_constraint(_integrity_error(orig)) == "votes_user_id_fkey"

    def test_unnamed_violation_returns_none(self):
        orig = Exception('null value in column "title" violates not-null')

        assert violated_constraint(_integrity_error(orig)) is None
