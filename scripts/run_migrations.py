#!/usr/bin/env python3
"""Apply (or roll back) the database schema with Alembic.

Usage:
    python scripts/run_migrations.py                 # upgrade to head
    python scripts/run_migrations.py --downgrade -1  # undo the last revision
"""

import argparse
import sys

import logfire
from alembic import command
from alembic.config import Config

from memehub.config import Settings
from memehub.util.observability import configure_logfire


def main() -> int:
    parser = argparse.ArgumentParser(description="Run MemeGenHub database migrations")
    parser.add_argument("revision", nargs="?", default="head", help="Target revision")
    parser.add_argument(
        "--downgrade", action="store_true", help="Move down to the target revision"
    )
    args = parser.parse_args()

    configure_logfire(Settings())
    alembic_cfg = Config("alembic.ini")
    direction = "downgrade" if args.downgrade else "upgrade"

    with logfire.span("migrations", direction=direction, revision=args.revision):
        try:
            if args.downgrade:
                command.downgrade(alembic_cfg, args.revision)
            else:
                command.upgrade(alembic_cfg, args.revision)
        except Exception as e:
            logfire.error(
                "Migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Deploys must stop rather than serve against a half-migrated schema
            raise

    logfire.info("Migrations complete", direction=direction, revision=args.revision)
    return 0


if __name__ == "__main__":
    sys.exit(main())
