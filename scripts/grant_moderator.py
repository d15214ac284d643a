#!/usr/bin/env python3
"""Grant or revoke the moderator role for a user, looked up by email.

Usage:
    python scripts/grant_moderator.py alice@example.com
    python scripts/grant_moderator.py alice@example.com --revoke
"""

import argparse
import asyncio
import sys

import logfire

from memehub.config import Settings
from memehub.domain.error import NotFoundError
from memehub.domain.service import UserService
from memehub.domain.value import UserRole
from memehub.util.di.container import create_container
from memehub.util.observability import configure_logfire


async def set_role(email: str, role: UserRole) -> None:
    container = create_container()
    try:
        async with container() as request_container:
            user_service = await request_container.get(UserService)
            user = await user_service.set_role(email, role)
            print(f"{user.name} <{user.email}> is now {user.role.value}")
    finally:
        await container.close()


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("email", help="Email address of the user")
    parser.add_argument(
        "--revoke", action="store_true", help="Demote the user back to a regular user"
    )
    args = parser.parse_args()

    configure_logfire(Settings())

    role = UserRole.USER if args.revoke else UserRole.MODERATOR
    try:
        asyncio.run(set_role(args.email, role))
    except NotFoundError:
        logfire.error("No user with this email", email=args.email)
        print(f"No user found with email {args.email}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
