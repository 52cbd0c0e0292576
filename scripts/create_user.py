#!/usr/bin/env python3
"""Create a user account for ChronoSync.

There is no self-service registration; operators add credentials with
this script. The password is hashed with Argon2id before storage.

Usage:
    python scripts/create_user.py --username jdoe --role EMPLOYEE
    python scripts/create_user.py --username boss --role ADMINISTRATOR --firm "Acme Dental"

The password is read from --password or prompted for interactively.
DATABASE_URL and JWT_SECRET_KEY are read from the environment (or .env).
"""

import argparse
import asyncio
import getpass
import sys

MIN_PASSWORD_LENGTH = 8


async def _create_user(args: argparse.Namespace, password: str) -> int:
    from sqlalchemy import select

    from chronosync.core import async_session_maker
    from chronosync.core.roles import UserRole
    from chronosync.models import Firm, User
    from chronosync.services.passwords import hash_password

    async with async_session_maker() as session:
        existing = await session.execute(select(User).where(User.username == args.username))
        if existing.scalar_one_or_none() is not None:
            print(f"ERROR: User '{args.username}' already exists.")
            return 1

        firm = None
        if args.firm:
            result = await session.execute(select(Firm).where(Firm.name == args.firm))
            firm = result.scalars().first()
            if firm is None:
                firm = Firm(name=args.firm)
                session.add(firm)
                print(f"Created firm: {args.firm}")

        user = User(
            username=args.username,
            password_hash=hash_password(password),
            role=UserRole(args.role),
            is_enabled=not args.disabled,
            is_locked=False,
            first_name=args.first_name,
            last_name=args.last_name,
            email=args.email,
            firm=firm,
        )
        session.add(user)
        await session.commit()

    state = "disabled" if args.disabled else "enabled"
    print(f"Created {args.role} user '{args.username}' ({state}).")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a ChronoSync user")
    parser.add_argument("--username", required=True)
    parser.add_argument("--password", help="Password (prompted if omitted)")
    parser.add_argument(
        "--role",
        default="EMPLOYEE",
        choices=["EMPLOYEE", "MANAGER", "ADMINISTRATOR"],
    )
    parser.add_argument("--firm", help="Firm name (created if it does not exist)")
    parser.add_argument("--first-name")
    parser.add_argument("--last-name")
    parser.add_argument("--email")
    parser.add_argument(
        "--disabled",
        action="store_true",
        help="Create the account disabled (an administrator must enable it)",
    )
    args = parser.parse_args()

    password = args.password or getpass.getpass("Password: ")
    if len(password) < MIN_PASSWORD_LENGTH:
        print(f"ERROR: Password must be at least {MIN_PASSWORD_LENGTH} characters.")
        return 1

    return asyncio.run(_create_user(args, password))


if __name__ == "__main__":
    sys.exit(main())
