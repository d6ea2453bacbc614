"""Utility script to register a school account for local development."""

from __future__ import annotations

import argparse

from app.domain.entities import TPPK_ROLE, User
from app.domain.exceptions import StoreUnavailableError
from app.infrastructure.database import SessionLocal, initialize_database
from app.infrastructure.repositories import UserRepository


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create a school account able to receive SiPPKe notifications.",
    )
    parser.add_argument("--name", required=True, help="Full name of the account holder")
    parser.add_argument("--school-id", required=True, help="Identifier of the school")
    parser.add_argument(
        "--role",
        default=TPPK_ROLE,
        help=f"Role tag of the account (default: {TPPK_ROLE})",
    )
    parser.add_argument("--email", default=None, help="Optional email address")
    parser.add_argument("--fcm-token", default=None, help="Optional device push token")
    parser.add_argument(
        "--inactive",
        action="store_true",
        help="Create the account as inactive so it receives no notifications.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        user = UserRepository(session).create(
            User(
                id=None,
                full_name=args.name,
                email=args.email,
                school_id=args.school_id,
                role=args.role,
                is_active=not args.inactive,
                fcm_token=args.fcm_token,
                created_at=None,
                updated_at=None,
            )
        )
    except StoreUnavailableError as exc:
        raise SystemExit(f"Could not save the user: {exc}") from exc
    finally:
        session.close()

    print(
        "User created:\n"
        f"  ID: {user.id}\n"
        f"  Name: {user.full_name}\n"
        f"  School: {user.school_id}\n"
        f"  Role: {user.role}\n"
        f"  Active: {'yes' if user.is_active else 'no'}"
    )


if __name__ == "__main__":
    main()
