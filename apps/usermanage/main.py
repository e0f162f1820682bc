"""usermanage entrypoint: add, change, remove, list and verify credential rows."""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from typing import cast

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from oafrwp.application.services.account_management_service import (
    AccountManagementService,
    InvalidCredentialInputError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from oafrwp.config.settings import load_settings
from oafrwp.domain.auth.credentials import split_credentials
from oafrwp.infrastructure.db.credential_repository import SqlAlchemyCredentialRepository
from oafrwp.infrastructure.db.session import (
    create_session_factory,
    dispose_session_factory,
    ensure_schema,
)
from oafrwp.infrastructure.logging import configure_logging
from oafrwp.infrastructure.security.password_hasher import ScryptPasswordHasher

EXIT_OK = 0
EXIT_FAILURE = 1

USAGE = """
User Management Script for OAFRWP

Usage:
  usermanage adduser username:password
  usermanage changepass username:newpassword
  usermanage remove username
  usermanage list
  usermanage verify username:password

Examples:
  usermanage adduser admin:secret123
  usermanage changepass admin:newsecret123
  usermanage remove olduser
  usermanage list
"""

_ARGUMENT_USAGE = {
    "adduser": ("Username:password required for adduser command", "adduser username:password"),
    "changepass": (
        "Username:newpassword required for changepass command",
        "changepass username:newpassword",
    ),
    "remove": ("Username required for remove command", "remove username"),
    "verify": ("Username:password required for verify command", "verify username:password"),
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser; command validation happens in `run`."""

    parser = argparse.ArgumentParser(
        prog="usermanage",
        description="Manage users in the credentials table.",
        add_help=True,
    )
    parser.add_argument("command", nargs="?", help="adduser | changepass | remove | list | verify")
    parser.add_argument("argument", nargs="?", help="username:password or username")
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy async URL (defaults to DATABASE_URL)",
    )
    return parser


def build_account_service(
    session_factory: async_sessionmaker[AsyncSession],
) -> AccountManagementService:
    """Build account service with SQLAlchemy-backed dependencies."""

    return AccountManagementService(
        credentials=SqlAlchemyCredentialRepository(session_factory),
        password_hasher=ScryptPasswordHasher(),
    )


def _error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


def _print_usage() -> None:
    print(USAGE)


async def _add_user(service: AccountManagementService, credentials: str) -> int:
    try:
        username, password = split_credentials(credentials)
        await service.add_user(username=username, password=password)
    except (ValueError, UserAlreadyExistsError) as exc:
        _error(str(exc))
        return EXIT_FAILURE
    except SQLAlchemyError as exc:
        _error(f"adding user: {exc}")
        return EXIT_FAILURE

    print(f"Successfully added user '{username.strip()}' to database")
    return EXIT_OK


async def _change_password(service: AccountManagementService, credentials: str) -> int:
    try:
        username, new_password = split_credentials(credentials)
        await service.change_password(username=username, new_password=new_password)
    except (ValueError, UserNotFoundError) as exc:
        _error(str(exc))
        return EXIT_FAILURE
    except SQLAlchemyError as exc:
        _error(f"changing password: {exc}")
        return EXIT_FAILURE

    print(f"Successfully changed password for user '{username.strip()}'")
    return EXIT_OK


async def _remove_user(service: AccountManagementService, username: str) -> int:
    try:
        await service.remove_user(username=username)
    except (InvalidCredentialInputError, UserNotFoundError) as exc:
        _error(str(exc))
        return EXIT_FAILURE
    except SQLAlchemyError as exc:
        _error(f"removing user: {exc}")
        return EXIT_FAILURE

    print(f"Successfully removed user '{username.strip()}'")
    return EXIT_OK


async def _list_users(service: AccountManagementService) -> int:
    try:
        usernames = await service.list_users()
    except SQLAlchemyError as exc:
        _error(f"listing users: {exc}")
        return EXIT_FAILURE

    if not usernames:
        print("No users found in database")
        return EXIT_OK

    print("Users in database:")
    for username in usernames:
        print(f"  - {username}")
    return EXIT_OK


async def _verify_user(service: AccountManagementService, credentials: str) -> int:
    try:
        username, password = split_credentials(credentials)
        is_valid = await service.verify_user(username=username, password=password)
    except ValueError as exc:
        _error(str(exc))
        return EXIT_FAILURE
    except SQLAlchemyError as exc:
        _error(f"verifying user: {exc}")
        return EXIT_FAILURE

    if not is_valid:
        print(f"Password does not match for user '{username}'")
        return EXIT_FAILURE
    print(f"Password matches for user '{username}'")
    return EXIT_OK


async def run(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, initialise the database and dispatch one command."""

    args = build_parser().parse_args(argv)
    if args.command is None:
        _error("No command specified")
        _print_usage()
        return EXIT_FAILURE

    command: str = args.command
    if command not in {"adduser", "changepass", "remove", "list", "verify"}:
        _error(f"Unknown command '{command}'")
        _print_usage()
        return EXIT_FAILURE

    argument: str | None = args.argument
    if command in _ARGUMENT_USAGE and argument is None:
        message, usage = _ARGUMENT_USAGE[command]
        _error(message)
        print(f"Usage: usermanage {usage}", file=sys.stderr)
        return EXIT_FAILURE

    database_url = args.database_url or load_settings().database_url
    session_factory = create_session_factory(database_url)
    try:
        try:
            await ensure_schema(session_factory)
        except (SQLAlchemyError, OSError) as exc:
            print(f"Error initializing database: {exc}", file=sys.stderr)
            return EXIT_FAILURE

        service = build_account_service(session_factory)
        if command == "list":
            return await _list_users(service)

        # Argument presence was checked before opening the database.
        value = cast(str, argument)
        if command == "adduser":
            return await _add_user(service, value)
        if command == "changepass":
            return await _change_password(service, value)
        if command == "remove":
            return await _remove_user(service, value)
        return await _verify_user(service, value)
    finally:
        await dispose_session_factory(session_factory)


def main(argv: Sequence[str] | None = None) -> int:
    """Run usermanage and return the process exit code."""

    configure_logging(level=load_settings().log_level)
    try:
        return asyncio.run(run(argv))
    except Exception as exc:  # noqa: BLE001
        print(f"Fatal error: {exc}", file=sys.stderr)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
