"""Application service for credential-table account management."""

from __future__ import annotations

import asyncio
import logging

from oafrwp.application.ports.credential_repository_port import (
    CredentialAlreadyExistsError,
    CredentialCreateInput,
    CredentialRepositoryPort,
)
from oafrwp.application.ports.password_hasher_port import PasswordHasherPort
from oafrwp.domain.auth.credentials import normalize_username, require_password

logger = logging.getLogger(__name__)


class InvalidCredentialInputError(ValueError):
    """Raised when a username or password input is blank."""


class UserAlreadyExistsError(LookupError):
    """Raised when adding a username that is already stored."""

    def __init__(self, *, username: str) -> None:
        super().__init__(f"User '{username}' already exists")
        self.username = username


class UserNotFoundError(LookupError):
    """Raised when a target user cannot be found for one management action."""

    def __init__(self, *, username: str) -> None:
        super().__init__(f"User '{username}' not found")
        self.username = username


class AccountManagementService:
    """Expose add/change-password/remove/list/verify account use-cases."""

    def __init__(
        self,
        *,
        credentials: CredentialRepositoryPort,
        password_hasher: PasswordHasherPort,
    ) -> None:
        self._credentials = credentials
        self._password_hasher = password_hasher

    async def add_user(self, *, username: str, password: str) -> None:
        """Hash password and store a credential row for a new username."""

        normalized = _validated_username(username)
        _validated_password(password)

        if await self._credentials.get_by_username(username=normalized) is not None:
            raise UserAlreadyExistsError(username=normalized)

        password_hash = await asyncio.to_thread(self._password_hasher.hash_password, password)
        try:
            await self._credentials.create_credential(
                CredentialCreateInput(username=normalized, password_hash=password_hash)
            )
        except CredentialAlreadyExistsError as exc:
            raise UserAlreadyExistsError(username=normalized) from exc
        logger.info("account_user_added username=%s", normalized)

    async def change_password(self, *, username: str, new_password: str) -> None:
        """Replace the stored record for an existing user with a freshly salted one."""

        normalized = _validated_username(username)
        _validated_password(new_password)

        await self._require_existing_user(username=normalized)

        password_hash = await asyncio.to_thread(
            self._password_hasher.hash_password,
            new_password,
        )
        updated = await self._credentials.update_password_hash(
            username=normalized,
            password_hash=password_hash,
        )
        if updated is None:
            raise UserNotFoundError(username=normalized)
        logger.info("account_password_changed username=%s", normalized)

    async def remove_user(self, *, username: str) -> None:
        """Delete the credential row of an existing user."""

        normalized = _validated_username(username)
        await self._require_existing_user(username=normalized)

        if not await self._credentials.delete_credential(username=normalized):
            raise UserNotFoundError(username=normalized)
        logger.info("account_user_removed username=%s", normalized)

    async def list_users(self) -> list[str]:
        """Return stored usernames in ascending order."""

        return [row.username for row in await self._credentials.list_credentials()]

    async def verify_user(self, *, username: str, password: str) -> bool:
        """Return whether password matches the stored record of username.

        Unknown users and blank inputs verify as False. The scrypt work runs
        in a worker thread.
        """

        if not username.strip() or not password:
            return False

        row = await self._credentials.get_by_username(username=username.strip())
        if row is None:
            logger.info("account_verify_unknown_user username=%s", username.strip())
            return False

        is_valid = await asyncio.to_thread(
            self._password_hasher.verify_password,
            password=password,
            password_hash=row.password_hash,
        )
        logger.info("account_verify_result username=%s valid=%s", row.username, is_valid)
        return is_valid

    async def _require_existing_user(self, *, username: str) -> None:
        if await self._credentials.get_by_username(username=username) is None:
            raise UserNotFoundError(username=username)


def _validated_username(username: str) -> str:
    try:
        return normalize_username(username=username)
    except ValueError as exc:
        raise InvalidCredentialInputError(str(exc)) from exc


def _validated_password(password: str) -> str:
    try:
        return require_password(password=password)
    except ValueError as exc:
        raise InvalidCredentialInputError(str(exc)) from exc
