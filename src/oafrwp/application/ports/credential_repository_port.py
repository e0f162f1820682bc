"""Port for the username-keyed credential store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class CredentialAlreadyExistsError(LookupError):
    """Raised when a credential row already exists for one username."""

    def __init__(self, *, username: str) -> None:
        super().__init__(f"credential already exists: {username}")
        self.username = username


@dataclass(frozen=True)
class CredentialRow:
    """Credential persistence model."""

    username: str
    password_hash: str


@dataclass(frozen=True)
class CredentialCreateInput:
    """Insert payload for one credential row."""

    username: str
    password_hash: str


class CredentialRepositoryPort(Protocol):
    """Credential repository contract."""

    async def get_by_username(self, *, username: str) -> CredentialRow | None:
        """Return credential row by username or None."""

    async def list_credentials(self) -> list[CredentialRow]:
        """Return all credential rows ordered by username."""

    async def create_credential(self, payload: CredentialCreateInput) -> CredentialRow:
        """Insert one credential row or raise CredentialAlreadyExistsError."""

    async def update_password_hash(
        self,
        *,
        username: str,
        password_hash: str,
    ) -> CredentialRow | None:
        """Replace stored record for username and return the row, or None when missing."""

    async def delete_credential(self, *, username: str) -> bool:
        """Delete credential row and return whether one was removed."""
