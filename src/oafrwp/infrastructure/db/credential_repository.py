"""SQLAlchemy adapter for the credentials table."""

from __future__ import annotations

from typing import cast

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from oafrwp.application.ports.credential_repository_port import (
    CredentialAlreadyExistsError,
    CredentialCreateInput,
    CredentialRepositoryPort,
    CredentialRow,
)
from oafrwp.infrastructure.db.metadata import credentials


class SqlAlchemyCredentialRepository(CredentialRepositoryPort):
    """Credential repository backed by SQLAlchemy async sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get_by_username(self, *, username: str) -> CredentialRow | None:
        """Return credential row by username or None."""

        statement = sa.select(
            credentials.c.id,
            credentials.c.pass_hashed,
        ).where(credentials.c.id == username).limit(1)

        async with self._session_factory() as session:
            result = await session.execute(statement)

        row = result.mappings().first()
        if row is None:
            return None
        return _to_credential_row(row)

    async def list_credentials(self) -> list[CredentialRow]:
        """Return all credential rows ordered by username."""

        statement = sa.select(
            credentials.c.id,
            credentials.c.pass_hashed,
        ).order_by(credentials.c.id.asc())

        async with self._session_factory() as session:
            result = await session.execute(statement)

        return [_to_credential_row(row) for row in result.mappings().all()]

    async def create_credential(self, payload: CredentialCreateInput) -> CredentialRow:
        """Insert one credential row or raise CredentialAlreadyExistsError."""

        statement = sa.insert(credentials).values(
            id=payload.username,
            pass_hashed=payload.password_hash,
        )

        async with self._session_factory() as session:
            try:
                await session.execute(statement)
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise CredentialAlreadyExistsError(username=payload.username) from exc

        return CredentialRow(username=payload.username, password_hash=payload.password_hash)

    async def update_password_hash(
        self,
        *,
        username: str,
        password_hash: str,
    ) -> CredentialRow | None:
        """Replace stored record for username and return the row, or None when missing."""

        statement = (
            sa.update(credentials)
            .where(credentials.c.id == username)
            .values(pass_hashed=password_hash)
        )

        async with self._session_factory() as session:
            result = await session.execute(statement)
            await session.commit()

        if int(result.rowcount or 0) == 0:
            return None
        return CredentialRow(username=username, password_hash=password_hash)

    async def delete_credential(self, *, username: str) -> bool:
        """Delete credential row and return whether one was removed."""

        statement = sa.delete(credentials).where(credentials.c.id == username)

        async with self._session_factory() as session:
            result = await session.execute(statement)
            await session.commit()

        return int(result.rowcount or 0) > 0


def _to_credential_row(row: sa.RowMapping) -> CredentialRow:
    return CredentialRow(
        username=cast(str, row["id"]),
        password_hash=cast(str, row["pass_hashed"]),
    )
