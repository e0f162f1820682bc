from __future__ import annotations

from pathlib import Path

import pytest
import sqlalchemy as sa
from alembic.config import Config

from alembic import command
from oafrwp.application.ports.credential_repository_port import (
    CredentialAlreadyExistsError,
    CredentialCreateInput,
    CredentialRow,
)
from oafrwp.infrastructure.db.credential_repository import SqlAlchemyCredentialRepository
from oafrwp.infrastructure.db.session import create_session_factory


def _upgrade_head(tmp_path: Path, filename: str) -> tuple[str, str]:
    db_path = tmp_path / filename
    sync_url = f"sqlite+pysqlite:///{db_path}"
    async_url = f"sqlite+aiosqlite:///{db_path}"

    alembic_config = Config("alembic.ini")
    alembic_config.set_main_option("sqlalchemy.url", sync_url)
    command.upgrade(alembic_config, "head")

    return sync_url, async_url


def _insert_credential(connection: sa.Connection, *, username: str, pass_hashed: str) -> None:
    connection.execute(
        sa.text("INSERT INTO credentials (id, pass_hashed) VALUES (:id, :pass_hashed)"),
        {"id": username, "pass_hashed": pass_hashed},
    )


def test_migration_creates_credentials_table(tmp_path: Path) -> None:
    sync_url, _ = _upgrade_head(tmp_path, "migration.db")

    inspector = sa.inspect(sa.create_engine(sync_url))
    columns = {column["name"]: column for column in inspector.get_columns("credentials")}

    assert set(columns) == {"id", "pass_hashed"}
    assert columns["pass_hashed"]["nullable"] is False
    assert inspector.get_pk_constraint("credentials")["constrained_columns"] == ["id"]


def test_migration_without_explicit_url_targets_database_url(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    db_path = tmp_path / "from_env.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")

    command.upgrade(Config("alembic.ini"), "head")

    inspector = sa.inspect(sa.create_engine(f"sqlite+pysqlite:///{db_path}"))
    assert "credentials" in inspector.get_table_names()


@pytest.mark.asyncio
async def test_get_by_username_reads_existing_rows(tmp_path: Path) -> None:
    sync_url, async_url = _upgrade_head(tmp_path, "lookup.db")
    engine = sa.create_engine(sync_url)
    with engine.begin() as connection:
        _insert_credential(connection, username="admin", pass_hashed="script:00:11")

    repo = SqlAlchemyCredentialRepository(create_session_factory(async_url))

    assert await repo.get_by_username(username="admin") == CredentialRow(
        username="admin",
        password_hash="script:00:11",
    )
    assert await repo.get_by_username(username="ghost") is None


@pytest.mark.asyncio
async def test_create_and_list_credentials(tmp_path: Path) -> None:
    _, async_url = _upgrade_head(tmp_path, "create.db")
    repo = SqlAlchemyCredentialRepository(create_session_factory(async_url))

    await repo.create_credential(CredentialCreateInput(username="zed", password_hash="h1"))
    created = await repo.create_credential(
        CredentialCreateInput(username="admin", password_hash="h2")
    )

    assert created == CredentialRow(username="admin", password_hash="h2")
    assert [row.username for row in await repo.list_credentials()] == ["admin", "zed"]


@pytest.mark.asyncio
async def test_create_duplicate_username_raises(tmp_path: Path) -> None:
    _, async_url = _upgrade_head(tmp_path, "duplicate.db")
    repo = SqlAlchemyCredentialRepository(create_session_factory(async_url))
    await repo.create_credential(CredentialCreateInput(username="admin", password_hash="h1"))

    with pytest.raises(CredentialAlreadyExistsError):
        await repo.create_credential(CredentialCreateInput(username="admin", password_hash="h2"))

    stored = await repo.get_by_username(username="admin")
    assert stored is not None
    assert stored.password_hash == "h1"


@pytest.mark.asyncio
async def test_update_password_hash_replaces_value(tmp_path: Path) -> None:
    _, async_url = _upgrade_head(tmp_path, "update.db")
    repo = SqlAlchemyCredentialRepository(create_session_factory(async_url))
    await repo.create_credential(CredentialCreateInput(username="admin", password_hash="old"))

    updated = await repo.update_password_hash(username="admin", password_hash="new")
    missing = await repo.update_password_hash(username="ghost", password_hash="new")

    assert updated == CredentialRow(username="admin", password_hash="new")
    assert missing is None
    stored = await repo.get_by_username(username="admin")
    assert stored is not None
    assert stored.password_hash == "new"


@pytest.mark.asyncio
async def test_delete_credential_reports_whether_row_existed(tmp_path: Path) -> None:
    _, async_url = _upgrade_head(tmp_path, "delete.db")
    repo = SqlAlchemyCredentialRepository(create_session_factory(async_url))
    await repo.create_credential(CredentialCreateInput(username="olduser", password_hash="h"))

    assert await repo.delete_credential(username="olduser") is True
    assert await repo.delete_credential(username="olduser") is False
    assert await repo.list_credentials() == []
