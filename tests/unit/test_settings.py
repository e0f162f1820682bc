import pytest
from pydantic import ValidationError

from oafrwp.config.settings import Settings


def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("CSV_FILE_PATH", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


def test_defaults_are_deterministic(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)

    settings = Settings(_env_file=None)

    assert settings.database_url == "sqlite+aiosqlite:///./credentials.db"
    assert settings.csv_file_path == "./empty.csv"
    assert settings.log_level == "INFO"


def test_env_vars_override_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:////tmp/accounts.db")
    monkeypatch.setenv("CSV_FILE_PATH", "/tmp/demo.csv")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    settings = Settings(_env_file=None)

    assert settings.database_url == "sqlite+aiosqlite:////tmp/accounts.db"
    assert settings.csv_file_path == "/tmp/demo.csv"
    assert settings.log_level == "DEBUG"


def test_blank_database_url_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    _clear_env(monkeypatch)
    monkeypatch.setenv("DATABASE_URL", "")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
