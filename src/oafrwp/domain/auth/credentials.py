"""Shared normalization helpers for account credential inputs."""

from __future__ import annotations


def normalize_username(*, username: str) -> str:
    """Normalize one username and reject blank values."""

    normalized = username.strip()
    if not normalized:
        raise ValueError("username cannot be blank")
    return normalized


def require_password(*, password: str) -> str:
    """Reject empty plaintext passwords; the value is returned unchanged."""

    if not password:
        raise ValueError("password cannot be blank")
    return password


def split_credentials(value: str) -> tuple[str, str]:
    """Split `username:password` on the first colon.

    The password keeps any further colons. Raises ValueError when the
    separator is missing or either side is empty.
    """

    username, separator, password = value.partition(":")
    if not separator:
        raise ValueError("credentials must be in format 'username:password'")
    if not username or not password:
        raise ValueError("both username and password are required")
    return username, password
