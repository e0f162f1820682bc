"""Portable text format for stored password credentials."""

from __future__ import annotations

import re
from dataclasses import dataclass

CREDENTIAL_SCHEME = "script"
_FIELD_SEPARATOR = ":"
_HEX_FIELD = re.compile(r"(?:[0-9a-fA-F]{2})*")


class MalformedCredentialRecordError(ValueError):
    """Raised when a stored credential string cannot be parsed."""


@dataclass(frozen=True)
class CredentialRecord:
    """Salted derived key in `scheme:saltHex:hashHex` form.

    The scheme literal is kept as `script` so records written by the older
    Node.js tooling stay readable.
    """

    scheme: str
    salt: bytes
    derived_key: bytes

    @classmethod
    def parse(cls, text: str) -> CredentialRecord:
        """Parse one stored credential string or raise MalformedCredentialRecordError."""

        fields = str(text).split(_FIELD_SEPARATOR)
        if len(fields) != 3:
            raise MalformedCredentialRecordError(
                f"expected 3 fields, got {len(fields)}"
            )

        scheme, salt_hex, key_hex = fields
        if scheme != CREDENTIAL_SCHEME:
            raise MalformedCredentialRecordError(f"unsupported scheme: {scheme!r}")

        if _HEX_FIELD.fullmatch(salt_hex) is None or _HEX_FIELD.fullmatch(key_hex) is None:
            raise MalformedCredentialRecordError("salt and hash must be hex-encoded")

        salt = bytes.fromhex(salt_hex)
        derived_key = bytes.fromhex(key_hex)

        if not derived_key:
            raise MalformedCredentialRecordError("hash cannot be empty")
        return cls(scheme=scheme, salt=salt, derived_key=derived_key)

    def serialize(self) -> str:
        """Return the colon-delimited storage form."""

        return _FIELD_SEPARATOR.join((self.scheme, self.salt.hex(), self.derived_key.hex()))
