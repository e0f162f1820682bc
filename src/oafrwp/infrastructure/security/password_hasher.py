"""Scrypt password hasher adapter."""

from __future__ import annotations

import hashlib
import hmac
import secrets

from oafrwp.application.ports.password_hasher_port import PasswordHasherPort
from oafrwp.domain.auth.credential_record import (
    CREDENTIAL_SCHEME,
    CredentialRecord,
    MalformedCredentialRecordError,
)

SALT_BYTES = 16
DERIVED_KEY_BYTES = 64

# Node.js crypto.scryptSync defaults; records are shared with that tooling.
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1
SCRYPT_MAXMEM = 32 * 1024 * 1024


def encode_password(password: str) -> bytes:
    """UTF-8 encode password, replacing lone surrogates with U+FFFD as Node.js does."""

    return (
        password.encode("utf-16", "surrogatepass")
        .decode("utf-16", "replace")
        .encode("utf-8")
    )


def derive_key(password: str, salt: bytes, *, length: int = DERIVED_KEY_BYTES) -> bytes:
    """Derive `length` bytes from password and salt with scrypt."""

    return hashlib.scrypt(
        encode_password(password),
        salt=salt,
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        maxmem=SCRYPT_MAXMEM,
        dklen=length,
    )


class ScryptPasswordHasher(PasswordHasherPort):
    """Password hashing adapter using scrypt and `script:salt:hash` records."""

    def hash_password(self, password: str) -> str:
        salt = secrets.token_bytes(SALT_BYTES)
        record = CredentialRecord(
            scheme=CREDENTIAL_SCHEME,
            salt=salt,
            derived_key=derive_key(password, salt),
        )
        return record.serialize()

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        try:
            record = CredentialRecord.parse(password_hash)
        except MalformedCredentialRecordError:
            return False

        candidate = derive_key(password, record.salt, length=len(record.derived_key))
        if len(candidate) != len(record.derived_key):
            return False
        return hmac.compare_digest(candidate, record.derived_key)
