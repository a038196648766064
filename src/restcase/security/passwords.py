"""Salt generation and PBKDF2 hashing for administrator passwords."""

from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
from dataclasses import dataclass

from ..domain.models import AdminRecord
from ..exceptions import InfrastructureError

DEFAULT_DIGEST = "sha512"
DEFAULT_ITERATIONS = 10_000
DEFAULT_KEY_LENGTH_BITS = 256
LEGACY_SALT_BUDGET = 32


def legacy_salt_length(password: str) -> int:
    """Return the password-length dependent salt size of stored accounts."""

    return max(0, LEGACY_SALT_BUDGET - len(password))


@dataclass(slots=True)
class CredentialHasher:
    """Derive and check PBKDF2-HMAC-SHA512 password hashes.

    ``salt_bytes`` left as ``None`` keeps the historical sizing rule
    (``32 - len(password)`` random bytes, never negative). Setting it switches
    every newly registered admin to a fixed-length salt; existing records keep
    verifying because the salt is stored alongside the hash.
    """

    iterations: int = DEFAULT_ITERATIONS
    digest: str = DEFAULT_DIGEST
    key_length_bits: int = DEFAULT_KEY_LENGTH_BITS
    salt_bytes: int | None = None

    def __post_init__(self) -> None:
        if self.iterations < 1:
            raise ValueError("iterations must be positive")
        if self.salt_bytes is not None and self.salt_bytes < 1:
            raise ValueError("salt_bytes must be positive")

    def generate_salt(self, password: str) -> bytes:
        """Return base64-encoded random salt bytes for ``password``."""

        if self.salt_bytes is not None:
            length = self.salt_bytes
        else:
            length = legacy_salt_length(password)
        return base64.b64encode(secrets.token_bytes(length))

    def generate_hash(self, password: str, salt: bytes) -> bytes:
        """Derive the keyed hash for ``password``; deterministic for a given salt."""

        try:
            return hashlib.pbkdf2_hmac(
                self.digest,
                password.encode("utf-8"),
                salt,
                self.iterations,
                dklen=self.key_length_bits // 8,
            )
        except ValueError as exc:
            raise InfrastructureError("Internal error") from exc

    def authenticate(self, admin: AdminRecord, password: str) -> bool:
        """Check ``password`` against the stored hash using constant time."""

        candidate = self.generate_hash(password, admin.salt)
        return hmac.compare_digest(candidate, admin.password_hash)


__all__ = [
    "CredentialHasher",
    "DEFAULT_DIGEST",
    "DEFAULT_ITERATIONS",
    "legacy_salt_length",
]
