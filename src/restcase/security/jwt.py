"""JWT helpers used for issuing and checking admin session tokens."""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import jwt

from ..domain.models import AdminRecord

ALGORITHM = "HS256"
SIGNING_KEY_BYTES = 64
REQUIRED_CLAIMS = ("user", "exp", "admin")


class TokenSignatureError(Exception):
    """Raised when a token fails signature or claim verification."""


def generate_signing_key() -> bytes:
    """Return a fresh random MAC key, valid for the lifetime of the process."""

    return secrets.token_bytes(SIGNING_KEY_BYTES)


@dataclass(slots=True)
class TokenIssuer:
    """Sign admin session tokens and verify them against the same key."""

    signing_key: bytes = field(default_factory=generate_signing_key, repr=False)
    algorithm: str = ALGORITHM

    def issue(self, admin: AdminRecord, expires_at: datetime) -> str:
        """Return a compact JWS carrying ``user``, ``exp`` and ``admin`` claims."""

        payload: dict[str, Any] = {
            "user": admin.username,
            "exp": int(expires_at.timestamp()),
            "admin": True,
        }
        return jwt.encode(
            payload,
            self.signing_key,
            algorithm=self.algorithm,
            headers={"typ": "JWT"},
        )

    def decode(self, token: str) -> dict[str, Any]:
        """Verify ``token`` and return its claims.

        Expiry is not checked here: the stored session expiry is authoritative
        and is evaluated by the verifier before the signature.
        """

        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self.signing_key,
                algorithms=[self.algorithm],
                options={"require": list(REQUIRED_CLAIMS), "verify_exp": False},
            )
        except jwt.InvalidTokenError as exc:
            raise TokenSignatureError("JWT could not be verified") from exc

        if payload.get("admin") is not True:
            raise TokenSignatureError("admin claim missing")
        return payload


__all__ = [
    "ALGORITHM",
    "TokenIssuer",
    "TokenSignatureError",
    "generate_signing_key",
]
