"""Domain models for administrator accounts and their sessions.

An :class:`AdminRecord` holds the credential material of one administrator.
The active login is kept in a separate :class:`AdminSession` keyed by the
admin username; a successful login replaces it, so each admin has at most one
token that the verifier will accept.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

USERNAME_MAX_LENGTH = 64


@dataclass(slots=True)
class AdminSession:
    """Server-side record of the token issued on the latest login."""

    username: str
    token: str
    expires_at: datetime
    issued_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at < now


@dataclass(slots=True)
class AdminRecord:
    """Administrator identity plus salted PBKDF2 credential."""

    username: str
    salt: bytes
    password_hash: bytes
    session: AdminSession | None = None

    @property
    def token(self) -> str | None:
        return self.session.token if self.session else None

    @property
    def token_expires_at(self) -> datetime | None:
        return self.session.expires_at if self.session else None


@dataclass(slots=True, frozen=True)
class AccessGrant:
    """Token handed back to the caller after a successful login."""

    token: str
    expires_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {"token": self.token, "expires_at": self.expires_at.isoformat()}


__all__ = ["AccessGrant", "AdminRecord", "AdminSession", "USERNAME_MAX_LENGTH"]
