"""Repository interfaces for persistence layer implementations."""

from __future__ import annotations

from typing import Protocol

from ..domain.models import AdminRecord, AdminSession


class AdminRepository(Protocol):
    """Persistence operations for administrator accounts.

    Every method is a single atomic call and may raise
    :class:`~restcase.exceptions.RepositoryError` when the store fails.
    """

    def find_by_username(self, username: str) -> AdminRecord | None:
        """Return the admin registered under ``username``, if any."""

    def find_by_token(self, token: str) -> AdminRecord | None:
        """Return the admin whose current session carries ``token``."""

    def save(self, admin: AdminRecord) -> AdminRecord:
        """Persist a newly registered admin."""

    def replace_session(self, session: AdminSession) -> AdminSession:
        """Store ``session`` as the only active session of its admin."""


__all__ = ["AdminRepository"]
