"""Verification of bearer tokens presented by administrators.

Each call walks a fixed chain and stops at the first failure:

1. a credential must be present and framed as ``Bearer <token>``;
2. the token must belong to a stored admin session;
3. the stored session must not have expired;
4. the JWT signature and ``admin`` claim must check out against the process
   signing key.

The expiry check precedes the signature check: an expired but correctly signed
token is reported as expired.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import NoReturn

import structlog

from ..domain.models import AdminRecord
from ..exceptions import InfrastructureError, RepositoryError
from ..repositories.interfaces import AdminRepository
from ..security.jwt import TokenIssuer, TokenSignatureError
from .auth_errors import UnauthorizedError, UnauthorizedReason

logger = structlog.get_logger(__name__)

BEARER_SCHEME = "bearer"


def utcnow() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(tz=timezone.utc)


def extract_bearer_token(credential: str | None) -> str | None:
    """Return the token part of ``Bearer <token>`` or ``None`` when malformed."""

    if not credential:
        return None
    scheme, _, token = credential.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        return None
    token = token.strip()
    return token or None


@dataclass(slots=True, frozen=True)
class TokenCheck:
    """Outcome of a verification that does not raise on rejection."""

    accepted: bool
    reason: UnauthorizedReason | None = None


class TokenVerifier:
    """Run the verification chain against the admin store."""

    def __init__(
        self,
        repository: AdminRepository,
        issuer: TokenIssuer,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._repository = repository
        self._issuer = issuer
        self._clock = clock

    def verify(self, credential: str | None) -> bool:
        """Return ``True`` for a trusted token, raise :class:`UnauthorizedError` otherwise."""

        token = extract_bearer_token(credential)
        if token is None:
            self._reject(UnauthorizedReason.MISSING_CREDENTIAL)

        admin = self._lookup(token)
        if admin is None or admin.session is None:
            self._reject(UnauthorizedReason.TOKEN_NOT_RECOGNIZED)

        if admin.session.is_expired(self._clock()):
            self._reject(UnauthorizedReason.TOKEN_EXPIRED, username=admin.username)

        try:
            self._issuer.decode(token)
        except TokenSignatureError as exc:
            self._reject(
                UnauthorizedReason.SIGNATURE_INVALID, username=admin.username, cause=exc
            )
        return True

    def check(self, credential: str | None) -> TokenCheck:
        """Same chain as :meth:`verify`, reporting rejections as a result."""

        try:
            self.verify(credential)
        except UnauthorizedError as exc:
            return TokenCheck(accepted=False, reason=exc.reason)
        return TokenCheck(accepted=True)

    def _lookup(self, token: str) -> AdminRecord | None:
        try:
            return self._repository.find_by_token(token)
        except RepositoryError as exc:
            logger.error("auth.token.lookup_failed", error=str(exc))
            raise InfrastructureError("Internal error") from exc

    @staticmethod
    def _reject(
        reason: UnauthorizedReason,
        *,
        username: str | None = None,
        cause: Exception | None = None,
    ) -> NoReturn:
        logger.warning("auth.token.rejected", reason=reason.value, username=username)
        raise UnauthorizedError(reason) from cause


__all__ = ["TokenCheck", "TokenVerifier", "extract_bearer_token", "utcnow"]
