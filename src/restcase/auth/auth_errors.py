"""Error types raised by admin authentication."""

from __future__ import annotations

from enum import Enum

from ..exceptions import AppError, ErrorKind, InfrastructureError


class UnauthorizedReason(str, Enum):
    """Why a login or a presented token was rejected."""

    INVALID_LOGIN = "invalid_login"
    MISSING_CREDENTIAL = "missing_credential"
    TOKEN_NOT_RECOGNIZED = "token_not_recognized"
    TOKEN_EXPIRED = "token_expired"
    SIGNATURE_INVALID = "signature_invalid"

    @property
    def message(self) -> str:
        return _REASON_MESSAGES[self]


_REASON_MESSAGES = {
    UnauthorizedReason.INVALID_LOGIN: "Invalid login",
    UnauthorizedReason.MISSING_CREDENTIAL: "No authorization header found",
    UnauthorizedReason.TOKEN_NOT_RECOGNIZED: "Token not found",
    UnauthorizedReason.TOKEN_EXPIRED: "Token has run out",
    UnauthorizedReason.SIGNATURE_INVALID: "JWT could not be verified",
}


class AuthError(AppError):
    """Base class for auth failures."""


class UnauthorizedError(AuthError):
    """Raised when credentials or a presented token are rejected."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, reason: UnauthorizedReason, message: str | None = None) -> None:
        super().__init__(message or reason.message)
        self.reason = reason


class AdminNotFoundError(AuthError):
    """Raised when a login names an unknown admin."""

    kind = ErrorKind.NOT_FOUND


class AdminValidationError(AuthError):
    """Raised when registration input is blank."""

    kind = ErrorKind.VALIDATION


class AdminConflictError(InfrastructureError):
    """Raised when the store rejects a registration for an existing username."""


__all__ = [
    "AdminConflictError",
    "AdminNotFoundError",
    "AdminValidationError",
    "AuthError",
    "UnauthorizedError",
    "UnauthorizedReason",
]
