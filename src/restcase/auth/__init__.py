"""Administrator authentication: registration, login and token checks."""

from .auth_errors import (
    AdminConflictError,
    AdminNotFoundError,
    AdminValidationError,
    AuthError,
    UnauthorizedError,
    UnauthorizedReason,
)
from .auth_service import AdminAuthService
from .auth_verifier import TokenCheck, TokenVerifier, extract_bearer_token

__all__ = [
    "AdminAuthService",
    "AdminConflictError",
    "AdminNotFoundError",
    "AdminValidationError",
    "AuthError",
    "TokenCheck",
    "TokenVerifier",
    "UnauthorizedError",
    "UnauthorizedReason",
    "extract_bearer_token",
]
