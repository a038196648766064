"""Security utilities for administrator authentication."""

from .jwt import TokenIssuer, TokenSignatureError, generate_signing_key
from .passwords import CredentialHasher, legacy_salt_length

__all__ = [
    "CredentialHasher",
    "TokenIssuer",
    "TokenSignatureError",
    "generate_signing_key",
    "legacy_salt_length",
]
