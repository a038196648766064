"""Admin registration, login and JWT issuance."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

import structlog

from ..config import AuthConfig
from ..domain.models import USERNAME_MAX_LENGTH, AccessGrant, AdminRecord, AdminSession
from ..exceptions import InfrastructureError, IntegrityConstraintViolation, RepositoryError
from ..repositories.admin_repository import SQLAlchemyAdminRepository
from ..repositories.interfaces import AdminRepository
from ..security.jwt import TokenIssuer
from ..security.passwords import CredentialHasher
from .auth_errors import (
    AdminConflictError,
    AdminNotFoundError,
    AdminValidationError,
    UnauthorizedError,
    UnauthorizedReason,
)
from .auth_verifier import TokenCheck, TokenVerifier, utcnow

logger = structlog.get_logger(__name__)

DEFAULT_TOKEN_TTL = timedelta(seconds=30)


class AdminAuthService:
    """Register admins, log them in and verify their session tokens.

    Each successful login replaces the admin's stored session, so only the
    most recently issued token is accepted. Concurrent logins for the same
    admin are last-write-wins.
    """

    def __init__(
        self,
        repository: AdminRepository,
        *,
        hasher: CredentialHasher | None = None,
        issuer: TokenIssuer | None = None,
        token_ttl: timedelta = DEFAULT_TOKEN_TTL,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        if token_ttl <= timedelta(0):
            raise ValueError("token_ttl must be positive")
        self._repository = repository
        self._hasher = hasher or CredentialHasher()
        self._issuer = issuer or TokenIssuer()
        self._token_ttl = token_ttl
        self._clock = clock
        self._verifier = TokenVerifier(repository, self._issuer, clock=clock)

    @classmethod
    def from_config(cls, config: AuthConfig) -> "AdminAuthService":
        if config.signing_key:
            issuer = TokenIssuer(signing_key=config.signing_key)
        else:
            issuer = TokenIssuer()
            logger.warning(
                "auth.signing_key.ephemeral",
                detail="tokens issued by this process stop verifying after a restart",
            )
        hasher = CredentialHasher(
            iterations=config.hash_iterations, salt_bytes=config.salt_bytes
        )
        return cls(
            SQLAlchemyAdminRepository(config.session_factory),
            hasher=hasher,
            issuer=issuer,
            token_ttl=timedelta(seconds=config.token_ttl_seconds),
        )

    def register(self, username: str, password: str) -> AdminRecord:
        """Create a new admin with a freshly salted password hash."""
        if not username or not username.strip():
            raise AdminValidationError("username must not be empty")
        if len(username) > USERNAME_MAX_LENGTH:
            raise AdminValidationError(
                f"username must be at most {USERNAME_MAX_LENGTH} characters"
            )
        if not password:
            raise AdminValidationError("password must not be empty")

        salt = self._hasher.generate_salt(password)
        admin = AdminRecord(
            username=username,
            salt=salt,
            password_hash=self._hasher.generate_hash(password, salt),
        )
        try:
            saved = self._repository.save(admin)
        except IntegrityConstraintViolation as exc:
            logger.warning("auth.register.conflict", username=username)
            raise AdminConflictError(f"Admin '{username}' already exists") from exc
        except RepositoryError as exc:
            logger.error("auth.register.failed", username=username, error=str(exc))
            raise InfrastructureError("Could not save admin") from exc

        logger.info("auth.register.success", username=username)
        return saved

    def login(self, username: str, password: str) -> AccessGrant:
        """Validate credentials, start a new session and return its token."""
        try:
            admin = self._repository.find_by_username(username)
        except RepositoryError as exc:
            logger.error("auth.login.lookup_failed", username=username, error=str(exc))
            raise InfrastructureError("Internal error") from exc

        if admin is None:
            logger.warning("auth.login.failure", username=username, reason="not_found")
            raise AdminNotFoundError("User does not exist")

        if not self._hasher.authenticate(admin, password):
            logger.warning(
                "auth.login.failure",
                username=username,
                reason=UnauthorizedReason.INVALID_LOGIN.value,
            )
            raise UnauthorizedError(UnauthorizedReason.INVALID_LOGIN)

        issued_at = self._clock()
        expires_at = issued_at + self._token_ttl
        token = self._issuer.issue(admin, expires_at)
        session = AdminSession(
            username=admin.username,
            token=token,
            issued_at=issued_at,
            expires_at=expires_at,
        )
        try:
            self._repository.replace_session(session)
        except RepositoryError as exc:
            logger.error("auth.login.persist_failed", username=username, error=str(exc))
            raise InfrastructureError("Internal error") from exc

        logger.info(
            "auth.login.success",
            username=username,
            expires_at=expires_at.isoformat(),
        )
        return AccessGrant(token=token, expires_at=expires_at)

    def verify_token(self, credential: str | None) -> bool:
        """Return ``True`` for a trusted ``Bearer`` credential, raise otherwise."""
        return self._verifier.verify(credential)

    def check_token(self, credential: str | None) -> TokenCheck:
        return self._verifier.check(credential)


__all__ = ["AdminAuthService", "DEFAULT_TOKEN_TTL"]
