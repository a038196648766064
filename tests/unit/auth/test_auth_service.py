from __future__ import annotations

from datetime import timedelta

import pytest

from restcase.auth.auth_errors import (
    AdminConflictError,
    AdminNotFoundError,
    AdminValidationError,
    UnauthorizedError,
    UnauthorizedReason,
)
from restcase.auth.auth_service import AdminAuthService
from restcase.config import AuthConfig
from restcase.exceptions import DatabaseOperationError, ErrorKind, InfrastructureError
from restcase.repositories.admin_repository import SQLAlchemyAdminRepository
from restcase.security.jwt import TokenIssuer
from restcase.security.passwords import CredentialHasher


class FailingRepository:
    def find_by_username(self, username):
        raise DatabaseOperationError("admin: database operation failed")

    def find_by_token(self, token):
        raise DatabaseOperationError("admin_session: database operation failed")

    def save(self, admin):
        raise DatabaseOperationError("admin: database operation failed")

    def replace_session(self, session):
        raise DatabaseOperationError("admin_session: database operation failed")


class SessionWriteFailingRepository(SQLAlchemyAdminRepository):
    def replace_session(self, admin_session):
        raise DatabaseOperationError("admin_session: database operation failed")


@pytest.fixture
def service(repository, clock) -> AdminAuthService:
    return AdminAuthService(repository, clock=clock)


@pytest.mark.unit
def test_register_stores_salted_hash(service, repository) -> None:
    admin = service.register("alice", "s3cret")

    stored = repository.find_by_username("alice")
    assert stored is not None
    assert stored.password_hash == admin.password_hash
    assert stored.password_hash != b"s3cret"
    assert stored.session is None


@pytest.mark.unit
def test_register_same_password_twice_uses_different_salts(service) -> None:
    first = service.register("alice", "s3cret")
    second = service.register("carol", "s3cret")

    assert first.salt != second.salt
    assert first.password_hash != second.password_hash


@pytest.mark.unit
def test_login_returns_token_expiring_in_thirty_seconds(service, clock) -> None:
    service.register("alice", "s3cret")

    grant = service.login("alice", "s3cret")

    assert grant.token
    assert grant.expires_at - clock() == timedelta(seconds=30)
    assert grant.to_dict() == {
        "token": grant.token,
        "expires_at": grant.expires_at.isoformat(),
    }


@pytest.mark.unit
def test_login_stores_session_with_token_expiry(service, repository) -> None:
    service.register("alice", "s3cret")

    grant = service.login("alice", "s3cret")

    stored = repository.find_by_username("alice")
    assert stored.token == grant.token
    assert stored.token_expires_at == grant.expires_at


@pytest.mark.unit
def test_login_and_token_share_one_clock_read(repository, clock) -> None:
    issuer = TokenIssuer()
    service = AdminAuthService(repository, issuer=issuer, clock=clock)
    service.register("alice", "s3cret")

    grant = service.login("alice", "s3cret")

    assert issuer.decode(grant.token)["exp"] == int(grant.expires_at.timestamp())


@pytest.mark.unit
def test_login_with_wrong_password_is_unauthorized(service) -> None:
    service.register("alice", "s3cret")

    with pytest.raises(UnauthorizedError) as excinfo:
        service.login("alice", "wrong")

    assert excinfo.value.reason is UnauthorizedReason.INVALID_LOGIN
    assert excinfo.value.kind is ErrorKind.UNAUTHORIZED


@pytest.mark.unit
def test_login_unknown_user_is_not_found(service) -> None:
    with pytest.raises(AdminNotFoundError) as excinfo:
        service.login("bob", "anything")

    assert excinfo.value.kind is ErrorKind.NOT_FOUND


@pytest.mark.unit
def test_verify_token_accepts_fresh_login(service) -> None:
    service.register("alice", "s3cret")
    grant = service.login("alice", "s3cret")

    assert service.verify_token(f"Bearer {grant.token}") is True


@pytest.mark.unit
def test_verify_token_rejects_after_expiry(service, clock) -> None:
    service.register("alice", "s3cret")
    grant = service.login("alice", "s3cret")

    clock.advance(30)
    assert service.verify_token(f"Bearer {grant.token}") is True

    clock.advance(1)
    with pytest.raises(UnauthorizedError) as excinfo:
        service.verify_token(f"Bearer {grant.token}")
    assert excinfo.value.reason is UnauthorizedReason.TOKEN_EXPIRED


@pytest.mark.unit
def test_new_login_replaces_previous_session(service, clock) -> None:
    service.register("alice", "s3cret")
    first = service.login("alice", "s3cret")
    clock.advance(5)
    second = service.login("alice", "s3cret")

    assert first.token != second.token
    assert service.check_token(f"Bearer {second.token}").accepted is True
    result = service.check_token(f"Bearer {first.token}")
    assert result.accepted is False
    assert result.reason is UnauthorizedReason.TOKEN_NOT_RECOGNIZED


@pytest.mark.unit
@pytest.mark.parametrize("credential", [None, "", "abc", "Bearer "])
def test_verify_token_without_credential(service, credential) -> None:
    with pytest.raises(UnauthorizedError) as excinfo:
        service.verify_token(credential)

    assert excinfo.value.reason is UnauthorizedReason.MISSING_CREDENTIAL


@pytest.mark.unit
def test_token_from_previous_process_fails_signature(repository, clock) -> None:
    before_restart = AdminAuthService(repository, clock=clock)
    before_restart.register("alice", "s3cret")
    grant = before_restart.login("alice", "s3cret")

    after_restart = AdminAuthService(repository, clock=clock)

    result = after_restart.check_token(f"Bearer {grant.token}")
    assert result.accepted is False
    assert result.reason is UnauthorizedReason.SIGNATURE_INVALID


@pytest.mark.unit
def test_shared_signing_key_survives_restart(repository, clock) -> None:
    key = b"k" * 64
    before_restart = AdminAuthService(repository, issuer=TokenIssuer(signing_key=key), clock=clock)
    before_restart.register("alice", "s3cret")
    grant = before_restart.login("alice", "s3cret")

    after_restart = AdminAuthService(repository, issuer=TokenIssuer(signing_key=key), clock=clock)

    assert after_restart.verify_token(f"Bearer {grant.token}") is True


@pytest.mark.unit
def test_register_duplicate_username_conflicts(service) -> None:
    service.register("alice", "s3cret")

    with pytest.raises(AdminConflictError) as excinfo:
        service.register("alice", "other")

    assert isinstance(excinfo.value, InfrastructureError)
    assert excinfo.value.kind is ErrorKind.INFRASTRUCTURE


@pytest.mark.unit
@pytest.mark.parametrize(("username", "password"), [("", "s3cret"), ("   ", "s3cret"), ("alice", "")])
def test_register_rejects_blank_input(service, username, password) -> None:
    with pytest.raises(AdminValidationError) as excinfo:
        service.register(username, password)

    assert excinfo.value.kind is ErrorKind.VALIDATION


@pytest.mark.unit
def test_register_store_failure_is_internal_error() -> None:
    service = AdminAuthService(FailingRepository())

    with pytest.raises(InfrastructureError) as excinfo:
        service.register("alice", "s3cret")

    assert not isinstance(excinfo.value, AdminConflictError)
    assert str(excinfo.value) == "Could not save admin"


@pytest.mark.unit
def test_login_lookup_failure_is_internal_error() -> None:
    service = AdminAuthService(FailingRepository())

    with pytest.raises(InfrastructureError):
        service.login("alice", "s3cret")


@pytest.mark.unit
def test_login_session_write_failure_is_internal_error(session_factory, clock) -> None:
    repository = SessionWriteFailingRepository(session_factory)
    service = AdminAuthService(repository, clock=clock)
    service.register("alice", "s3cret")

    with pytest.raises(InfrastructureError):
        service.login("alice", "s3cret")


@pytest.mark.unit
def test_verify_token_lookup_failure_is_internal_error() -> None:
    service = AdminAuthService(FailingRepository())

    with pytest.raises(InfrastructureError):
        service.verify_token("Bearer abc.def.ghi")


@pytest.mark.unit
def test_from_config_uses_configured_settings(engine, session_factory) -> None:
    config = AuthConfig(
        database_url="sqlite:///:memory:",
        engine=engine,
        session_factory=session_factory,
        token_ttl_seconds=120,
        hash_iterations=1_000,
        salt_bytes=16,
        signing_key=b"configured-signing-key-for-tests-0123456789",
    )

    service = AdminAuthService.from_config(config)
    service.register("alice", "s3cret")
    grant = service.login("alice", "s3cret")

    other = AdminAuthService.from_config(config)
    assert other.verify_token(f"Bearer {grant.token}") is True
    hasher = CredentialHasher(iterations=1_000, salt_bytes=16)
    stored = SQLAlchemyAdminRepository(session_factory).find_by_username("alice")
    assert hasher.authenticate(stored, "s3cret") is True


@pytest.mark.unit
@pytest.mark.parametrize("ttl", [timedelta(0), timedelta(seconds=-5)])
def test_service_rejects_non_positive_token_ttl(repository, ttl) -> None:
    with pytest.raises(ValueError):
        AdminAuthService(repository, token_ttl=ttl)


@pytest.mark.unit
def test_register_rejects_username_longer_than_column(service, repository) -> None:
    with pytest.raises(AdminValidationError):
        service.register("a" * 65, "s3cret")

    assert repository.find_by_username("a" * 65) is None
    assert service.register("a" * 64, "s3cret").username == "a" * 64
