"""Persistence layer for admin accounts and their sessions."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db.db_models import AdminModel, AdminSessionModel
from ..domain.models import AdminRecord, AdminSession
from ..exceptions import RepositoryError, handle_sqlalchemy_errors


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back; values are always written in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SQLAlchemyAdminRepository:
    """Manage ``admin`` and ``admin_session`` rows."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def find_by_username(self, username: str) -> AdminRecord | None:
        with handle_sqlalchemy_errors(entity="admin"):
            with self._session_factory() as session:
                model = session.get(AdminModel, username)
                return self._to_domain(model) if model is not None else None

    def find_by_token(self, token: str) -> AdminRecord | None:
        with handle_sqlalchemy_errors(entity="admin_session"):
            with self._session_factory() as session:
                row = session.scalars(
                    select(AdminSessionModel).where(AdminSessionModel.token == token)
                ).first()
                if row is None:
                    return None
                return self._to_domain(row.admin)

    def save(self, admin: AdminRecord) -> AdminRecord:
        with handle_sqlalchemy_errors(entity="admin"):
            with self._session_factory() as session:
                model = AdminModel(
                    username=admin.username,
                    salt=admin.salt,
                    password_hash=admin.password_hash,
                )
                if admin.session is not None:
                    model.session = self._session_model(admin.session)
                session.add(model)
                session.commit()
                return self._to_domain(model)

    def replace_session(self, admin_session: AdminSession) -> AdminSession:
        with handle_sqlalchemy_errors(entity="admin_session"):
            with self._session_factory() as session:
                if session.get(AdminModel, admin_session.username) is None:
                    raise RepositoryError(
                        f"admin_session: admin '{admin_session.username}' not found"
                    )
                row = session.get(AdminSessionModel, admin_session.username)
                if row is None:
                    session.add(self._session_model(admin_session))
                else:
                    row.token = admin_session.token
                    row.issued_at = admin_session.issued_at
                    row.expires_at = admin_session.expires_at
                session.commit()
        return admin_session

    @staticmethod
    def _session_model(admin_session: AdminSession) -> AdminSessionModel:
        return AdminSessionModel(
            username=admin_session.username,
            token=admin_session.token,
            issued_at=admin_session.issued_at,
            expires_at=admin_session.expires_at,
        )

    @staticmethod
    def _to_domain(model: AdminModel) -> AdminRecord:
        admin_session = None
        if model.session is not None:
            admin_session = AdminSession(
                username=model.session.username,
                token=model.session.token,
                issued_at=_as_utc(model.session.issued_at),
                expires_at=_as_utc(model.session.expires_at),
            )
        return AdminRecord(
            username=model.username,
            salt=bytes(model.salt),
            password_hash=bytes(model.password_hash),
            session=admin_session,
        )


__all__ = ["SQLAlchemyAdminRepository"]
