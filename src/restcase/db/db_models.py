"""SQLAlchemy ORM models."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, LargeBinary, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from ..domain.models import USERNAME_MAX_LENGTH


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class Base(DeclarativeBase):
    """Base declarative class."""


class AdminModel(Base):
    __tablename__ = "admin"

    username: Mapped[str] = mapped_column(String(USERNAME_MAX_LENGTH), primary_key=True)
    salt: Mapped[bytes] = mapped_column(LargeBinary(64), nullable=False)
    password_hash: Mapped[bytes] = mapped_column(LargeBinary(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    session: Mapped["AdminSessionModel | None"] = relationship(
        back_populates="admin",
        cascade="all, delete-orphan",
        uselist=False,
        lazy="joined",
    )


class AdminSessionModel(Base):
    __tablename__ = "admin_session"

    username: Mapped[str] = mapped_column(
        String(USERNAME_MAX_LENGTH), ForeignKey("admin.username"), primary_key=True
    )
    token: Mapped[str] = mapped_column(String(1024), nullable=False, unique=True, index=True)
    issued_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    admin: Mapped[AdminModel] = relationship(back_populates="session")


__all__ = ["AdminModel", "AdminSessionModel", "Base"]
