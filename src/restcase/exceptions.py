"""Domain level exceptions and helpers for repository layers."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from sqlalchemy import exc as sa_exc

__all__ = [
    "ErrorKind",
    "AppError",
    "InfrastructureError",
    "RepositoryError",
    "IntegrityConstraintViolation",
    "DatabaseOperationError",
    "handle_sqlalchemy_errors",
]


class ErrorKind(str, Enum):
    """Coarse classification callers use to map failures onto responses."""

    INFRASTRUCTURE = "infrastructure"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    VALIDATION = "validation"


class AppError(Exception):
    """Base class for application specific errors."""

    kind: ErrorKind = ErrorKind.INFRASTRUCTURE


class InfrastructureError(AppError):
    """Raised when the store or the hashing backend cannot serve a request."""

    kind = ErrorKind.INFRASTRUCTURE


class RepositoryError(AppError):
    """Base class for persistence layer failures."""


class IntegrityConstraintViolation(RepositoryError):
    """Raised when a database constraint is violated."""


class DatabaseOperationError(RepositoryError):
    """Raised for unexpected database errors."""


@dataclass(slots=True)
class _EntityContext:
    """Internal helper describing the entity for error messages."""

    entity: str | None = None

    def format(self, message: str) -> str:
        if self.entity:
            return f"{self.entity}: {message}"
        return message


def _translate_sqlalchemy_error(exc: Exception, *, context: _EntityContext) -> RepositoryError:
    if isinstance(exc, sa_exc.IntegrityError):
        return IntegrityConstraintViolation(context.format("integrity constraint violated"))
    if isinstance(exc, sa_exc.DBAPIError):
        return DatabaseOperationError(context.format("database operation failed"))
    return RepositoryError(context.format(str(exc)))


@contextmanager
def handle_sqlalchemy_errors(*, entity: str | None = None) -> Iterator[None]:
    """Translate SQLAlchemy errors into domain specific ones."""

    context = _EntityContext(entity)
    try:
        yield
    except sa_exc.SQLAlchemyError as exc:
        raise _translate_sqlalchemy_error(exc, context=context) from exc
