"""Application configuration builder."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .db.db_init import init_db


@dataclass(slots=True)
class AuthConfig:
    database_url: str
    engine: Engine
    session_factory: sessionmaker[Session]
    token_ttl_seconds: int = 30
    hash_iterations: int = 10_000
    salt_bytes: int | None = None
    signing_key: bytes | None = field(default=None, repr=False)
    log_level: str = "INFO"


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


def _positive_int(name: str, default: int) -> int:
    value = _optional_int(name)
    if value is None:
        return default
    if value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value}")
    return value


def load_config() -> AuthConfig:
    """Load configuration from environment (SQLite by default)."""
    token_ttl_seconds = _positive_int("ADMIN_TOKEN_TTL_SECONDS", 30)
    hash_iterations = _positive_int("ADMIN_HASH_ITERATIONS", 10_000)
    salt_bytes = _optional_int("ADMIN_SALT_BYTES")
    if salt_bytes is not None and salt_bytes < 1:
        raise ValueError(f"ADMIN_SALT_BYTES must be a positive integer, got {salt_bytes}")
    raw_key = os.getenv("ADMIN_SIGNING_KEY")
    signing_key = raw_key.encode("utf-8") if raw_key else None
    log_level = os.getenv("ADMIN_LOG_LEVEL", "INFO").strip().upper() or "INFO"

    database_url = os.getenv("DATABASE_URL", "sqlite:///restcase.db")
    engine = create_engine(database_url, future=True)
    session_factory: sessionmaker[Session] = sessionmaker(bind=engine, expire_on_commit=False)

    init_db(engine)

    return AuthConfig(
        database_url=database_url,
        engine=engine,
        session_factory=session_factory,
        token_ttl_seconds=token_ttl_seconds,
        hash_iterations=hash_iterations,
        salt_bytes=salt_bytes,
        signing_key=signing_key,
        log_level=log_level,
    )
