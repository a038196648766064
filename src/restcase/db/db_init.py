"""Database initialization helpers."""

from __future__ import annotations

import structlog
from sqlalchemy.engine import Engine

from .db_models import Base

logger = structlog.get_logger(__name__)


def init_db(engine: Engine) -> None:
    """Create the admin tables if they do not exist yet."""
    Base.metadata.create_all(engine)
    logger.info("db.init.completed", url=engine.url.render_as_string(hide_password=True))
