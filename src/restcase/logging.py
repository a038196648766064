"""Logging configuration for restcase."""

from __future__ import annotations

import logging

import structlog

PACKAGE_LOGGER = "restcase"


def configure_logging(level: str | int = "INFO") -> None:
    """Emit ``restcase.*`` events as JSON lines at ``level`` (e.g. ``AuthConfig.log_level``)."""
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"unknown log level: {level}")
        level = resolved

    logging.basicConfig(format="%(message)s")
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
