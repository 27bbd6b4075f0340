"""Logging configuration for uow-template."""

from __future__ import annotations

import logging

import structlog

from .config import UnitOfWorkSettings


def configure_logging(settings: UnitOfWorkSettings | None = None) -> None:
    """Apply ``settings.log_level`` to the root logger and render structlog events as JSON.

    ``basicConfig`` is a no-op once the root logger has handlers, so the level
    is set on the root logger directly.
    """
    settings = settings or UnitOfWorkSettings.build_default()
    level = settings.log_level.upper()
    logging.basicConfig(format="%(asctime)s %(levelname)s %(message)s")
    logging.getLogger().setLevel(level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


__all__ = ["configure_logging"]
