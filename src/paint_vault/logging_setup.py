"""Logging configuration for the service and the admin command line."""
from __future__ import annotations

import logging

from .config import Settings

LOGGER_NAME = "paint_vault"
_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def setup_logging(settings: Settings) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling this more than once (one call per app instance in tests) does not
    stack handlers.
    """

    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not any(isinstance(handler, logging.StreamHandler) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level)

    return logger


__all__ = ["LOGGER_NAME", "setup_logging"]
