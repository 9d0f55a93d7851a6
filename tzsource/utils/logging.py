"""Logging setup for the updater."""
from __future__ import annotations

import logging

from tzsource.config.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(name: str = "tzsource", level: str | int | None = None) -> logging.Logger:
    """Configure logging for the application if it is not already configured."""

    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    if level is None:
        level = get_settings().log_level

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level if isinstance(level, int) else getattr(logging, str(level).upper(), logging.INFO))

    # Avoid duplicate logging from child loggers
    logger.propagate = False
    return logger
