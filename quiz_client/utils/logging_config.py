"""Logging configuration helpers for the quiz participant client."""

from __future__ import annotations

import logging
from logging import Logger

from quiz_client.core.config import settings


def configure_logging(level: str | None = None) -> Logger:
    """Configure basic logging for the application and return the package logger."""
    resolved = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logging.getLogger("quiz_client")
