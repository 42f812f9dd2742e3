"""Logging configuration for the Profile API."""

from __future__ import annotations

import logging
import logging.config
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_logging_config(level: str = "INFO") -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stdout",
            }
        },
        "loggers": {
            "profile_api": {"level": level, "handlers": ["console"], "propagate": False},
        },
    }


def setup_logging(log_level: Optional[str] = None) -> None:
    """Install the console handler for the ``profile_api`` logger tree."""
    level = (log_level or "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"
    logging.config.dictConfig(build_logging_config(level))
