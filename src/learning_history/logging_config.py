# ABOUTME: Configures process-wide logging for the generator CLIs.
# ABOUTME: Reads the log level from LEARNING_HISTORY_LOG_LEVEL.

import os
from logging.config import dictConfig
from typing import Optional

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Install a single stderr handler on the root logger."""
    level = (level or os.getenv("LEARNING_HISTORY_LOG_LEVEL", "WARNING")).upper()

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": DEFAULT_LOG_FORMAT,
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "root": {
                "handlers": ["default"],
                "level": level,
            },
        }
    )
