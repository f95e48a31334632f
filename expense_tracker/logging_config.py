from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Union

from . import config


def configure_logging(level: Union[int, str, None] = None) -> None:
    if level is None:
        level = config.LOG_LEVEL
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"}
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "level": level,
                }
            },
            "loggers": {
                "": {"handlers": ["console"], "level": level},
                "expense_tracker": {"handlers": [], "level": level, "propagate": True},
            },
        }
    )
    logging.getLogger(__name__).debug("Logging configured at level %s", level)
