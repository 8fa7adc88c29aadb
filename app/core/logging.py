"""
Logging setup - one dictConfig applied at app creation.
Challenge: Consistent format across uvicorn, app modules and Celery workers.
"""

import logging
from logging.config import dictConfig


def configure_logging(level: str = "INFO") -> None:
    """Route app loggers to stdout with a tab-separated format."""
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s\t[%(levelname)s]\t%(name)s\t%(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                "app": {"handlers": ["console"], "level": level.upper(), "propagate": False},
                # Transport-level chatter from the ES client is noisy at INFO
                "elastic_transport": {"level": "WARNING"},
            },
        }
    )
    logging.getLogger(__name__).debug("Logging configured at %s", level.upper())
