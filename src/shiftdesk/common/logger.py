"""Logging setup shared by the app factory and scripts."""

from __future__ import annotations

import logging.config

DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def get_logging_config(level: str = "INFO", fmt: str = DEFAULT_LOG_FORMAT) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": fmt,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "default": {
                "formatter": "default",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "shiftdesk": {
                "level": level.upper(),
                "handlers": ["default"],
                "propagate": False,
            },
        },
    }


def configure_logging(level: str = "INFO", fmt: str = DEFAULT_LOG_FORMAT) -> None:
    logging.config.dictConfig(get_logging_config(level, fmt))
