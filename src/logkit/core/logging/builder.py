# src/logkit/core/logging/builder.py
"""
Logging builder for the stdlib backend (LOG_SINK=logging).

This module:
 - builds a dictConfig-compatible mapping from Settings
 - applies it with logging.config.dictConfig and returns the configured logger,
   ready to be wrapped in a LoggingSink

The mapping configures a single named logger (settings.LOG_LOGGER_NAME) with
propagation disabled, so logkit lines are not duplicated by handlers the host
application attached to the root logger. Existing loggers are left alone
(disable_existing_loggers=False).

The logger and the stdout handler are pinned to DEBUG, so every debug() and
verbose() call is written; level filtering belongs to the host application.

Configuration knobs (on your Settings object):
 - LOG_LOGGER_NAME: name of the logger lines are written to
 - LOG_COLOR / LOG_TIMESTAMPS: SeverityColorFormatter options
"""

from __future__ import annotations

import logging
import logging.config

from logkit.config.settings import Settings

from .filters import MaxLevelFilter
from .formatters import SeverityColorFormatter
from .handlers import get_stderr_handler, get_stdout_handler

logger = logging.getLogger(__name__)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping using the provided settings.

    The returned mapping includes:
      - formatters: "line" (SeverityColorFormatter)
      - filters: "below_warning" (MaxLevelFilter)
      - handlers: "stdout" and "stderr"
      - loggers: settings.LOG_LOGGER_NAME
    """
    formatters = {
        "line": {
            "()": SeverityColorFormatter,
            "color": settings.LOG_COLOR,
            "timestamps": settings.LOG_TIMESTAMPS,
        },
    }

    filters = {
        "below_warning": {"()": MaxLevelFilter, "max_level": "WARNING"},
    }

    handlers = {
        "stdout": get_stdout_handler(settings),
        "stderr": get_stderr_handler(settings),
    }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            settings.LOG_LOGGER_NAME: {
                "handlers": list(handlers.keys()),
                "level": "DEBUG",
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> logging.Logger:
    """
    Apply make_dict_config(settings) and return the configured logger.

    Safe to call more than once: dictConfig replaces the handlers of the named
    logger, so repeated calls do not stack duplicate handlers.
    """
    logging.config.dictConfig(make_dict_config(settings))
    logger.debug("logkit backend configured: logger=%s", settings.LOG_LOGGER_NAME)
    return logging.getLogger(settings.LOG_LOGGER_NAME)


__all__ = ["make_dict_config", "setup_logging"]
