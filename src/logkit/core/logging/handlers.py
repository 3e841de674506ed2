# src/logkit/core/logging/handlers.py
"""
Handler factories for logging.dictConfig.

Each helper returns a handler configuration dictionary; builder.py registers them
under fixed names ("stdout", "stderr"). Keeping them as pure functions makes the
routing easy to unit test without touching global logging state.

Routing mirrors StreamSink: LOG/DEBUG/VERBOSE on stdout, WARN/ERROR on stderr.
Both handlers are RaisingStreamHandler, so a failed write reaches the caller of
the LoggingService method instead of being printed as "--- Logging error ---".
"""

import logging

from logkit.config.settings import Settings


class RaisingStreamHandler(logging.StreamHandler):
    """
    StreamHandler whose write errors propagate.

    logging.Handler.emit() catches every exception and hands it to handleError(),
    which only reports it on stderr. Re-raising here keeps the sink contract:
    failures surface unchanged, whatever logging.raiseExceptions is set to.
    """

    def handleError(self, record: logging.LogRecord) -> None:
        # called from inside emit()'s except block, so the active exception is re-raised
        raise


HANDLER_CLASS = f"{RaisingStreamHandler.__module__}.{RaisingStreamHandler.__qualname__}"


def get_stdout_handler(settings: Settings) -> dict:
    """
    Handler on sys.stdout for records below WARNING.

    The `below_warning` filter must be declared in the dictConfig "filters"
    section (builder.py does this). The level is DEBUG so every logkit severity
    is written; filtering is left to the host's own logging configuration.
    """
    return {
        "class": HANDLER_CLASS,
        "formatter": "line",
        "level": "DEBUG",
        "filters": ["below_warning"],
        "stream": "ext://sys.stdout",
    }


def get_stderr_handler(settings: Settings) -> dict:
    """Handler on sys.stderr for WARNING and above (WARN, ERROR and error traces)."""
    return {
        "class": HANDLER_CLASS,
        "formatter": "line",
        "level": "WARNING",
        "stream": "ext://sys.stderr",
    }
