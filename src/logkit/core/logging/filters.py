# src/logkit/core/logging/filters.py
"""
Filters used by the stdlib logging backend and by the HTTP middleware.

  - MaxLevelFilter: lets through only records strictly below a level. The stdout
    handler uses it so WARN/ERROR lines are written to stderr only.
  - redact_headers: masks credential-bearing HTTP headers before they are put
    into a request record.
"""

import logging
from logging import LogRecord
from typing import Mapping

REDACTED = "***REDACTED***"

SENSITIVE_HEADERS = frozenset({
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
    "x-auth-token",
    "x-csrf-token",
})


class MaxLevelFilter(logging.Filter):
    """
    Pass records whose level is strictly below `max_level`.

    `max_level` may be an int or a level name ("WARNING"), which makes the filter
    usable straight from a dictConfig mapping:
        {"()": MaxLevelFilter, "max_level": "WARNING"}
    """

    def __init__(self, max_level: int | str = logging.WARNING) -> None:
        super().__init__()
        if isinstance(max_level, str):
            resolved = logging.getLevelName(max_level.upper())
            if not isinstance(resolved, int):
                raise ValueError(f"Unknown log level: {max_level!r}")
            max_level = resolved
        self.max_level = max_level

    def filter(self, record: LogRecord) -> bool:
        return record.levelno < self.max_level


def redact_headers(headers: Mapping[str, str], sensitive: frozenset[str] = SENSITIVE_HEADERS) -> dict[str, str]:
    """Return a copy of `headers` with sensitive values replaced (case-insensitive names)."""
    return {
        name: (REDACTED if name.lower() in sensitive else value)
        for name, value in headers.items()
    }


__all__ = ["MaxLevelFilter", "redact_headers", "SENSITIVE_HEADERS", "REDACTED"]
