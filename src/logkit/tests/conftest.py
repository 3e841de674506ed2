"""
Core pytest configuration for the logkit test suite.

Provides:
  - RecordingSink: a BaseSink that keeps every write in memory, in call order,
    so tests can assert on exact lines without capturing stdout/stderr.
  - `sink` / `service` fixtures built on it.
  - an autouse fixture that clears cached settings and the shared service so
    environment changes made with monkeypatch never leak between tests.
"""

from __future__ import annotations

import logging

import pytest

from logkit.config.settings import get_settings
from logkit.core.dependencies import reset_logging_service
from logkit.core.logging.service import LoggingService
from logkit.core.logging.sinks import BaseSink


class RecordingSink(BaseSink):
    """
    In-memory sink.

    `writes` holds (channel, text) tuples in the order they happened. The trace
    of an error is its own ("trace", text) entry, right after the ERROR line.
    """

    def __init__(self) -> None:
        self.writes: list[tuple[str, str]] = []

    def log(self, line: str) -> None:
        self.writes.append(("log", line))

    def error(self, line: str, trace: str | None = None) -> None:
        self.writes.append(("error", line))
        if trace is not None:
            self.writes.append(("trace", trace))

    def warn(self, line: str) -> None:
        self.writes.append(("warn", line))

    def debug(self, line: str) -> None:
        self.writes.append(("debug", line))

    def verbose(self, line: str) -> None:
        self.writes.append(("verbose", line))

    @property
    def lines(self) -> list[str]:
        return [text for _, text in self.writes]


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def service(sink: RecordingSink) -> LoggingService:
    """LoggingService writing into the `sink` fixture."""
    return LoggingService(sink)


@pytest.fixture(autouse=True)
def fresh_shared_state():
    """
    Clear cached Settings and the shared LoggingService around every test.

    Also detaches handlers installed on the logkit output logger by
    setup_logging(), since they keep references to capsys streams.
    """
    get_settings.cache_clear()
    reset_logging_service()
    yield
    get_settings.cache_clear()
    reset_logging_service()
    output_logger = logging.getLogger("logkit.output")
    for handler in list(output_logger.handlers):
        output_logger.removeHandler(handler)
