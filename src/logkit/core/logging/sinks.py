# src/logkit/core/logging/sinks.py
"""
Sinks: where finished log lines are written.

A sink exposes one entry point per severity. Every entry point is always
present, so callers never need to check whether debug/verbose exist.

  - StreamSink: default. Writes to stdout/stderr directly, one write + flush per line.
  - LoggingSink: forwards each line to a stdlib `logging.Logger`, letting the host
    application's logging configuration decide where it ends up (see builder.py).

Sink failures are not caught here. Callers see them as raised. For LoggingSink
that holds with the handlers installed by builder.setup_logging(), which re-raise
write errors instead of reporting them through logging.Handler.handleError().
"""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from typing import TextIO

from logkit.constants import VERBOSE_LEVEL


def register_verbose_level() -> None:
    """Give VERBOSE_LEVEL its "VERBOSE" name in the stdlib logging module."""
    if logging.getLevelName(VERBOSE_LEVEL) != "VERBOSE":
        logging.addLevelName(VERBOSE_LEVEL, "VERBOSE")


class BaseSink(ABC):
    """Write target for fully formatted lines, one method per severity."""

    @abstractmethod
    def log(self, line: str) -> None: ...

    @abstractmethod
    def error(self, line: str, trace: str | None = None) -> None:
        """Write `line`; when `trace` is not None write it afterwards as an independent write."""

    @abstractmethod
    def warn(self, line: str) -> None: ...

    @abstractmethod
    def debug(self, line: str) -> None: ...

    @abstractmethod
    def verbose(self, line: str) -> None: ...


class StreamSink(BaseSink):
    """
    Console sink.

    Routing:
      - LOG, DEBUG, VERBOSE -> stdout
      - ERROR (and its trace), WARN -> stderr

    Streams default to whatever sys.stdout / sys.stderr are at write time, so
    redirections done after construction (pytest capsys, contextlib.redirect_stdout)
    are honoured.
    """

    def __init__(self, stdout: TextIO | None = None, stderr: TextIO | None = None) -> None:
        self._stdout = stdout
        self._stderr = stderr

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    @staticmethod
    def _write(stream: TextIO, text: str) -> None:
        stream.write(text + "\n")
        stream.flush()

    def log(self, line: str) -> None:
        self._write(self.stdout, line)

    def error(self, line: str, trace: str | None = None) -> None:
        self._write(self.stderr, line)
        if trace is not None:
            self._write(self.stderr, trace)

    def warn(self, line: str) -> None:
        self._write(self.stderr, line)

    def debug(self, line: str) -> None:
        self._write(self.stdout, line)

    def verbose(self, line: str) -> None:
        self._write(self.stdout, line)


class LoggingSink(BaseSink):
    """
    Sink backed by a stdlib logger.

    Level mapping: LOG -> INFO, ERROR -> ERROR, WARN -> WARNING, DEBUG -> DEBUG,
    VERBOSE -> VERBOSE (15). Lines are passed as the record message with no args,
    so `%` characters in SQL or URLs are never interpolated.

    Creating a LoggingSink registers the VERBOSE level name. Handlers attached to
    the logger decide what happens on a failed write; the ones from
    builder.setup_logging() re-raise it.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger if logger is not None else logging.getLogger("logkit.output")
        register_verbose_level()

    def log(self, line: str) -> None:
        self.logger.info(line)

    def error(self, line: str, trace: str | None = None) -> None:
        self.logger.error(line)
        if trace is not None:
            self.logger.error(trace)

    def warn(self, line: str) -> None:
        self.logger.warning(line)

    def debug(self, line: str) -> None:
        self.logger.debug(line)

    def verbose(self, line: str) -> None:
        self.logger.log(VERBOSE_LEVEL, line)


__all__ = ["BaseSink", "StreamSink", "LoggingSink", "register_verbose_level"]
