# src/logkit/core/logging/service.py
"""
LoggingService: the single entry point application code talks to.

Primitive operations (log, error, warn, debug, verbose) compose a line with
format_line() and hand it to the sink. Specialized operations render a record
into a message first and then delegate to a primitive:

    log_api_request  -> log    (default context "API_REQUEST")
    log_api_response -> log    (default context "API_RESPONSE")
    log_query        -> log    (default context "QUERY")
    log_error        -> error  (default context "ERROR", record.stack_trace as trace)

The service holds no state besides its sink, so one instance can be shared by the
whole application (see logkit.core.dependencies.get_logging_service).
"""

from __future__ import annotations

from typing import Any, Mapping

from logkit.constants import LogType, Severity
from logkit.config.settings import Settings
from logkit.models.records import (
    ApiRequestLog,
    ApiResponseLog,
    ErrorLog,
    QueryLog,
    coerce_record,
)
from .builder import setup_logging
from .formatters import (
    format_api_request,
    format_api_response,
    format_error,
    format_line,
    format_query,
)
from .sinks import BaseSink, LoggingSink, StreamSink


class LoggingService:
    """
    Formats records and writes them to a sink.

    Args:
        sink: where lines are written. Defaults to a StreamSink (stdout/stderr).
    """

    def __init__(self, sink: BaseSink | None = None) -> None:
        self.sink = sink if sink is not None else StreamSink()

    @classmethod
    def from_settings(cls, settings: Settings) -> LoggingService:
        """
        Build a service whose sink follows settings.LOG_SINK.

        "logging" applies the stdlib logging configuration (builder.setup_logging)
        and returns a service writing to that logger; "console" uses a StreamSink.
        """
        if settings.LOG_SINK == "logging":
            return cls(LoggingSink(setup_logging(settings)))
        return cls(StreamSink())

    # -----------------------
    # Specialized operations
    # -----------------------
    def log_api_request(self, data: ApiRequestLog | Mapping[str, Any], context: str | None = None) -> None:
        """Log an incoming request: Method, URL, Body, Headers, UserAgent, IP."""
        self.log(format_api_request(data), context or LogType.API_REQUEST.value)

    def log_api_response(self, data: ApiResponseLog | Mapping[str, Any], context: str | None = None) -> None:
        """Log a response: Status, Duration, Body, ContentLength, Timestamp."""
        self.log(format_api_response(data), context or LogType.API_RESPONSE.value)

    def log_query(self, data: QueryLog | Mapping[str, Any], context: str | None = None) -> None:
        """Log a database statement: SQL, Params, Duration, Rows, Database, Table."""
        self.log(format_query(data), context or LogType.QUERY.value)

    def log_error(self, data: ErrorLog | Mapping[str, Any], context: str | None = None) -> None:
        """
        Log an error: Message, Exception, File, Line, UserId, RequestId.

        The record's stack trace is not part of the message; it is written
        unmodified as a second line right after it.
        """
        record = coerce_record(ErrorLog, data)
        self.error(format_error(record), record.stack_trace, context or LogType.ERROR.value)

    # -----------------------
    # Primitive operations
    # -----------------------
    def log(self, message: str, context: str | None = None) -> None:
        self.sink.log(format_line(Severity.LOG, message, context))

    def error(self, message: str, trace: str | None = None, context: str | None = None) -> None:
        self.sink.error(format_line(Severity.ERROR, message, context), trace)

    def warn(self, message: str, context: str | None = None) -> None:
        self.sink.warn(format_line(Severity.WARN, message, context))

    def debug(self, message: str, context: str | None = None) -> None:
        self.sink.debug(format_line(Severity.DEBUG, message, context))

    def verbose(self, message: str, context: str | None = None) -> None:
        self.sink.verbose(format_line(Severity.VERBOSE, message, context))


__all__ = ["LoggingService"]
