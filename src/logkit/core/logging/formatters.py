# src/logkit/core/logging/formatters.py

"""
Rendering of records into single-line log messages.

Two layers live here:

  - Record rendering (pure functions): format_api_request, format_api_response,
    format_query and format_error turn a record into a message made of
    `[Key=Value]` tokens joined by single spaces, in a fixed field order per kind.
    format_line then prepends the severity tag and the optional context tag.

  - SeverityColorFormatter: a logging.Formatter used when lines are routed
    through the stdlib logging backend (LOG_SINK=logging). Lines arrive fully
    rendered, so it only adds an optional timestamp and ANSI colour.

Value rendering rules:
  - body, headers and params are rendered as compact JSON (no spaces after
    separators, key order as inserted, non-ASCII kept as is).
  - durations render as `<int>ms`.
  - timestamps render as ISO-8601 in UTC with millisecond precision and a `Z`.
  - a field whose value is None is skipped; any other value renders, so 0,
    "" and [] are never dropped.

Formatting never substitutes placeholders: a value that has no JSON form
raises RecordSerializationError.
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, time, timezone
from decimal import Decimal
from enum import Enum
from logging import LogRecord
from typing import Any, Callable, Iterable, Mapping
from uuid import UUID

from pydantic import BaseModel

from logkit.constants import Severity
from logkit.exceptions.base import RecordSerializationError
from logkit.models.records import (
    ApiRequestLog,
    ApiResponseLog,
    ErrorLog,
    LogRecordModel,
    QueryLog,
    coerce_record,
)

# (label, attribute, renderer) in output order.
FieldSpec = tuple[str, str, Callable[[Any], str]]


# -----------------------
# Value renderers
# -----------------------
def format_timestamp(value: datetime) -> str:
    """Return `value` as `YYYY-MM-DDTHH:MM:SS.mmmZ`. Naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    return utc.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"


def format_duration(value: int) -> str:
    return f"{value}ms"


def _json_default(value: Any) -> Any:
    # Called by json.dumps for objects it cannot encode natively.
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def serialize_value(value: Any, *, field: str | None = None) -> str:
    """
    Serialize a structured value (body, headers, params) to compact JSON.

    Raises:
        RecordSerializationError: circular references, NaN/Infinity and objects
        with no JSON representation.
    """
    try:
        return json.dumps(
            value,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
            default=_json_default,
        )
    except (TypeError, ValueError, RecursionError) as exc:
        raise RecordSerializationError(
            f"Cannot serialize value: {exc}",
            fields=[field] if field else None,
        ) from exc


def _text(value: Any) -> str:
    return str(value)


# -----------------------
# Field order per record kind
# -----------------------
REQUEST_FIELDS: tuple[FieldSpec, ...] = (
    ("Method", "method", _text),
    ("URL", "url", _text),
    ("Body", "body", serialize_value),
    ("Headers", "headers", serialize_value),
    ("UserAgent", "user_agent", _text),
    ("IP", "ip", _text),
)

RESPONSE_FIELDS: tuple[FieldSpec, ...] = (
    ("Status", "status", _text),
    ("Duration", "duration", format_duration),
    ("Body", "body", serialize_value),
    ("ContentLength", "content_length", _text),
    ("Timestamp", "timestamp", format_timestamp),
)

QUERY_FIELDS: tuple[FieldSpec, ...] = (
    ("SQL", "sql", _text),
    ("Params", "params", serialize_value),
    ("Duration", "duration", format_duration),
    ("Rows", "rows", _text),
    ("Database", "database", _text),
    ("Table", "table", _text),
)

ERROR_FIELDS: tuple[FieldSpec, ...] = (
    ("Message", "message", _text),
    ("Exception", "exception", _text),
    ("File", "file_name", _text),
    ("Line", "line_number", _text),
    ("UserId", "user_id", _text),
    ("RequestId", "request_id", _text),
)


def render_fields(record: LogRecordModel, fields: Iterable[FieldSpec]) -> str:
    """Render every present field of `record` as `[Label=value]`, space separated."""
    parts = []
    for label, attr, render in fields:
        value = getattr(record, attr)
        if value is None:
            continue
        if render is serialize_value:
            rendered = serialize_value(value, field=attr)
        else:
            rendered = render(value)
        parts.append(f"[{label}={rendered}]")
    return " ".join(parts)


def format_api_request(data: ApiRequestLog | Mapping[str, Any]) -> str:
    return render_fields(coerce_record(ApiRequestLog, data), REQUEST_FIELDS)


def format_api_response(data: ApiResponseLog | Mapping[str, Any]) -> str:
    return render_fields(coerce_record(ApiResponseLog, data), RESPONSE_FIELDS)


def format_query(data: QueryLog | Mapping[str, Any]) -> str:
    return render_fields(coerce_record(QueryLog, data), QUERY_FIELDS)


def format_error(data: ErrorLog | Mapping[str, Any]) -> str:
    return render_fields(coerce_record(ErrorLog, data), ERROR_FIELDS)


def format_line(severity: Severity, message: str, context: str | None = None) -> str:
    """
    Compose the final line: `[SEVERITY]`, then `[context]` when context is non-empty,
    then exactly one space and the message.

    >>> format_line(Severity.LOG, "hello")
    '[LOG] hello'
    >>> format_line(Severity.WARN, "slow", "UserController")
    '[WARN][UserController] slow'
    """
    # .value: f-string formatting of str-mixin enums differs across Python versions
    context_tag = f"[{context}]" if context else ""
    return f"[{severity.value}]{context_tag} {message}"


# -----------------------
# stdlib logging formatter
# -----------------------
class SeverityColorFormatter(logging.Formatter):
    """
    Formatter for lines that are already fully rendered by logkit.

    Behavior:
      - The record message is emitted unchanged (no level name / logger name added,
        the line already starts with its severity tag).
      - timestamps=True prefixes the line with `asctime` and a space.
      - color=True wraps the leading `[SEVERITY]` tag in an ANSI colour. Intended for
        development terminals only; leave it off when logs are collected by a machine.
      - The error trace is a separate record and is never coloured.
    """

    COLOR_CODES = {
        "DEBUG": "\033[36m",      # cyan
        "VERBOSE": "\033[35m",    # magenta
        "LOG": "\033[32m",        # green
        "WARN": "\033[33m",       # yellow
        "ERROR": "\033[31m",      # red
        "RESET": "\033[0m",
    }

    def __init__(self, *, color: bool = False, timestamps: bool = False,
                 datefmt: str | None = None) -> None:
        super().__init__(datefmt=datefmt)
        self.color = color
        self.timestamps = timestamps

    def colorize(self, line: str) -> str:
        """Wrap the leading severity tag of `line` in its colour, if it has one."""
        if not line.startswith("["):
            return line
        end = line.find("]")
        tag = line[1:end] if end > 0 else ""
        code = self.COLOR_CODES.get(tag)
        if code is None:
            return line
        return f"{code}{line[:end + 1]}{self.COLOR_CODES['RESET']}{line[end + 1:]}"

    def format(self, record: LogRecord) -> str:
        line = record.getMessage()
        if self.color:
            line = self.colorize(line)
        if self.timestamps:
            line = f"{self.formatTime(record, self.datefmt)} {line}"
        return line


__all__ = [
    "format_timestamp",
    "format_duration",
    "serialize_value",
    "render_fields",
    "format_api_request",
    "format_api_response",
    "format_query",
    "format_error",
    "format_line",
    "SeverityColorFormatter",
    "REQUEST_FIELDS",
    "RESPONSE_FIELDS",
    "QUERY_FIELDS",
    "ERROR_FIELDS",
]
