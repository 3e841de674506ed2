"""
Record models: one pydantic model per loggable event kind.

Records are plain data. They are built by the caller right before a logging
call (either directly or from a mapping, see coerce_record) and discarded once
the line has been written.

Presence rule: a field whose value is None is absent and contributes no token.
Every other value, including 0, "" and empty containers, is rendered.
"""

from __future__ import annotations

import os
import traceback
from datetime import datetime
from typing import Any, ClassVar, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from logkit.constants import LogType
from logkit.exceptions.base import InvalidRecordError


class LogRecordModel(BaseModel):
    """Common configuration for the four record kinds."""

    LOG_TYPE: ClassVar[LogType]

    model_config = ConfigDict(
        # accept both `user_agent` and the JSON-style `userAgent`
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ApiRequestLog(LogRecordModel):
    """An incoming HTTP request."""

    LOG_TYPE: ClassVar[LogType] = LogType.API_REQUEST

    method: str
    url: str
    body: Any = None
    headers: dict[str, str] | None = None
    user_agent: str | None = None
    ip: str | None = None


class ApiResponseLog(LogRecordModel):
    """An outgoing HTTP response. `duration` is in milliseconds."""

    LOG_TYPE: ClassVar[LogType] = LogType.API_RESPONSE

    status: int
    duration: int
    body: Any = None
    content_length: int | None = None
    timestamp: datetime | None = None


class QueryLog(LogRecordModel):
    """A database statement. `rows` keeps 0 distinct from absent (None)."""

    LOG_TYPE: ClassVar[LogType] = LogType.QUERY

    sql: str
    params: list[Any] | None = None
    duration: int
    rows: int | None = None
    database: str | None = None
    table: str | None = None


class ErrorLog(LogRecordModel):
    """An application error. `stack_trace` is written on its own line, unmodified."""

    LOG_TYPE: ClassVar[LogType] = LogType.ERROR

    message: str
    exception: str | None = None
    stack_trace: str | None = None
    file_name: str | None = None
    line_number: int | None = None
    user_id: str | None = None
    request_id: str | None = None

    @classmethod
    def from_exception(cls, exc: BaseException, **fields: Any) -> ErrorLog:
        """
        Build an ErrorLog from a raised exception.

        Fills message, exception (class name), stack_trace (formatted traceback) and,
        when the exception carries a traceback, file_name/line_number of the innermost
        frame. Keyword arguments (user_id, request_id, ...) override the derived values.
        """
        data: dict[str, Any] = {
            "message": str(exc) or type(exc).__name__,
            "exception": type(exc).__name__,
            "stack_trace": "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            ).rstrip("\n"),
        }
        frames = traceback.extract_tb(exc.__traceback__)
        if frames:
            data["file_name"] = os.path.basename(frames[-1].filename)
            data["line_number"] = frames[-1].lineno
        data.update(fields)
        return coerce_record(cls, data)


RecordT = TypeVar("RecordT", bound=LogRecordModel)


def coerce_record(model: type[RecordT], data: RecordT | Mapping[str, Any]) -> RecordT:
    """
    Return `data` as an instance of `model`.

    Model instances pass through untouched; mappings are validated. Any validation
    failure (missing required field, None for a required field, wrong type) is
    raised as InvalidRecordError so callers see one error type for malformed input.
    """
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        fields = sorted(
            {".".join(str(part) for part in err["loc"]) for err in exc.errors() if err["loc"]}
        )
        raise InvalidRecordError(
            f"Malformed {model.LOG_TYPE.value} record", fields=fields
        ) from exc


__all__ = [
    "LogRecordModel",
    "ApiRequestLog",
    "ApiResponseLog",
    "QueryLog",
    "ErrorLog",
    "coerce_record",
]
