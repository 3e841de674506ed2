"""
Custom exceptions raised while turning a record into a log line.
"""

from typing import Iterable


class LogFormattingError(Exception):
    """
    Base exception for record formatting errors.

    - message: human-friendly description of what went wrong
    - fields: optional list of record field names involved (e.g. ['method'])
    - error_code: canonical short code ('invalid_record', 'serialization_failed')

    Sink failures are NOT wrapped in this hierarchy; they propagate as raised by the sink.
    """

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.error_code = error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict describing the error.
        Shape:
            {
                "detail": "Malformed API_REQUEST record",
                "code": "invalid_record",     # optional
                "fields": ["method"],         # optional
            }
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload


class InvalidRecordError(LogFormattingError):
    """Raised when a record misses a required field or carries a value of the wrong type."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_record")


class RecordSerializationError(LogFormattingError):
    """Raised when a structured value (body, headers, params) has no JSON form."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="serialization_failed")


__all__ = [
    "LogFormattingError",
    "InvalidRecordError",
    "RecordSerializationError",
]
