from .base import LogFormattingError, InvalidRecordError, RecordSerializationError

__all__ = ["LogFormattingError", "InvalidRecordError", "RecordSerializationError"]
