"""
logkit: single-line, severity-tagged log formatting for API requests,
API responses, database queries and errors.

    from logkit import get_logging_service

    log = get_logging_service()
    log.log_api_request({"method": "POST", "url": "/users", "body": {"name": "John"}}, "UserController")
    # [LOG][UserController] [Method=POST] [URL=/users] [Body={"name":"John"}]
"""

from .constants import LogType, Severity, VERBOSE_LEVEL
from .exceptions import LogFormattingError, InvalidRecordError, RecordSerializationError
from .models import ApiRequestLog, ApiResponseLog, QueryLog, ErrorLog
from .core.logging import LoggingService, BaseSink, StreamSink, LoggingSink, setup_logging
from .core.dependencies import get_logging_service, reset_logging_service

__all__ = [
    "LogType",
    "Severity",
    "VERBOSE_LEVEL",
    "LogFormattingError",
    "InvalidRecordError",
    "RecordSerializationError",
    "ApiRequestLog",
    "ApiResponseLog",
    "QueryLog",
    "ErrorLog",
    "LoggingService",
    "BaseSink",
    "StreamSink",
    "LoggingSink",
    "setup_logging",
    "get_logging_service",
    "reset_logging_service",
]
