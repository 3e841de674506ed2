from .records import (
    LogRecordModel,
    ApiRequestLog,
    ApiResponseLog,
    QueryLog,
    ErrorLog,
    coerce_record,
)

__all__ = [
    "LogRecordModel",
    "ApiRequestLog",
    "ApiResponseLog",
    "QueryLog",
    "ErrorLog",
    "coerce_record",
]
