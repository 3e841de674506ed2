# src/logkit/api/error_handlers.py
"""
FastAPI exception handler that writes unhandled exceptions as ERROR records.

How to use:
    - Call register_exception_handlers(app) in your app factory.
    - Any exception not handled by a more specific handler is logged through
      LoggingService.log_error (message, exception class, file/line of the
      innermost frame, X-Request-ID header when present) followed by the full
      traceback on its own line, and the client receives a generic 500 body.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from logkit.core.dependencies import get_logging_service
from logkit.core.logging.service import LoggingService
from logkit.models.records import ErrorLog


def make_exception_logging_handler(service: LoggingService | None = None, context: str | None = None):
    """
    Return an async exception handler bound to `service`.

    When `service` is None the shared instance from get_logging_service() is used
    at the time the exception is handled.
    """

    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """
        500 Internal Server Error.
        Payload: {"detail": "Internal Server Error"}; no exception details leak to the client.
        """
        target = service if service is not None else get_logging_service()
        record = ErrorLog.from_exception(exc, request_id=request.headers.get("x-request-id"))
        target.log_error(record, context)
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})

    return unhandled_exception_handler


# Helper to register the handler on an app (call this from your app factory)
def register_exception_handlers(app: FastAPI, service: LoggingService | None = None,
                                context: str | None = None) -> None:
    app.add_exception_handler(Exception, make_exception_logging_handler(service, context))


__all__ = ["make_exception_logging_handler", "register_exception_handlers"]
