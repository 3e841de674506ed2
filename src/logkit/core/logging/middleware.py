# src/logkit/core/logging/middleware.py
"""
Request/response logging middleware for FastAPI / Starlette.

For every HTTP request the middleware writes two lines through a LoggingService:

  1. an API_REQUEST line before the application handles the request
     (method, path + query string, optional headers, user agent, client IP)
  2. an API_RESPONSE line once the application returned a response
     (status, elapsed milliseconds, content length, UTC timestamp)

Registration:
    app.add_middleware(ApiLoggingMiddleware)                      # shared service
    app.add_middleware(ApiLoggingMiddleware, service=my_service)  # explicit service

Headers are only logged when enabled (log_headers=True or LOG_REQUEST_HEADERS),
and credential-bearing ones are masked by redact_headers().

Bodies are not read: consuming the request stream here would hide it from the
route handler.

If the application raises, no response line is written and the exception
propagates unchanged (see logkit.api.error_handlers for logging it).
"""

import time
from datetime import datetime, timezone

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from logkit.config.settings import get_settings
from logkit.core.dependencies import get_logging_service
from logkit.models.records import ApiRequestLog, ApiResponseLog

from .filters import redact_headers
from .service import LoggingService


def build_request_record(request: Request, *, include_headers: bool = False) -> ApiRequestLog:
    """Extract an ApiRequestLog from a Starlette request."""
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"
    return ApiRequestLog(
        method=request.method,
        url=url,
        headers=redact_headers(request.headers) if include_headers else None,
        user_agent=request.headers.get("user-agent"),
        ip=request.client.host if request.client else None,
    )


def build_response_record(response: Response, started: float) -> ApiResponseLog:
    """Extract an ApiResponseLog from a response; `started` is a time.perf_counter() value."""
    content_length = response.headers.get("content-length")
    return ApiResponseLog(
        status=response.status_code,
        duration=round((time.perf_counter() - started) * 1000),
        content_length=int(content_length) if content_length is not None else None,
        timestamp=datetime.now(timezone.utc),
    )


class ApiLoggingMiddleware(BaseHTTPMiddleware):
    """
    Starlette / FastAPI middleware that logs each request and its response.

    Args:
        app: the ASGI application (passed by Starlette).
        service: LoggingService to write to. Defaults to get_logging_service().
        log_headers: include (redacted) request headers. Defaults to settings.LOG_REQUEST_HEADERS.
        context: context tag for both lines. Defaults to the record kinds
                 (API_REQUEST / API_RESPONSE).
    """

    def __init__(self, app, service: LoggingService | None = None, *,
                 log_headers: bool | None = None, context: str | None = None) -> None:
        super().__init__(app)
        self.service = service
        self.log_headers = log_headers
        self.context = context

    def get_service(self) -> LoggingService:
        return self.service if self.service is not None else get_logging_service()

    async def dispatch(self, request: Request, call_next):
        service = self.get_service()
        include_headers = (
            self.log_headers if self.log_headers is not None else get_settings().LOG_REQUEST_HEADERS
        )

        service.log_api_request(
            build_request_record(request, include_headers=include_headers), self.context
        )

        started = time.perf_counter()
        response = await call_next(request)

        service.log_api_response(build_response_record(response, started), self.context)
        return response


__all__ = ["ApiLoggingMiddleware", "build_request_record", "build_response_record"]
