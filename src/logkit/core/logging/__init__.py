# src/logkit/core/logging/
# ├─ __init__.py            # public API: LoggingService, sinks, setup_logging (middleware is imported directly)
# ├─ service.py             # LoggingService: primitives + record operations
# ├─ formatters.py          # record -> `[Key=Value]` message, format_line, SeverityColorFormatter
# ├─ sinks.py               # BaseSink, StreamSink (stdout/stderr), LoggingSink (stdlib logger)
# ├─ builder.py             # make_dict_config(settings) + setup_logging(settings)
# ├─ handlers.py            # stdout/stderr handler factories for dictConfig
# ├─ filters.py             # MaxLevelFilter, redact_headers
# └─ middleware.py          # Starlette middleware logging request/response records


from .service import LoggingService
from .sinks import BaseSink, StreamSink, LoggingSink
from .builder import setup_logging, make_dict_config

__all__ = [
    "LoggingService",
    "BaseSink",
    "StreamSink",
    "LoggingSink",
    "setup_logging",
    "make_dict_config",
]
