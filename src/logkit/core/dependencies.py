"""
Shared LoggingService instance.

get_logging_service() builds the service from settings on first use and returns
the same instance afterwards, so it can be called from anywhere or injected
into FastAPI routes:

    @router.get("/users")
    def list_users(log: LoggingService = Depends(get_logging_service)):
        log.log("listing users", "UserController")

reset_logging_service() drops the cached instance (tests, or after the
environment changed); the next call builds a fresh one.
"""

from functools import lru_cache

from logkit.config.settings import get_settings
from logkit.core.logging.service import LoggingService


@lru_cache()
def get_logging_service() -> LoggingService:
    return LoggingService.from_settings(get_settings())


def reset_logging_service() -> None:
    get_logging_service.cache_clear()


__all__ = ["get_logging_service", "reset_logging_service"]
