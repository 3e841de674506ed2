from .query_logging import QueryLogger, install_query_logging, remove_query_logging

__all__ = ["QueryLogger", "install_query_logging", "remove_query_logging"]
