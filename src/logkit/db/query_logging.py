# src/logkit/db/query_logging.py
"""
SQLAlchemy engine hooks that write one QUERY line per executed statement.

Usage:
    engine = create_engine(settings.DATABASE_URL)
    query_logger = install_query_logging(engine, database="app")
    ...
    remove_query_logging(query_logger)   # e.g. at shutdown or in test teardown

Works for sync engines and for the sync engine behind an AsyncEngine
(pass `async_engine.sync_engine`).

Per statement the record carries:
  - sql: the statement as sent to the DBAPI (driver placeholders, e.g. `?`)
  - params: bound parameters, when include_params is on and the statement has any
    (binary values are written as "0x" + hex)
  - duration: milliseconds between before_cursor_execute and after_cursor_execute
  - rows: cursor.rowcount when the driver reports one (SQLite reports -1 for SELECT)
  - database: explicit name, or the database from the engine URL
  - table: first table named after FROM / INTO / UPDATE / TABLE, if any

Be cautious with params in production: they may contain personal data
(LOG_SQL_PARAMS=false turns them off).
"""

from __future__ import annotations

import re
import time
from typing import Any, Mapping

from sqlalchemy import event
from sqlalchemy.engine import Engine

from logkit.config.settings import get_settings
from logkit.core.dependencies import get_logging_service
from logkit.core.logging.service import LoggingService
from logkit.models.records import QueryLog

# conn.info key holding start times keyed by id(cursor); cleared by after_cursor_execute or handle_error
_START_TIMES_KEY = "logkit_query_start_times"

_TABLE_PATTERN = re.compile(
    r"\b(?:FROM|INTO|UPDATE|TABLE(?:\s+IF\s+(?:NOT\s+)?EXISTS)?)\s+([`\"\[]?[\w.]+[`\"\]]?)",
    re.IGNORECASE,
)


def guess_table(statement: str) -> str | None:
    """Best-effort primary table name of `statement` (quotes stripped), or None."""
    match = _TABLE_PATTERN.search(statement)
    if match is None:
        return None
    return match.group(1).strip('`"[]')


def as_param_list(parameters: Any) -> list[Any] | None:
    """
    Normalize DBAPI parameters into an ordered list.

    - positional (tuple/list) -> list of values
    - named (mapping)         -> one-element list holding the mapping
    - executemany batches     -> list of per-row parameter sets
    - binary values           -> "0x" + hex (see loggable_param)
    - nothing bound           -> None
    """
    if not parameters:
        return None
    if isinstance(parameters, Mapping):
        return [loggable_param(parameters)]
    return [loggable_param(value) for value in parameters]


def loggable_param(value: Any) -> Any:
    """
    Give DBAPI-native values without a JSON form a readable one.

    bytes, bytearray and memoryview (BLOB parameters) become "0x" + hex digits.
    Mappings, lists and tuples are converted item by item.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return "0x" + bytes(value).hex()
    if isinstance(value, Mapping):
        return {key: loggable_param(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return type(value)(loggable_param(item) for item in value)
    return value


class QueryLogger:
    """
    Engine event listeners writing QueryLog records to a LoggingService.

    A statement that raises never reaches after_cursor_execute; handle_error
    drops its start time instead, so pooled connections do not accumulate them.

    Args:
        service: target service. Defaults to get_logging_service() at log time.
        database: database name for the Database token. Defaults to engine.url.database.
        include_params: log bound parameters. Defaults to settings.LOG_SQL_PARAMS.
        detect_table: fill the Table token with guess_table().
        context: context tag. Defaults to "QUERY".
    """

    def __init__(self, service: LoggingService | None = None, *, database: str | None = None,
                 include_params: bool | None = None, detect_table: bool = True,
                 context: str | None = None) -> None:
        self.service = service
        self.database = database
        self.include_params = (
            include_params if include_params is not None else get_settings().LOG_SQL_PARAMS
        )
        self.detect_table = detect_table
        self.context = context
        self.engines: list[Engine] = []
        # keep one bound-method object per hook so event.remove() sees the same callable
        self._before = self.before_cursor_execute
        self._after = self.after_cursor_execute
        self._on_error = self.handle_error

    def attach(self, engine: Engine) -> None:
        event.listen(engine, "before_cursor_execute", self._before)
        event.listen(engine, "after_cursor_execute", self._after)
        event.listen(engine, "handle_error", self._on_error)
        self.engines.append(engine)

    def detach(self) -> None:
        for engine in self.engines:
            event.remove(engine, "before_cursor_execute", self._before)
            event.remove(engine, "after_cursor_execute", self._after)
            event.remove(engine, "handle_error", self._on_error)
        self.engines.clear()

    def before_cursor_execute(self, conn, cursor, statement, parameters, execution_context, executemany):
        conn.info.setdefault(_START_TIMES_KEY, {})[id(cursor)] = time.perf_counter()

    def after_cursor_execute(self, conn, cursor, statement, parameters, execution_context, executemany):
        started = conn.info[_START_TIMES_KEY].pop(id(cursor))
        rowcount = getattr(cursor, "rowcount", None)

        record = QueryLog(
            sql=statement,
            params=as_param_list(parameters) if self.include_params else None,
            duration=round((time.perf_counter() - started) * 1000),
            rows=rowcount if rowcount is not None and rowcount >= 0 else None,
            database=self.database if self.database is not None else conn.engine.url.database,
            table=guess_table(statement) if self.detect_table else None,
        )
        service = self.service if self.service is not None else get_logging_service()
        service.log_query(record, self.context)

    def handle_error(self, exception_context):
        conn = exception_context.connection
        cursor = exception_context.cursor
        if conn is None or cursor is None:
            return
        start_times = conn.info.get(_START_TIMES_KEY)
        if start_times:
            start_times.pop(id(cursor), None)


def install_query_logging(engine: Engine, service: LoggingService | None = None, **options: Any) -> QueryLogger:
    """Create a QueryLogger with `options`, attach it to `engine` and return it."""
    query_logger = QueryLogger(service, **options)
    query_logger.attach(engine)
    return query_logger


def remove_query_logging(query_logger: QueryLogger) -> None:
    query_logger.detach()


__all__ = [
    "QueryLogger",
    "install_query_logging",
    "remove_query_logging",
    "guess_table",
    "as_param_list",
    "loggable_param",
]
