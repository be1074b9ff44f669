"""
Lazy, forward-only, single-pass view over the rows of one query cursor.

Each ``next()`` pulls one row from the cursor and applies the caller's mapper.
Reaching the end closes the cursor. A sequence that was superseded by its
session (new query, new template, execute or release) raises
ResultClosedError on the next pull instead of returning stale rows.
"""

import logging
from collections import deque
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from sqlbind.engines.sql.executor import wrap_store_error
from sqlbind.exceptions import MappingError, ResourceReleaseError, ResultClosedError

_log = logging.getLogger(__name__)

T = TypeVar("T")


def cursor_columns(cursor: Any) -> list[str]:
    """Column names from ``cursor.description``. Works for sqlite3, psycopg, pymysql and trino."""
    desc = cursor.description
    if not desc:
        return []
    return [d[0] for d in desc]


class ResultSequence(Generic[T]):
    """Iterator of mapped records bound to one open cursor."""

    def __init__(
        self,
        cursor: Any,
        mapper: Callable[[Any], T],
        *,
        fetch_size: int = 1,
        sql: str | None = None,
    ) -> None:
        self._cursor = cursor
        self._mapper = mapper
        self._fetch_size = max(1, fetch_size)
        self._sql = sql
        self._buffer: deque[Any] = deque()
        self._row_number = 0
        self._exhausted = False
        self._superseded = False
        self.columns = cursor_columns(cursor)

    @property
    def closed(self) -> bool:
        return self._cursor is None

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    @property
    def rows_read(self) -> int:
        return self._row_number

    def __iter__(self) -> "ResultSequence[T]":
        return self

    def _fetch(self) -> Any:
        if self._fetch_size == 1:
            return self._cursor.fetchone()
        if not self._buffer:
            self._buffer.extend(self._cursor.fetchmany(self._fetch_size))
        return self._buffer.popleft() if self._buffer else None

    def __next__(self) -> T:
        if self._superseded:
            raise ResultClosedError(
                "Result sequence was closed by a later query or release of its session"
            )
        if self._cursor is None:
            raise StopIteration
        try:
            row = self._fetch()
        except Exception as e:
            raise wrap_store_error(e, self._sql, action="fetch") from e
        if row is None:
            self._exhausted = True
            self.close()
            raise StopIteration
        self._row_number += 1
        try:
            return self._mapper(row)
        except Exception as e:
            raise MappingError(self._row_number, row, e) from e

    def close(self) -> None:
        """Close the cursor early. Idempotent; iteration stops afterwards."""
        cursor, self._cursor = self._cursor, None
        self._buffer.clear()
        if cursor is None:
            return
        try:
            cursor.close()
        except Exception as e:
            raise ResourceReleaseError(f"Closing the result cursor failed: {e}") from e
        _log.debug("Closed result cursor after %d row(s)", self._row_number)

    def supersede(self) -> None:
        """Close on behalf of the session; later pulls raise ResultClosedError."""
        if self._cursor is None:
            return
        self._superseded = True
        self.close()

    def to_list(self) -> list[T]:
        return list(self)

    def __enter__(self) -> "ResultSequence[T]":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
