"""
Native prepared statement over a DB-API connection.

DB-API has no portable "prepare" call, so a prepared statement here is the
compiled SQL text, its fixed placeholder count, and a cursor owned by the
statement for mutations. Drivers that cache server-side plans (psycopg,
trino) do so per cursor and SQL text, which re-executing the same text on the
same cursor allows. Each query gets its own fresh cursor so that a result set
can be iterated independently of the statement cursor.
"""

import logging
from typing import Any

from sqlbind.engines.sql.compiler import CompiledStatement
from sqlbind.engines.sql.executor import wrap_store_error
from sqlbind.exceptions import ResourceReleaseError, ShapeMismatchError

_log = logging.getLogger(__name__)


class PreparedStatement:
    """Compiled SQL bound to one connection. Its placeholder count never changes."""

    def __init__(self, connection: Any, compiled: CompiledStatement) -> None:
        self._connection = connection
        self.sql = compiled.sql
        self.placeholder_count = compiled.placeholder_count
        self._cursor: Any = None
        self.closed = False
        self.executions = 0

    def _check_values(self, values: tuple[Any, ...]) -> None:
        if self.closed:
            raise ResourceReleaseError("Prepared statement is closed")
        if len(values) != self.placeholder_count:
            raise ShapeMismatchError(self.placeholder_count, len(values))

    def matches(self, compiled: CompiledStatement) -> bool:
        """True if *compiled* can run on this statement without re-preparing."""
        return (
            not self.closed
            and compiled.sql == self.sql
            and compiled.placeholder_count == self.placeholder_count
        )

    def _run(self, cursor: Any, values: tuple[Any, ...]) -> None:
        # always pass the (possibly empty) tuple: format-style drivers only
        # collapse the doubled %% when parameters are given
        cursor.execute(self.sql, values)
        self.executions += 1

    def execute_update(self, values: tuple[Any, ...]) -> int:
        """Run as a mutation on the statement cursor and return the affected row count."""
        self._check_values(values)
        try:
            if self._cursor is None:
                self._cursor = self._connection.cursor()
            self._run(self._cursor, values)
        except Exception as e:
            raise wrap_store_error(e, self.sql) from e
        rowcount = self._cursor.rowcount
        return rowcount if rowcount is not None else 0

    def open_cursor(self, values: tuple[Any, ...]) -> Any:
        """Execute as a query on a new cursor and return that cursor (caller owns it)."""
        self._check_values(values)
        cursor = None
        try:
            cursor = self._connection.cursor()
            self._run(cursor, values)
        except Exception as e:
            if cursor is not None:
                try:
                    cursor.close()
                except Exception:
                    _log.debug("Closing failed query cursor raised", exc_info=True)
            raise wrap_store_error(e, self.sql) from e
        return cursor

    def close(self) -> None:
        """Close the statement cursor. Idempotent; the connection stays open."""
        if self.closed:
            return
        self.closed = True
        cursor, self._cursor = self._cursor, None
        if cursor is None:
            return
        try:
            cursor.close()
        except Exception as e:
            raise ResourceReleaseError(f"Closing the prepared statement failed: {e}") from e

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<PreparedStatement {state} placeholders={self.placeholder_count} sql={self.sql!r}>"
