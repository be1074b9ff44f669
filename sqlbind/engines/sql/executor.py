"""
Translate driver failures into QueryExecutionError.

Every error raised by the DB-API driver during execute/query/fetch is logged
with driver-specific context and wrapped; the original exception is kept as
``__cause__``. Nothing is retried.
"""

import logging

import psycopg
import pymysql
from trino.exceptions import TrinoExternalError, TrinoUserError

from sqlbind.exceptions import QueryExecutionError, SqlBindError

_log = logging.getLogger(__name__)


def wrap_store_error(exc: BaseException, sql: str | None, *, action: str = "execution") -> SqlBindError:
    """
    Return the error to raise for *exc* (caller does ``raise ... from exc``).

    Errors that are already ours pass through unchanged.
    """
    if isinstance(exc, SqlBindError):
        return exc
    if isinstance(exc, psycopg.errors.QueryCanceled):
        _log.warning("SQL query timed out: %s", exc)
        return QueryExecutionError(
            "SQL query timed out (statement_timeout)", sql=sql, timed_out=True
        )
    if isinstance(exc, psycopg.Error):
        _log.error("PostgreSQL error: %s. SQL: %s", exc, sql, exc_info=True)
        return QueryExecutionError(f"SQL {action} failed: {exc}", sql=sql)
    if isinstance(exc, pymysql.err.ProgrammingError):
        _log.warning("MySQL programming error: %s", exc)
        return QueryExecutionError(f"SQL error: {exc}", sql=sql)
    if isinstance(exc, pymysql.Error):
        _log.error("MySQL error: %s. SQL: %s", exc, sql, exc_info=True)
        return QueryExecutionError(f"SQL {action} failed: {exc}", sql=sql)
    if isinstance(exc, (TrinoUserError, TrinoExternalError)):
        _log.error("Trino error: %s. SQL: %s", exc, sql, exc_info=True)
        return QueryExecutionError(f"SQL {action} failed: {exc}", sql=sql)
    if isinstance(exc, ConnectionError):
        _log.error("Connection error: %s", exc, exc_info=True)
        return QueryExecutionError(f"Database connection failed: {exc}", sql=sql)
    _log.error("SQL %s failed: %s. SQL: %s", action, exc, sql, exc_info=True)
    return QueryExecutionError(f"SQL {action} failed: {exc}", sql=sql)
