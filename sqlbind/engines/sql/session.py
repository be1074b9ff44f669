"""
SqlSession: named-parameter SQL over one caller-owned DB-API connection.

Usage::

    with SqlSession(conn) as s:
        s.sql("INSERT INTO t (id, code) VALUES (:id, :code)")
        s.bind("id", 1).bind("code", "T").execute()
        s.bind("id", 2).execute()  # reuses the prepared statement

        rows = s.sql("SELECT id FROM t WHERE code IN (:codes)") \\
                .bind("codes", "T", "V") \\
                .query(lambda row: row[0]) \\
                .to_list()

States::

    IDLE --sql()--> TEMPLATE_SET --execute()/query()--> COMPILED / QUERY_OPEN
    release() returns to TEMPLATE_SET; sql() always returns to TEMPLATE_SET.

A session is not thread-safe: all calls on one instance must be sequential.
There is no internal locking, no retry and no timeout handling (timeouts
belong to the connection). The session owns the prepared statement and the
open result cursor; it never closes the connection.
"""

import logging
import sys
from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar

from sqlbind.core.config import settings
from sqlbind.engines.sql.bindings import BindingStore
from sqlbind.engines.sql.compiler import (
    SUPPORTED_PARAMSTYLES,
    CompiledStatement,
    CompileMode,
    compile_statement,
    render_debug,
)
from sqlbind.engines.sql.parser import Marker, parse_markers
from sqlbind.engines.sql.results import ResultSequence
from sqlbind.engines.sql.statement import PreparedStatement
from sqlbind.exceptions import ResourceReleaseError, SqlBindError, TemplateNotSetError

_log = logging.getLogger(__name__)

T = TypeVar("T")


class SessionState(str, Enum):
    IDLE = "idle"
    TEMPLATE_SET = "template_set"
    COMPILED = "compiled"
    QUERY_OPEN = "query_open"


def detect_paramstyle(connection: Any) -> str | None:
    """DB-API ``paramstyle`` of the driver module that created *connection*, if any."""
    module_name = type(connection).__module__
    while module_name:
        module = sys.modules.get(module_name)
        style = getattr(module, "paramstyle", None)
        if isinstance(style, str):
            # positional :1 works wherever :name does (oracledb)
            return "numeric" if style == "named" else style
        module_name = module_name.rpartition(".")[0]
    return None


class SqlSession:
    """Statement builder bound to one open connection. See module docstring."""

    def __init__(
        self,
        connection: Any,
        *,
        paramstyle: str | None = None,
        fetch_size: int | None = None,
    ) -> None:
        if connection is None:
            raise ValueError("connection is required")
        style = paramstyle or detect_paramstyle(connection) or settings.SQL_DEFAULT_PARAMSTYLE
        if style not in SUPPORTED_PARAMSTYLES:
            raise ValueError(f"Unsupported paramstyle: {style!r}")
        self._connection = connection
        self._paramstyle = style
        self._fetch_size = fetch_size or settings.SQL_FETCH_SIZE
        self._template: str | None = None
        self._markers: list[Marker] = []
        self._bindings = BindingStore()
        self._statement: PreparedStatement | None = None
        self._result: ResultSequence[Any] | None = None

    # --- Properties -----------------------------------------------------------------

    @property
    def connection(self) -> Any:
        return self._connection

    @property
    def template(self) -> str | None:
        return self._template

    @property
    def paramstyle(self) -> str:
        return self._paramstyle

    @property
    def bindings(self) -> BindingStore:
        return self._bindings

    @property
    def statement(self) -> PreparedStatement | None:
        """The cached prepared statement (None until the first execute/query)."""
        return self._statement

    @property
    def state(self) -> SessionState:
        if self._template is None:
            return SessionState.IDLE
        if self._result is not None and not self._result.closed:
            return SessionState.QUERY_OPEN
        if self._statement is not None:
            return SessionState.COMPILED
        return SessionState.TEMPLATE_SET

    # --- Template and bindings ------------------------------------------------------

    def sql(self, *templates: str) -> "SqlSession":
        """Set a new template (several parts are joined with newlines).

        Releases the prepared statement and open cursor and clears all bindings.
        """
        if not templates:
            raise ValueError("sql() needs at least one template string")
        text = templates[0] if len(templates) == 1 else "\n".join(templates)
        try:
            self.release()
        finally:
            self._bindings.clear()
            self._template = text
            self._markers = parse_markers(text)
        return self

    def bind(self, name: str, *values: Any) -> "SqlSession":
        """Bind one value, or several values (or one list/tuple) for an IN-list expansion."""
        self._bindings.bind(name, *values)
        return self

    # --- Execution ------------------------------------------------------------------

    def _require_template(self, operation: str) -> str:
        if self._template is None:
            raise TemplateNotSetError(operation)
        return self._template

    def _close_result(self) -> None:
        result, self._result = self._result, None
        if result is not None:
            result.supersede()

    def _prepare(self, operation: str) -> tuple[PreparedStatement, CompiledStatement]:
        """Compile the current template and reuse or (re)create the prepared statement."""
        template = self._require_template(operation)
        try:
            compiled = compile_statement(
                template,
                self._bindings,
                CompileMode.EXECUTE,
                paramstyle=self._paramstyle,
                markers=self._markers,
            )
        except SqlBindError:
            try:
                self.release()
            except ResourceReleaseError:
                _log.warning("Releasing after a failed compile raised", exc_info=True)
            raise

        statement = self._statement
        if statement is not None and statement.matches(compiled):
            return statement, compiled
        if statement is not None:
            _log.debug(
                "Statement shape changed (%d -> %d placeholders), preparing again",
                statement.placeholder_count,
                compiled.placeholder_count,
            )
            self._statement = None
            statement.close()
        _log.debug("Prepared SQL: %s", compiled.sql)
        self._statement = PreparedStatement(self._connection, compiled)
        return self._statement, compiled

    def _log_statement(self) -> None:
        if settings.SQL_LOG_STATEMENTS:
            _log.debug("Executing SQL: %s", self.debug_render())

    def execute(self) -> int:
        """Run the template as a mutation and return the affected row count."""
        self._require_template("execute")
        self._close_result()
        statement, compiled = self._prepare("execute")
        self._log_statement()
        rowcount = statement.execute_update(compiled.values)
        _log.debug("Statement affected %s row(s)", rowcount)
        return rowcount

    def query(self, mapper: Callable[[Any], T]) -> ResultSequence[T]:
        """Run the template as a query; rows are mapped lazily as the result is iterated.

        Any previous result sequence of this session is closed first. A sequence
        that is never consumed keeps its cursor open until it is exhausted,
        closed, superseded by the next ``execute``/``query``, or the session is
        released; use ``with session.query(mapper) as rows:`` to bound it.
        """
        self._require_template("query")
        self._close_result()
        statement, compiled = self._prepare("query")
        self._log_statement()
        cursor = statement.open_cursor(compiled.values)
        result: ResultSequence[T] = ResultSequence(
            cursor, mapper, fetch_size=self._fetch_size, sql=statement.sql
        )
        self._result = result
        return result

    def query_dicts(self) -> ResultSequence[dict[str, Any]]:
        """Query with rows mapped to ``{column: value}`` dicts."""
        columns: list[str] = []
        result = self.query(lambda row: dict(zip(columns, row, strict=True)))
        columns.extend(result.columns)
        return result

    def for_each(self, consumer: Callable[[Any], Any]) -> None:
        """Run the query and pass every raw row to *consumer*."""
        for _ in self.query(consumer):
            pass

    # --- Resources ------------------------------------------------------------------

    def release(self) -> None:
        """Close the open cursor and the prepared statement. Idempotent.

        Template and bindings are kept; the connection is never closed. If closing
        fails, the resources are dropped anyway and ResourceReleaseError is raised.
        """
        result, self._result = self._result, None
        statement, self._statement = self._statement, None
        errors: list[ResourceReleaseError] = []
        for resource in (result, statement):
            if resource is None:
                continue
            try:
                if isinstance(resource, ResultSequence):
                    resource.supersede()
                else:
                    resource.close()
            except ResourceReleaseError as e:
                _log.warning("Releasing %r failed: %s", resource, e)
                errors.append(e)
        if errors:
            raise errors[0]

    def close(self) -> None:
        """Alias of ``release()``; the connection stays open."""
        self.release()

    def __enter__(self) -> "SqlSession":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.release()

    # --- Debug ----------------------------------------------------------------------

    def debug_render(self) -> str:
        """Template with bound values inlined as literals; never touches the database."""
        template = self._require_template("debug_render")
        return render_debug(template, self._bindings, markers=self._markers)

    def __str__(self) -> str:
        if self._template is None:
            return ""
        return self.debug_render()

    def __repr__(self) -> str:
        return f"<SqlSession state={self.state.value} paramstyle={self._paramstyle}>"
