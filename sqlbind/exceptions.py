"""
Error kinds raised by the statement builder.

Every error is raised synchronously at the call that triggered it; nothing
is retried internally. All kinds derive from ``SqlBindError`` (a ValueError),
so callers that only care about "the SQL call failed" can catch one class.
"""

from typing import Any


class SqlBindError(ValueError):
    """Base class for all statement builder errors."""


class TemplateNotSetError(SqlBindError):
    """Raised when execute/query/debug_render is called before ``sql()``."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"No SQL template set; call sql() before {operation}()")


class MissingParameterError(SqlBindError):
    """
    Raised when compiling for execution and one or more markers have no binding.

    ``missing`` holds the complete set of unbound marker names, not just the first.
    """

    def __init__(self, missing: set[str] | frozenset[str], template: str | None = None) -> None:
        self.missing = frozenset(missing)
        self.template = template
        names = ", ".join(repr(n) for n in sorted(self.missing))
        super().__init__(f"Missing value of the parameter(s): {names}")


class ShapeMismatchError(SqlBindError):
    """Raised when a prepared statement receives a value list of the wrong length."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Prepared statement expects {expected} value(s), got {actual}"
        )


class ResourceReleaseError(SqlBindError):
    """
    Raised when closing a native statement or cursor fails.

    The session has already dropped the resource when this is raised; the
    failed resource is considered unusable and is not retried.
    """


class QueryExecutionError(SqlBindError):
    """Wraps any failure returned by the underlying store during execute/query/fetch."""

    def __init__(self, message: str, *, sql: str | None = None, timed_out: bool = False) -> None:
        self.sql = sql
        self.timed_out = timed_out
        super().__init__(message)


class MappingError(SqlBindError):
    """Wraps a failure raised by the caller's row mapper for one specific row."""

    def __init__(self, row_number: int, row: Any, cause: BaseException) -> None:
        self.row_number = row_number
        self.row = row
        super().__init__(f"Row mapping failed at row {row_number}: {cause}")


class ResultClosedError(SqlBindError):
    """Raised when pulling from a result sequence whose cursor was superseded or released."""
