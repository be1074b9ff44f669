"""
sqlbind: named-parameter SQL templates over any DB-API 2.0 connection.
"""

from sqlbind.engines.sql import ResultSequence, SessionState, SqlSession
from sqlbind.exceptions import (
    MappingError,
    MissingParameterError,
    QueryExecutionError,
    ResourceReleaseError,
    ResultClosedError,
    ShapeMismatchError,
    SqlBindError,
    TemplateNotSetError,
)

__all__ = [
    "SqlSession",
    "SessionState",
    "ResultSequence",
    "SqlBindError",
    "MissingParameterError",
    "ShapeMismatchError",
    "ResourceReleaseError",
    "QueryExecutionError",
    "MappingError",
    "ResultClosedError",
    "TemplateNotSetError",
]
