"""
Named-parameter SQL engine: ``:name`` markers, bindings, prepared statement
reuse and lazy result sequences over a DB-API connection.

Exports: SqlSession, ResultSequence, compile_statement, parse_markers, parse_parameters.
"""

from sqlbind.engines.sql.bindings import BindingStore, Scalar, ValueList
from sqlbind.engines.sql.compiler import CompiledStatement, CompileMode, compile_statement, render_debug
from sqlbind.engines.sql.parser import Marker, parse_markers, parse_parameters
from sqlbind.engines.sql.results import ResultSequence
from sqlbind.engines.sql.session import SessionState, SqlSession
from sqlbind.engines.sql.statement import PreparedStatement

__all__ = [
    "SqlSession",
    "SessionState",
    "ResultSequence",
    "PreparedStatement",
    "BindingStore",
    "Scalar",
    "ValueList",
    "CompiledStatement",
    "CompileMode",
    "compile_statement",
    "render_debug",
    "Marker",
    "parse_markers",
    "parse_parameters",
]
