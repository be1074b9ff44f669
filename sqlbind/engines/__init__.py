"""
Engines: SQL (named-parameter statement builder).
"""

from sqlbind.engines.sql import SqlSession, compile_statement, parse_parameters

__all__ = [
    "SqlSession",
    "compile_statement",
    "parse_parameters",
]
