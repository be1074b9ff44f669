"""
SQL literal rendering for debug previews.

``debug_render()`` shows bound values inline instead of placeholders. These
helpers turn a Python value into the SQL literal a reader would expect:
strings single-quoted with ``'`` doubled, numbers bare, None -> NULL.

The output is for humans and logs only; it is never sent to the database.
"""

import json
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

# Single-quote escape for SQL strings
_SQL_QUOTE_ESCAPE = str.maketrans({"'": "''"})


def sql_string(value: Any) -> str:
    """
    Escape string for SQL. None -> 'NULL' (literal); otherwise single-quote escape.
    """
    if value is None:
        return "NULL"
    s = str(value).translate(_SQL_QUOTE_ESCAPE)
    return f"'{s}'"


def sql_bool(value: Any) -> str:
    """
    Format as SQL boolean. None -> 'NULL'.
    """
    if value is None:
        return "NULL"
    return "TRUE" if bool(value) else "FALSE"


def sql_date(value: Any) -> str:
    """
    Format as ISO date 'YYYY-MM-DD'. None -> 'NULL'.
    """
    if value is None:
        return "NULL"
    d = value
    if isinstance(d, datetime):
        d = d.date()
    if isinstance(d, date):
        return f"'{d.isoformat()}'"
    return sql_string(d)


def sql_datetime(value: Any) -> str:
    """
    Format as ISO datetime/time. None -> 'NULL'.
    """
    if value is None:
        return "NULL"
    if isinstance(value, (datetime, time)):
        return f"'{value.isoformat()}'"
    if isinstance(value, date):
        return f"'{datetime.combine(value, datetime.min.time()).isoformat()}'"
    return sql_string(value)


def sql_bytes(value: bytes | bytearray | memoryview) -> str:
    """Hex blob literal, e.g. X'CAFE'."""
    return f"X'{bytes(value).hex().upper()}'"


def _json_literal(value: Any) -> str:
    """
    JSON: serialize to string and single-quote escape.
    """
    try:
        s = json.dumps(value, default=str)
    except (TypeError, ValueError):
        return sql_string(value)
    return sql_string(s)


def sql_literal(value: Any) -> str:
    """Render one bound value as an inline SQL literal.

    * ``None`` -> ``NULL``.
    * ``bool`` -> ``TRUE`` / ``FALSE``.
    * ``int`` / ``float`` / ``Decimal`` -> str (bare numeric literal).
    * ``datetime`` / ``time`` / ``date`` -> quoted ISO text.
    * ``bytes`` -> ``X'..'`` hex literal.
    * ``dict`` -> JSON-serialised + quoted.
    * Everything else -> ``sql_string()`` (single-quote + escape).
    """
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return sql_bool(value)
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, (datetime, time)):
        return sql_datetime(value)
    if isinstance(value, date):
        return sql_date(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return sql_bytes(value)
    if isinstance(value, dict):
        return _json_literal(value)
    return sql_string(value)
