"""
Statement compiler: template + bindings -> final SQL text + ordered values.

Two modes:

- EXECUTE: every marker becomes driver placeholder(s) and its value(s) are
  appended to the value list. Unbound markers raise MissingParameterError
  naming all of them.
- DEBUG: every bound marker is rendered inline as a SQL literal (list bindings
  comma-separated); unbound markers stay as ``:name``. Used for previews and
  logs, never executed.

The result is deterministic for a given (template, bindings, paramstyle).
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlbind.engines.sql.bindings import BindingStore, ValueList
from sqlbind.engines.sql.filters import sql_literal
from sqlbind.engines.sql.parser import Marker, parse_markers
from sqlbind.exceptions import MissingParameterError

_log = logging.getLogger(__name__)

# DB-API 2.0 paramstyles that can express positional placeholders.
SUPPORTED_PARAMSTYLES = ("qmark", "format", "pyformat", "numeric")


class CompileMode(str, Enum):
    EXECUTE = "execute"
    DEBUG = "debug"


@dataclass(frozen=True)
class CompiledStatement:
    """Final SQL text plus the ordered value list (empty in DEBUG mode)."""

    sql: str
    values: tuple[Any, ...]
    placeholder_count: int


def _placeholder(paramstyle: str, position: int) -> str:
    """Placeholder text for the 1-based ``position``."""
    if paramstyle == "qmark":
        return "?"
    if paramstyle in ("format", "pyformat"):
        return "%s"
    if paramstyle == "numeric":
        return f":{position}"
    raise ValueError(
        f"Unsupported paramstyle: {paramstyle!r} (supported: {', '.join(SUPPORTED_PARAMSTYLES)})"
    )


def compile_statement(
    template: str,
    bindings: BindingStore,
    mode: CompileMode = CompileMode.EXECUTE,
    *,
    paramstyle: str = "qmark",
    markers: list[Marker] | None = None,
) -> CompiledStatement:
    """
    Replace markers in *template* using *bindings*.

    - markers: pre-parsed occurrences of *template* (parsed here when None).
    - paramstyle: the driver's DB-API paramstyle; only used in EXECUTE mode.
      For ``format``/``pyformat`` a literal ``%`` in the template is doubled.
    """
    if paramstyle not in SUPPORTED_PARAMSTYLES:
        raise ValueError(
            f"Unsupported paramstyle: {paramstyle!r} (supported: {', '.join(SUPPORTED_PARAMSTYLES)})"
        )
    execute = mode == CompileMode.EXECUTE
    escape_percent = execute and paramstyle in ("format", "pyformat")
    if markers is None:
        markers = parse_markers(template)

    parts: list[str] = []
    values: list[Any] = []
    missing: set[str] = set()
    pos = 0

    def _text(chunk: str) -> None:
        parts.append(chunk.replace("%", "%%") if escape_percent else chunk)

    for marker in markers:
        _text(template[pos : marker.start])
        pos = marker.end
        binding = bindings.get(marker.name)
        if binding is None:
            missing.add(marker.name)
            _text(template[marker.start : marker.end])
            continue
        items = binding.values
        if execute:
            rendered = []
            for value in items:
                values.append(value)
                rendered.append(_placeholder(paramstyle, len(values)))
            parts.append(",".join(rendered))
        else:
            parts.append(",".join(sql_literal(v) for v in items))
        if isinstance(binding, ValueList):
            _log.debug("Expanded list parameter %r to %d value(s)", marker.name, len(items))

    _text(template[pos:])

    if execute and missing:
        raise MissingParameterError(missing, template)

    return CompiledStatement(sql="".join(parts), values=tuple(values), placeholder_count=len(values))


def render_debug(template: str, bindings: BindingStore, *, markers: list[Marker] | None = None) -> str:
    """SQL with bound values inlined as literals and unbound markers left as ``:name``."""
    return compile_statement(template, bindings, CompileMode.DEBUG, markers=markers).sql
