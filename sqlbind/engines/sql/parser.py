"""
Scan a SQL template for ``:name`` markers.

A marker is ``:`` followed by one or more word characters (letters, digits,
underscore). The same name may appear any number of times.

The scanner is quote-aware: single-quoted (``'...'``), double-quoted
(``"..."``) and dollar-quoted (``$$...$$``) literals, ``--`` line comments and
``/* */`` block comments are copied through without looking for markers, and
``::`` (PostgreSQL cast) is never a marker. Inside quotes only a doubled quote
escapes the quote; a backslash is an ordinary character, as in standard SQL.
An unterminated literal or comment runs to the end of the template.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Marker:
    """One marker occurrence: ``template[start:end] == ":" + name``."""

    name: str
    start: int
    end: int
    index: int


def _is_word_char(ch: str) -> bool:
    return ch == "_" or ch.isalnum()


def _skip_quoted(sql: str, i: int) -> int:
    """Return the index just past the literal that starts at ``sql[i]``."""
    quote = sql[i]
    length = len(sql)
    i += 1
    while i < length:
        c = sql[i]
        if c == quote:
            # doubled quote is an escaped quote inside the literal
            if i + 1 < length and sql[i + 1] == quote:
                i += 2
                continue
            return i + 1
        i += 1
    return length


def parse_markers(template: str) -> list[Marker]:
    """
    Return marker occurrences in order of appearance (with duplicates if reused).

    >>> [m.name for m in parse_markers("WHERE a = :x OR b = :x AND c = :y")]
    ['x', 'x', 'y']
    """
    markers: list[Marker] = []
    i = 0
    length = len(template)

    while i < length:
        ch = template[i]

        if ch in ("'", '"'):
            i = _skip_quoted(template, i)
            continue

        if ch == "$" and i + 1 < length and template[i + 1] == "$":
            end = template.find("$$", i + 2)
            i = length if end == -1 else end + 2
            continue

        if ch == "-" and i + 1 < length and template[i + 1] == "-":
            end = template.find("\n", i)
            i = length if end == -1 else end + 1
            continue

        if ch == "/" and i + 1 < length and template[i + 1] == "*":
            end = template.find("*/", i + 2)
            i = length if end == -1 else end + 2
            continue

        if ch == ":":
            if i + 1 < length and template[i + 1] == ":":
                # cast operator; skip both colons and the type name after it
                i += 2
                while i < length and _is_word_char(template[i]):
                    i += 1
                continue
            j = i + 1
            while j < length and _is_word_char(template[j]):
                j += 1
            if j > i + 1:
                markers.append(Marker(template[i + 1 : j], i, j, len(markers)))
                i = j
                continue

        i += 1

    return markers


def parse_parameters(template: str) -> list[str]:
    """Distinct marker names in first-occurrence order."""
    seen: dict[str, None] = {}
    for marker in parse_markers(template):
        seen.setdefault(marker.name, None)
    return list(seen)
