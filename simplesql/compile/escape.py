"""Literal and identifier escaping for the backtick / single-quote dialect."""

from __future__ import annotations

import re

_ESCAPE_RE = re.compile(r"[\0\b\t\n\r\x1a\"'\\]")

#: Characters that must be backslash-escaped inside a quoted literal.
ESCAPE_MAP: dict[str, str] = {
    "\0": "\\0",
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
    "\x1a": "\\Z",
    '"': '\\"',
    "'": "\\'",
    "\\": "\\\\",
}


def sql_escape(value: str) -> str:
    """Backslash-escape control and quote characters in ``value``.

    Apply exactly once per literal; the result is meant to be embedded
    between single quotes (or backticks, for names).

    Args:
        value: The raw string.  Non-strings must be coerced by the caller.

    Returns:
        The escaped string, or ``value`` itself when nothing needs escaping.
    """
    if _ESCAPE_RE.search(value) is None:
        return value
    return _ESCAPE_RE.sub(lambda m: ESCAPE_MAP[m.group(0)], value)


def quote_literal(value: str) -> str:
    """Return ``value`` as a single-quoted, escaped SQL string literal."""
    return f"'{sql_escape(value)}'"


def quote_name(name: str) -> str:
    """Return ``name`` wrapped in backticks."""
    return f"`{sql_escape(name)}`"
