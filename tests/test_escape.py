"""Unit tests for literal escaping."""

from __future__ import annotations

import pytest

from simplesql.compile.escape import ESCAPE_MAP, quote_literal, quote_name, sql_escape

_UNESCAPE = {
    "0": "\0",
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "r": "\r",
    "Z": "\x1a",
    '"': '"',
    "'": "'",
    "\\": "\\",
}


def _parse_literal(literal: str) -> str:
    """Decode a single-quoted, backslash-escaped SQL string literal."""
    assert literal.startswith("'") and literal.endswith("'")
    body = literal[1:-1]
    out: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\":
            out.append(_UNESCAPE[body[i + 1]])
            i += 2
            continue
        assert ch != "'", f"unescaped quote inside literal {literal!r}"
        out.append(ch)
        i += 1
    return "".join(out)


@pytest.mark.parametrize(
    ("raw", "escaped"),
    [
        ("\0", "\\0"),
        ("\b", "\\b"),
        ("\t", "\\t"),
        ("\n", "\\n"),
        ("\r", "\\r"),
        ("\x1a", "\\Z"),
        ('"', '\\"'),
        ("'", "\\'"),
        ("\\", "\\\\"),
    ],
)
def test_each_special_character(raw: str, escaped: str):
    assert sql_escape(raw) == escaped


def test_plain_string_is_returned_unchanged():
    value = "hello world %_ `tick`"
    assert sql_escape(value) is value


def test_escape_keeps_surrounding_text():
    assert sql_escape("O'Brien\nline2") == "O\\'Brien\\nline2"


def test_escape_map_covers_all_special_characters():
    assert set(ESCAPE_MAP) == set("\0\b\t\n\r\x1a\"'\\")


@pytest.mark.parametrize(
    "value",
    [
        "it's",
        'say "hi"',
        "back\\slash",
        "a\0b\bc\td\ne\rf\x1ag",
        "\\'",
        "''",
        "\\\\n",
        "".join(ESCAPE_MAP) * 2,
    ],
)
def test_quoted_literal_round_trips(value: str):
    assert _parse_literal(quote_literal(value)) == value


def test_escape_is_not_idempotent():
    """Escaping twice changes the text again, so it must happen exactly once."""
    once = sql_escape("it's")
    assert sql_escape(once) != once


def test_quote_name_wraps_in_backticks():
    assert quote_name("user") == "`user`"
    assert quote_name("o'neil") == "`o\\'neil`"
