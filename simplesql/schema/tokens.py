"""Token kinds for condition operands and column values.

Every operand that reaches the value resolver is classified into exactly one
``TokenKind`` first; the resolver then renders each kind in its own branch.
Placeholder detection happens here, before any identifier handling, because
``?`` and ``?:name`` are syntactically indistinguishable from short
identifiers.
"""

from __future__ import annotations

import re
from decimal import Decimal
from enum import Enum
from typing import Any

#: Positional placeholder token.
POSITIONAL_PLACEHOLDER = "?"

#: Named placeholder token, e.g. ``?:user_id``.
NAMED_PLACEHOLDER_RE = re.compile(r"\?:([a-zA-Z_0-9]+)")


class TokenKind(str, Enum):
    """The rendering category of a raw token."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    POSITIONAL = "positional"
    NAMED = "named"


def classify(token: Any) -> TokenKind:
    """Returns the ``TokenKind`` of ``token``.

    ``bool`` is checked before numbers since it subclasses ``int``.  Values
    that are neither primitives nor placeholders are ``STRING`` and are
    rendered through ``str()``.
    """
    if token is None:
        return TokenKind.NULL
    if isinstance(token, bool):
        return TokenKind.BOOL
    if isinstance(token, (int, float, Decimal)):
        return TokenKind.NUMBER
    if token == POSITIONAL_PLACEHOLDER:
        return TokenKind.POSITIONAL
    if placeholder_name(token) is not None:
        return TokenKind.NAMED
    return TokenKind.STRING


def placeholder_name(token: Any) -> str | None:
    """Returns ``name`` for a ``?:name`` token, otherwise ``None``.

    The whole token must match, so ``?:id`` is never found inside
    ``?:identity``.
    """
    if not isinstance(token, str):
        return None
    match = NAMED_PLACEHOLDER_RE.fullmatch(token)
    return match.group(1) if match else None
