"""Token resolution: placeholders, literals and qualified identifiers.

``ValueResolver.resolve`` renders any operand token to SQL text.  The token
is classified once (see :mod:`simplesql.schema.tokens`) and each kind has
its own branch:

* ``None`` / booleans / numbers render as SQL literals;
* ``?`` consumes the next positional parameter, ``?:name`` looks up a named
  one, and the parameter value is rendered as a literal;
* anything else is treated as a possible identifier: ``table.column`` pairs
  whose table is registered get backtick-quoted, other text passes through.
"""
from __future__ import annotations

import logging
import math
import re
from typing import Any

from simplesql.compile.context import CompilationContext, RuntimeContext
from simplesql.compile.escape import quote_literal, quote_name
from simplesql.errors import MissingParamError
from simplesql.schema.tokens import POSITIONAL_PLACEHOLDER, TokenKind, classify, placeholder_name

logger = logging.getLogger(__name__)

_QUALIFIED_RE = re.compile(r"[a-zA-Z_0-9]+\.[a-zA-Z_0-9*]+")
_ALIAS_RE = re.compile(r"\b(?:as|AS) ([a-zA-Z0-9_]+)")

_WILDCARD = "*"


class ValueResolver:
    """Renders operand tokens against one builder's registry and parameters.

    Args:
        ctx: The builder's compilation context.
    """

    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, token: Any, runtime: RuntimeContext, force_quote: bool = False) -> str:
        """Render ``token`` as SQL text.

        Args:
            token: Raw operand: ``None``, bool, number, placeholder or text.
            runtime: Cursor of the current build; advanced by ``?``.
            force_quote: Quote numbers and bare names (``IN`` / ``BETWEEN``
                values, select / group / order columns).

        Raises:
            MissingParamError: In strict mode, when ``?`` has no value left.
        """
        kind = classify(token)

        if kind is TokenKind.POSITIONAL:
            if self._ctx.params.has_positional(runtime.cursor):
                value = self._ctx.params.positional(runtime.advance())
                return self.literal(value, force_quote)
            if self._ctx.config.strict:
                raise MissingParamError(POSITIONAL_PLACEHOLDER, position=runtime.cursor)
            logger.warning(
                "No positional parameter at position %d; placeholder left unresolved",
                runtime.cursor,
            )
            return self.identifier(token, force_quote)

        if kind is TokenKind.NAMED:
            name = placeholder_name(token)
            if self._ctx.params.has_named(name):
                return self.literal(self._ctx.params.named(name), force_quote)
            # Digit names share the positional slots and leave the cursor alone.
            slot = int(name) if name.isdigit() else None
            if slot is not None and self._ctx.params.has_positional(slot):
                return self.literal(self._ctx.params.positional(slot), force_quote)
            return self.identifier(token, force_quote)

        if kind is TokenKind.STRING:
            return self.identifier(token, force_quote)

        return self.literal(token, force_quote)

    def literal(self, value: Any, force_quote: bool = False) -> str:
        """Render ``value`` as a SQL literal, never as an identifier.

        Lists and dicts have no literal form and render as an empty string.
        """
        kind = classify(value)
        if kind is TokenKind.NULL:
            return "NULL"
        if kind is TokenKind.BOOL:
            return "1" if value else "0"
        if kind is TokenKind.NUMBER:
            text = _format_number(value)
            return f"'{text}'" if force_quote else text
        if isinstance(value, (list, tuple, dict)):
            return ""
        return quote_literal(str(value))

    def identifier(self, token: Any, force_quote: bool = False) -> str:
        """Quote the registered ``table.column`` pairs and ``AS`` aliases in ``token``.

        When nothing was quoted, ``force_quote`` is set and the token has no
        space, the whole token is backtick-quoted.  Otherwise the token is
        returned unmodified.
        """
        text = str(token)
        modified = False

        def _qualified(match: re.Match[str]) -> str:
            nonlocal modified
            words = match.group(0).split(".")
            if words[0] not in self._ctx.registry:
                return match.group(0)
            modified = True
            return ".".join(w if w == _WILDCARD else quote_name(w) for w in words)

        def _alias(match: re.Match[str]) -> str:
            nonlocal modified
            modified = True
            return f"AS {quote_name(match.group(1))}"

        text = _QUALIFIED_RE.sub(_qualified, text)
        text = _ALIAS_RE.sub(_alias, text)

        # A lone wildcard is never quoted, forced or not.
        if not modified and force_quote and " " not in text and text != _WILDCARD:
            return quote_name(text)
        return text


def _format_number(value: Any) -> str:
    """Integral floats render without a fraction or exponent: ``18.0`` -> ``18``."""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)
