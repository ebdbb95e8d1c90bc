"""Operator registry for condition leaves.

Each ``[column, operator, value]`` leaf is rendered by the handler
registered for its operator token.  The built-in operator table is
registered at import time; further operators can be added without touching
:class:`~simplesql.compile.conditions.ConditionCompiler`::

    from simplesql.compile.registry import OperatorRegistry

    @OperatorRegistry.register("regexp")
    def _regexp(column, value, operands):
        return f"{column} REGEXP {operands.resolve(value)}"

A handler returns ``None`` when the value has the wrong shape; the compiler
turns that into an empty fragment (or an error in strict mode).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar, Protocol

from simplesql.compile.escape import sql_escape
from simplesql.schema.operators import (
    COMPARISON_OPS,
    LIKE_PATTERNS,
    ConditionOp,
)


class OperandRenderer(Protocol):
    """What a handler may do with operand tokens during one build."""

    def resolve(self, token: Any, force_quote: bool = False) -> str: ...

    def literal(self, value: Any, force_quote: bool = False) -> str: ...


#: ``(column_sql, raw_value, operands) -> sql_fragment | None``
OperatorHandler = Callable[[str, Any, OperandRenderer], str | None]


class OperatorRegistry:
    """Registry mapping operator tokens to SQL rendering handlers."""

    _operators: ClassVar[dict[str, OperatorHandler]] = {}

    @classmethod
    def register(cls, *names: str) -> Callable[[OperatorHandler], OperatorHandler]:
        """Decorator that registers a handler under each of ``names``.

        Args:
            names: Operator tokens (e.g. ``"in"``, ``"not in"``).

        Returns:
            A decorator that registers and returns the handler.
        """

        def decorator(handler: OperatorHandler) -> OperatorHandler:
            for name in names:
                cls._operators[name] = handler
            return handler

        return decorator

    @classmethod
    def register_handler(cls, name: str, handler: OperatorHandler) -> None:
        """Register a handler without using the decorator form."""
        cls._operators[name] = handler

    @classmethod
    def unregister(cls, name: str) -> None:
        cls._operators.pop(name, None)

    @classmethod
    def get(cls, name: Any) -> OperatorHandler | None:
        """Return the handler for ``name``, or ``None`` if not registered."""
        if not isinstance(name, str):
            return None
        return cls._operators.get(name)

    @classmethod
    def registered_operators(cls) -> list[str]:
        """Return the sorted list of registered operator tokens."""
        return sorted(cls._operators)


# ---------------------------------------------------------------------------
# Built-in operator table
# ---------------------------------------------------------------------------


def _is_value_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _comparison(sql_op: str) -> OperatorHandler:
    def handler(column: str, value: Any, operands: OperandRenderer) -> str:
        return f"{column} {sql_op} {operands.resolve(value)}"

    return handler


for _op in COMPARISON_OPS:
    OperatorRegistry.register_handler(_op, _comparison(_op))
OperatorRegistry.register_handler(ConditionOp.NE_ALT.value, _comparison(ConditionOp.NE.value))
OperatorRegistry.register_handler(ConditionOp.IS.value, _comparison("IS"))
OperatorRegistry.register_handler(ConditionOp.IS_NOT.value, _comparison("IS NOT"))


@OperatorRegistry.register(ConditionOp.BETWEEN.value)
def _between(column: str, value: Any, operands: OperandRenderer) -> str | None:
    if not _is_value_list(value) or len(value) != 2:
        return None
    low, high = (operands.resolve(v, force_quote=True) for v in value)
    return f"{column} BETWEEN {low} AND {high}"


def _membership(keyword: str) -> OperatorHandler:
    def handler(column: str, value: Any, operands: OperandRenderer) -> str | None:
        if not _is_value_list(value):
            return None
        values = ",".join(operands.resolve(v, force_quote=True) for v in value)
        return f"{column} {keyword} ({values})"

    return handler


OperatorRegistry.register_handler(ConditionOp.IN.value, _membership("IN"))
OperatorRegistry.register_handler(ConditionOp.NOT_IN.value, _membership("NOT IN"))


def _like(pattern: str) -> OperatorHandler:
    def handler(column: str, value: Any, operands: OperandRenderer) -> str:
        # Escaped directly: placeholders are not expanded in LIKE shortcuts.
        escaped = sql_escape("" if value is None else str(value))
        return f"{column} LIKE '{pattern.format(escaped)}'"

    return handler


for _op, _pattern in LIKE_PATTERNS.items():
    OperatorRegistry.register_handler(_op, _like(_pattern))


@OperatorRegistry.register(ConditionOp.IN_SET.value)
def _in_set(column: str, value: Any, operands: OperandRenderer) -> str:
    return f"FIND_IN_SET({column}, {operands.literal(value)})"
