"""Condition list compiler (WHERE / HAVING / JOIN ... ON).

``ConditionCompiler.compile`` renders a list of typed conditions to one SQL
fragment per item:

* ``Leaf``  -> the operator handler from :class:`OperatorRegistry`;
* ``Group`` -> children compiled recursively, joined with the group's
  combinator and wrapped in parentheses;
* ``Raw``   -> the caller's SQL, verbatim.

The caller joins the top-level fragments with :meth:`ConditionCompiler.join`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from simplesql.compile.context import CompilationContext, RuntimeContext
from simplesql.compile.registry import OperatorRegistry
from simplesql.compile.resolver import ValueResolver
from simplesql.errors import MalformedConditionError, UnknownOperatorError
from simplesql.schema.conditions import Group, Leaf, Raw
from simplesql.schema.operators import Combinator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundOperands:
    """A :class:`ValueResolver` bound to the runtime context of one build."""

    resolver: ValueResolver
    runtime: RuntimeContext

    def resolve(self, token: Any, force_quote: bool = False) -> str:
        return self.resolver.resolve(token, self.runtime, force_quote)

    def literal(self, value: Any, force_quote: bool = False) -> str:
        return self.resolver.literal(value, force_quote)


class ConditionCompiler:
    """Compiles typed condition lists to SQL boolean expressions.

    Args:
        ctx: The builder's compilation context.
        resolver: Resolver used for columns and values.
    """

    def __init__(self, ctx: CompilationContext, resolver: ValueResolver) -> None:
        self._ctx = ctx
        self._resolver = resolver

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compile(
        self,
        conditions: list[Leaf | Group | Raw],
        runtime: RuntimeContext,
        clause: str | None = None,
    ) -> list[str]:
        """Render each condition to a SQL fragment, in order.

        Args:
            conditions: Normalized conditions.
            runtime: Cursor of the current build.
            clause: Clause name reported on errors (``"where"``, ...).

        Raises:
            UnknownOperatorError: A leaf uses an unregistered operator.
            MalformedConditionError: Strict mode, malformed sequence value.
        """
        return [self._compile_one(c, runtime, clause) for c in conditions]

    @staticmethod
    def join(fragments: list[str], combinator: str = Combinator.AND.value) -> str:
        """Join top-level fragments, one per line."""
        return f"\n{combinator} ".join(fragments)

    # ------------------------------------------------------------------
    # Per-variant compilers
    # ------------------------------------------------------------------

    def _compile_one(
        self, condition: Leaf | Group | Raw, runtime: RuntimeContext, clause: str | None
    ) -> str:
        if isinstance(condition, Leaf):
            return self._compile_leaf(condition, runtime, clause)
        if isinstance(condition, Group):
            children = self.compile(condition.children, runtime, clause)
            return f"({f' {condition.combinator} '.join(children)})"
        if isinstance(condition, Raw):
            return condition.sql
        raise TypeError(f"Unsupported condition type: {type(condition).__name__}")

    def _compile_leaf(self, leaf: Leaf, runtime: RuntimeContext, clause: str | None) -> str:
        handler = OperatorRegistry.get(leaf.operator)
        if handler is None:
            raise UnknownOperatorError(leaf.operator, clause=clause)

        column = self._resolver.resolve(leaf.column, runtime)
        fragment = handler(column, leaf.value, BoundOperands(self._resolver, runtime))
        if fragment is not None:
            return fragment

        if self._ctx.config.strict:
            raise MalformedConditionError(
                f"Operator {leaf.operator!r} needs a list value, got {leaf.value!r}",
                condition=leaf,
            )
        logger.warning(
            "Malformed value for operator %r on %r; rendering an empty fragment",
            leaf.operator,
            leaf.column,
        )
        return ""
