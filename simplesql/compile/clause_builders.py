"""Clause-level SQL builders.

Each class renders one part of the statement from the declarations stored
on the builder, consuming positional parameters through the shared
:class:`~simplesql.compile.context.RuntimeContext`.  Every rendered clause
ends with a newline.

Classes
-------
TableRegistrar         : registers a table declaration and quotes it
ColumnListBuilder      : ``SELECT`` / ``GROUP BY`` / ``ORDER BY`` column lists
SelectClauseBuilder    : ``SELECT … FROM …``
InsertClauseBuilder    : ``INSERT INTO … VALUES … [ON DUPLICATE KEY UPDATE …]``
UpdateClauseBuilder    : ``UPDATE … [joins] SET …``
DeleteClauseBuilder    : ``DELETE … FROM …``
JoinClauseBuilder      : ``<TYPE> JOIN … ON …``
ConditionClauseBuilder : ``WHERE …`` / ``HAVING …``
"""
from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

from simplesql.compile.conditions import ConditionCompiler
from simplesql.compile.context import CompilationContext, RuntimeContext
from simplesql.compile.resolver import ValueResolver
from simplesql.errors import ConfigurationError
from simplesql.schema.conditions import Group, Leaf, Raw
from simplesql.schema.operators import SORT_DIRECTIONS
from simplesql.schema.statements import JoinDecl, Statement, TableRef

_LIST_SEP = ",\n"


class TableRegistrar:
    """Registers ``"table"`` / ``{"table": "alias"}`` specs and quotes them.

    Both the table name and its alias become known identifiers, so
    ``alias.column`` tokens compiled later are quoted.
    """

    def __init__(self, ctx: CompilationContext, resolver: ValueResolver) -> None:
        self._ctx = ctx
        self._resolver = resolver

    def register(self, spec: Any, clause: str) -> TableRef:
        if isinstance(spec, Mapping):
            if not spec:
                raise ConfigurationError(
                    f"{clause.capitalize()}: Empty table mapping", clause=clause, field="table"
                )
            name, alias = next(iter(spec.items()))
            self._ctx.registry.register(name)
            self._ctx.registry.register(alias)
            return TableRef(
                name=self._resolver.identifier(name, force_quote=True),
                alias=self._resolver.identifier(alias, force_quote=True),
            )
        self._ctx.registry.register(spec)
        return TableRef(name=self._resolver.identifier(spec, force_quote=True))


class ColumnListBuilder:
    """Renders column lists for ``SELECT``, ``GROUP BY`` and ``ORDER BY``.

    Plain items are resolved with ``force_quote``; ``{column: direction}``
    items render ``column ASC|DESC`` and are skipped for other directions.
    """

    def __init__(self, resolver: ValueResolver) -> None:
        self._resolver = resolver

    def build(self, columns: list[Any], runtime: RuntimeContext) -> list[str]:
        items: list[str] = []
        for column in columns:
            if isinstance(column, Mapping):
                for name, direction in column.items():
                    direction = str(direction).upper()
                    if direction not in SORT_DIRECTIONS:
                        continue
                    items.append(f"{self._resolver.identifier(name, True)} {direction}")
            else:
                items.append(self._resolver.resolve(column, runtime, force_quote=True))
        return items


class _ValuesBuilder:
    """Renders ``{column: value}`` mappings for INSERT and UPDATE."""

    def __init__(self, resolver: ValueResolver) -> None:
        self._resolver = resolver

    def build(self, columns: Mapping[Any, Any], runtime: RuntimeContext) -> list[tuple[str, str]]:
        return [
            (
                self._resolver.identifier(column, force_quote=True),
                self._resolver.resolve(value, runtime),
            )
            for column, value in columns.items()
        ]


class SelectClauseBuilder:
    """Builds ``SELECT <columns>\\nFROM <table>``."""

    def __init__(self, columns: ColumnListBuilder) -> None:
        self._columns = columns

    def build(self, stmt: Statement, runtime: RuntimeContext) -> str:
        columns = self._columns.build(list(stmt.columns), runtime)
        return f"SELECT {_LIST_SEP.join(columns)}\nFROM {stmt.table.render()}\n"


class InsertClauseBuilder:
    """Builds ``INSERT INTO … VALUES …`` with optional duplicate-key updates.

    The duplicate-key assignments are raw caller SQL.
    """

    def __init__(self, resolver: ValueResolver) -> None:
        self._values = _ValuesBuilder(resolver)

    def build(self, stmt: Statement, runtime: RuntimeContext) -> str:
        pairs = self._values.build(stmt.columns, runtime)
        cols = ", ".join(col for col, _ in pairs)
        vals = ", ".join(val for _, val in pairs)
        sql = f"INSERT INTO {stmt.table.name} ({cols})\nVALUES ({vals})\n"
        if stmt.duplicates:
            sql += f"ON DUPLICATE KEY UPDATE {_LIST_SEP.join(stmt.duplicates)}\n"
        return sql


class UpdateClauseBuilder:
    """Builds ``UPDATE <table>\\n<joins>SET …``.

    Joins are rendered before the ``SET`` values, so they consume positional
    parameters first.
    """

    def __init__(self, resolver: ValueResolver) -> None:
        self._values = _ValuesBuilder(resolver)

    def build(self, stmt: Statement, joins_sql: str, runtime: RuntimeContext) -> str:
        pairs = self._values.build(stmt.columns, runtime)
        assignments = ",\n".join(f"{col} = {val}" for col, val in pairs)
        return f"UPDATE {stmt.table.render()}\n{joins_sql}SET {assignments}\n"


class DeleteClauseBuilder:
    """Builds ``DELETE [alias]\\nFROM <table>``."""

    def build(self, stmt: Statement) -> str:
        target = f" {stmt.table.alias}" if stmt.table.alias else ""
        return f"DELETE{target}\nFROM {stmt.table.render()}\n"


class ConditionClauseBuilder:
    """Builds ``WHERE`` / ``HAVING`` / ``ON`` condition blocks."""

    def __init__(self, conditions: ConditionCompiler) -> None:
        self._conditions = conditions

    def build(
        self,
        keyword: str,
        conditions: list[Leaf | Group | Raw],
        runtime: RuntimeContext,
    ) -> str:
        fragments = self._conditions.compile(conditions, runtime, clause=keyword.lower())
        return f"{keyword} {self._conditions.join(fragments)}\n"


class JoinClauseBuilder:
    """Builds a single ``<TYPE> JOIN <table>\\nON …`` fragment."""

    def __init__(self, conditions: ConditionClauseBuilder) -> None:
        self._conditions = conditions

    def build(self, join: JoinDecl, runtime: RuntimeContext) -> str:
        head = f"{str(join.type).upper()} JOIN {join.table.render()}\n"
        return head + self._conditions.build("ON", join.conditions, runtime)


# ---------------------------------------------------------------------------
# LIMIT
# ---------------------------------------------------------------------------

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def _to_int(value: Any) -> int:
    """Leading-integer conversion; anything unparsable counts as 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        return int(match.group(1)) if match else 0
    return 0


def format_limit(value: Any) -> str | None:
    """Render a ``LIMIT`` clause from ``n``, ``"n"`` or ``[offset, limit]``.

    Returns:
        ``LIMIT offset, limit`` when the offset is positive, ``LIMIT limit``
        when only the limit is, otherwise ``None``.
    """
    offset = limit = 0
    if isinstance(value, (list, tuple)):
        if len(value) > 0:
            offset = _to_int(value[0])
        if len(value) > 1:
            limit = _to_int(value[1])
    else:
        limit = _to_int(value)

    if offset > 0:
        return f"LIMIT {offset}, {limit}\n"
    if limit > 0:
        return f"LIMIT {limit}\n"
    return None
