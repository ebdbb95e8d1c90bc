"""Fluent statement builder.

``SimpleSqlBuilder`` collects clause declarations and renders them in
``build()``.  Rendering is delegated to focused sub-builders:

SimpleSqlBuilder
  ├── ValueResolver           (resolver.py)
  ├── ConditionCompiler       (conditions.py)
  ├── TableRegistrar          (clause_builders.py)
  ├── ColumnListBuilder       (clause_builders.py)
  ├── Select/Insert/Update/DeleteClauseBuilder (clause_builders.py)
  ├── JoinClauseBuilder       (clause_builders.py)
  └── ConditionClauseBuilder  (clause_builders.py)

Tables are registered as identifiers when ``select`` / ``insert`` /
``update`` / ``delete`` / ``joins`` are declared; conditions and column
lists are compiled only in ``build()``.  A fresh
:class:`~simplesql.compile.context.RuntimeContext` is created per
``build()`` call, so positional parameters are consumed from the first one
each time and repeated builds return the same text.

Example::

    sql = (
        SimpleSqlBuilder()
        .select(table="user", columns=["user.id", "user.name"])
        .where([["user.active", "=", True], ["user.age", ">", "?"]])
        .params([18])
        .build()
    )
"""
from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from simplesql.compile.clause_builders import (
    ColumnListBuilder,
    ConditionClauseBuilder,
    DeleteClauseBuilder,
    InsertClauseBuilder,
    JoinClauseBuilder,
    SelectClauseBuilder,
    TableRegistrar,
    UpdateClauseBuilder,
    format_limit,
)
from simplesql.compile.conditions import ConditionCompiler
from simplesql.compile.context import CompilationContext, RuntimeContext
from simplesql.compile.resolver import ValueResolver
from simplesql.errors import CompilationError, ConfigurationError, ParseError
from simplesql.schema.conditions import Group, Leaf, Raw, to_conditions
from simplesql.schema.config import BuilderConfig
from simplesql.schema.payload import QueryPayload
from simplesql.schema.statements import JoinDecl, Statement, StatementKind

logger = logging.getLogger(__name__)

_LIST_SEP = ",\n"


class SimpleSqlBuilder:
    """Builds one SQL statement from clause declarations.

    Each declaration method returns the builder so calls can be chained.
    An instance describes a single statement and is not thread-safe.

    Args:
        config: Builder options; defaults to ``BuilderConfig()``.
    """

    def __init__(self, config: BuilderConfig | None = None) -> None:
        self._ctx = CompilationContext(config=config or BuilderConfig())
        self._resolver = ValueResolver(self._ctx)
        self._tables = TableRegistrar(self._ctx, self._resolver)

        compiler = ConditionCompiler(self._ctx, self._resolver)
        columns = ColumnListBuilder(self._resolver)
        self._conditions = ConditionClauseBuilder(compiler)
        self._columns = columns
        self._select = SelectClauseBuilder(columns)
        self._insert = InsertClauseBuilder(self._resolver)
        self._update = UpdateClauseBuilder(self._resolver)
        self._delete = DeleteClauseBuilder()
        self._join = JoinClauseBuilder(self._conditions)

        self._statement: Statement | None = None
        self._joins: list[JoinDecl] = []
        self._where: list[Leaf | Group | Raw] = []
        self._having: list[Leaf | Group | Raw] = []
        self._group: list[Any] = []
        self._order: list[Any] = []
        self._limit: str | None = None

    # ------------------------------------------------------------------
    # Statement declarations
    # ------------------------------------------------------------------

    def select(self, payload: Mapping[str, Any] | None = None, **fields: Any) -> SimpleSqlBuilder:
        """Declare a ``SELECT`` statement.

        Args:
            payload: ``{"table": ..., "columns": [...]}``; keyword arguments
                are merged over it.

        Raises:
            ConfigurationError: If ``table`` or ``columns`` is missing.
        """
        data = _statement_fields("select", payload, fields, ("table", "columns"))
        self._set_statement(
            Statement(
                kind=StatementKind.SELECT,
                table=self._tables.register(data["table"], "select"),
                columns=_as_list(data["columns"]),
            )
        )
        return self

    def insert(self, payload: Mapping[str, Any] | None = None, **fields: Any) -> SimpleSqlBuilder:
        """Declare an ``INSERT`` statement.

        ``columns`` maps column names to values; ``duplicates`` is an optional
        list of raw ``ON DUPLICATE KEY UPDATE`` assignments.
        """
        data = _statement_fields("insert", payload, fields, ("table", "columns"))
        self._set_statement(
            Statement(
                kind=StatementKind.INSERT,
                table=self._tables.register(data["table"], "insert"),
                columns=_as_mapping("insert", data["columns"]),
                duplicates=_as_list(data.get("duplicates") or []),
            )
        )
        return self

    def update(self, payload: Mapping[str, Any] | None = None, **fields: Any) -> SimpleSqlBuilder:
        """Declare an ``UPDATE`` statement; ``columns`` maps columns to values."""
        data = _statement_fields("update", payload, fields, ("table", "columns"))
        self._set_statement(
            Statement(
                kind=StatementKind.UPDATE,
                table=self._tables.register(data["table"], "update"),
                columns=_as_mapping("update", data["columns"]),
            )
        )
        return self

    def delete(self, payload: Mapping[str, Any] | None = None, **fields: Any) -> SimpleSqlBuilder:
        """Declare a ``DELETE`` statement."""
        data = _statement_fields("delete", payload, fields, ("table",))
        self._set_statement(
            Statement(
                kind=StatementKind.DELETE,
                table=self._tables.register(data["table"], "delete"),
            )
        )
        return self

    # ------------------------------------------------------------------
    # Clause declarations
    # ------------------------------------------------------------------

    def joins(self, payload: Iterable[Mapping[str, Any]]) -> SimpleSqlBuilder:
        """Declare joins: ``[{"type": "left", "table": ..., "conditions": [...]}]``.

        Raises:
            ConfigurationError: If a join lacks ``type``, ``table`` or
                ``conditions``.
        """
        if isinstance(payload, Mapping):
            payload = [payload]
        for spec in payload:
            data = _statement_fields("joins", spec, {}, ("type", "table", "conditions"))
            self._joins.append(
                JoinDecl(
                    type=data["type"],
                    table=self._tables.register(data["table"], "joins"),
                    conditions=self._normalize(data["conditions"]),
                )
            )
        return self

    def where(self, conditions: Iterable[Any]) -> SimpleSqlBuilder:
        """Append conditions to ``WHERE``; top-level items are joined with AND."""
        self._where.extend(self._normalize(conditions))
        return self

    def having(self, conditions: Iterable[Any]) -> SimpleSqlBuilder:
        """Append conditions to ``HAVING``."""
        self._having.extend(self._normalize(conditions))
        return self

    def group(self, columns: Iterable[Any]) -> SimpleSqlBuilder:
        self._group.extend(_as_list(columns))
        return self

    def order(self, columns: Iterable[Any]) -> SimpleSqlBuilder:
        """Append ``ORDER BY`` items: ``"col"`` or ``{"col": "asc"|"desc"}``."""
        self._order.extend(_as_list(columns))
        return self

    def limit(self, value: int | str | Sequence[Any]) -> SimpleSqlBuilder:
        """Set ``LIMIT n`` or, from ``[offset, limit]``, ``LIMIT offset, limit``.

        A value with neither a positive limit nor a positive offset leaves
        the previous limit in place.
        """
        formatted = format_limit(value)
        if formatted is not None:
            self._limit = formatted
        return self

    def params(self, params: Sequence[Any] | Mapping[Any, Any]) -> SimpleSqlBuilder:
        """Merge placeholder values: a list for ``?``, a mapping for ``?:name``."""
        self._ctx.params.merge(params)
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    @property
    def identifiers(self) -> tuple[str, ...]:
        """Table names and aliases registered so far."""
        return self._ctx.registry.names

    def build(self) -> str:
        """Render the statement.

        Clauses are rendered in the order statement head and joins (joins
        before ``SET`` for UPDATE), WHERE, GROUP BY, HAVING, ORDER BY, LIMIT.
        Positional parameters are consumed in that order.  GROUP BY comes
        before HAVING, unlike builders that emit HAVING first, so a ``?`` in
        a GROUP BY column takes its value before one in a HAVING condition.

        Returns:
            The SQL text, one clause per line, ending with a newline.

        Raises:
            CompilationError: If no statement was declared.
            UnknownOperatorError: If a condition uses an unknown operator.
        """
        stmt = self._statement
        if stmt is None:
            raise CompilationError("Unknown query type")

        runtime = RuntimeContext()
        sql = self._build_head(stmt, runtime)

        if self._where:
            sql += self._conditions.build("WHERE", self._where, runtime)
        if self._group:
            sql += f"GROUP BY {_LIST_SEP.join(self._columns.build(self._group, runtime))}\n"
        if self._having:
            sql += self._conditions.build("HAVING", self._having, runtime)
        if self._order:
            sql += f"ORDER BY {_LIST_SEP.join(self._columns.build(self._order, runtime))}\n"
        if self._limit is not None:
            sql += self._limit

        logger.debug(
            "Built %s statement (%d positional parameter(s) consumed)",
            stmt.kind.value,
            runtime.cursor,
        )
        return sql

    def _build_head(self, stmt: Statement, runtime: RuntimeContext) -> str:
        if stmt.kind is StatementKind.UPDATE:
            joins_sql = self._build_joins(runtime)
            return self._update.build(stmt, joins_sql, runtime)

        if stmt.kind is StatementKind.SELECT:
            head = self._select.build(stmt, runtime)
        elif stmt.kind is StatementKind.INSERT:
            head = self._insert.build(stmt, runtime)
        else:
            head = self._delete.build(stmt)
        return head + self._build_joins(runtime)

    def _build_joins(self, runtime: RuntimeContext) -> str:
        return "".join(self._join.build(join, runtime) for join in self._joins)

    # ------------------------------------------------------------------
    # JSON entry point
    # ------------------------------------------------------------------

    @classmethod
    def from_json(
        cls,
        payload: str | bytes | Mapping[str, Any],
        config: BuilderConfig | None = None,
    ) -> str:
        """Build a statement from a JSON object describing its clauses.

        Clauses are declared in the order select, insert, update, delete,
        joins, where, having, order, group, limit, params.

        Args:
            payload: JSON text or an already-decoded mapping.
            config: Builder options.

        Returns:
            The rendered SQL.

        Raises:
            ParseError: If ``payload`` is not valid JSON or has unknown keys.
            ConfigurationError: If a clause lacks a required field.
        """
        if isinstance(payload, (str, bytes)):
            try:
                payload = json.loads(payload)
            except json.JSONDecodeError as exc:
                raise ParseError(f"Invalid JSON: {exc}", raw=payload) from exc

        try:
            query = QueryPayload.model_validate(payload)
        except Exception as exc:
            raise ParseError(f"Query payload is invalid: {exc}", raw=payload) from exc

        builder = cls(config)
        for name in ("select", "insert", "update", "delete"):
            spec = getattr(query, name)
            if spec is not None:
                getattr(builder, name)(spec.model_dump(exclude_unset=True))
        if query.joins is not None:
            builder.joins([join.model_dump(exclude_unset=True) for join in query.joins])
        for name in ("where", "having", "order", "group", "limit", "params"):
            value = getattr(query, name)
            if value is not None:
                getattr(builder, name)(value)
        return builder.build()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _normalize(self, conditions: Any) -> list[Leaf | Group | Raw]:
        if isinstance(conditions, (str, Mapping)):
            conditions = [conditions]
        return to_conditions(conditions, strict=self._ctx.config.strict)

    def _set_statement(self, stmt: Statement) -> None:
        if self._statement is not None:
            logger.debug(
                "Replacing %s statement with %s", self._statement.kind.value, stmt.kind.value
            )
        else:
            logger.debug("Declared %s statement on %s", stmt.kind.value, stmt.table.render())
        self._statement = stmt


def _statement_fields(
    clause: str,
    payload: Any,
    fields: dict[str, Any],
    required: tuple[str, ...],
) -> dict[str, Any]:
    if payload is not None and not isinstance(payload, Mapping):
        raise ConfigurationError(
            f"{clause.capitalize()}: Expected a mapping, got {type(payload).__name__}",
            clause=clause,
        )
    data = {**(payload or {}), **fields}
    for name in required:
        if name not in data:
            raise ConfigurationError.missing(clause, name)
    return data


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, (str, Mapping)) or not isinstance(value, Iterable):
        return [value]
    return list(value)


def _as_mapping(clause: str, value: Any) -> dict[Any, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(
            f"{clause.capitalize()}: columns must map column names to values",
            clause=clause,
            field="columns",
        )
    return dict(value)
