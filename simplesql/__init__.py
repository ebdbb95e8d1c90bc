"""simplesql: fluent SQL statement builder.

Assemble SELECT / INSERT / UPDATE / DELETE statements from plain Python or
JSON clause descriptions.  Identifiers are backtick-quoted, literals are
single-quoted and escaped, and ``?`` / ``?:name`` placeholders are
substituted from supplied parameters.

Public API
----------
``SimpleSqlBuilder``
    Fluent builder: ``select`` / ``insert`` / ``update`` / ``delete``,
    ``joins``, ``where``, ``having``, ``group``, ``order``, ``limit``,
    ``params``, then ``build()``.

``build_from_json``
    Build a statement from a single JSON object describing its clauses.

Example::

    import simplesql

    sql = (
        simplesql.SimpleSqlBuilder()
        .select(table="user", columns=["user.id", "user.first_name"])
        .where([
            ["user.active", "=", True],
            {"or": [["user.first_name", "=", "?"], ["user.last_name", "=", "?"]]},
        ])
        .params(["John", "Doe"])
        .build()
    )

Raw strings in condition lists and ``duplicates`` entries are inserted
verbatim.  Never build them from untrusted input.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from simplesql.compile.builder import SimpleSqlBuilder
from simplesql.compile.escape import sql_escape
from simplesql.compile.registry import OperatorRegistry
from simplesql.errors import (
    CompilationError,
    ConfigurationError,
    MalformedConditionError,
    MissingParamError,
    ParseError,
    SimpleSQLError,
    UnknownOperatorError,
)
from simplesql.schema.conditions import Group, Leaf, Raw
from simplesql.schema.config import BuilderConfig
from simplesql.schema.payload import QueryPayload

__all__ = [
    # Core pipeline
    "SimpleSqlBuilder",
    "build_from_json",
    "sql_escape",
    # Extension
    "OperatorRegistry",
    # Schema types
    "BuilderConfig",
    "QueryPayload",
    "Leaf",
    "Group",
    "Raw",
    # Errors
    "SimpleSQLError",
    "ParseError",
    "ConfigurationError",
    "CompilationError",
    "UnknownOperatorError",
    "MalformedConditionError",
    "MissingParamError",
]


def build_from_json(
    payload: str | bytes | Mapping[str, Any],
    config: BuilderConfig | None = None,
) -> str:
    """Build a statement from a JSON clause description.

    Example::

        sql = simplesql.build_from_json(
            '{"select": {"table": "user", "columns": ["user.id"]},'
            ' "where": [["user.id", "=", "?"]], "params": [7]}'
        )

    Args:
        payload: JSON text or an already-decoded mapping.
        config: Optional builder options.

    Returns:
        The rendered SQL text.

    Raises:
        ParseError: If ``payload`` is not valid JSON or has unknown keys.
        ConfigurationError: If a clause lacks a required field.
        UnknownOperatorError: If a condition uses an unknown operator.
    """
    return SimpleSqlBuilder.from_json(payload, config)
