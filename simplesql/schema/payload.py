"""Pydantic model for the JSON entry point.

A payload is a single JSON object whose keys name the clauses to declare::

    {
        "select": {"table": {"user": "u"}, "columns": ["u.id", "u.name"]},
        "joins": [
            {"type": "left", "table": "address",
             "conditions": [["address.user_id", "=", "u.id"]]}
        ],
        "where": [["u.active", "=", true], ["u.age", ">", "?"]],
        "order": [{"u.name": "asc"}],
        "limit": [0, 20],
        "params": [18]
    }

All keys are optional and unknown keys are rejected, at the top level and
inside statement and join specs.  Field values stay loosely typed here:
required fields are checked by the builder methods, which raise
``ConfigurationError`` for missing fields.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class StatementSpec(BaseModel):
    """A ``select`` / ``insert`` / ``update`` / ``delete`` spec."""

    model_config = ConfigDict(extra="forbid")

    table: Any = None
    columns: Any = None
    duplicates: list[str] | None = None


class JoinSpec(BaseModel):
    """One entry of ``joins``."""

    model_config = ConfigDict(extra="forbid")

    type: Any = None
    table: Any = None
    conditions: Any = None


class QueryPayload(BaseModel):
    """The clause declarations replayed by ``SimpleSqlBuilder.from_json``.

    Attributes:
        select / insert / update / delete: Statement specs (``table``,
            ``columns`` and, for inserts, ``duplicates``).
        joins: Join specs (``type``, ``table``, ``conditions``).
        where / having: Condition lists.
        order / group: Column lists.
        limit: ``n``, ``"n"`` or ``[offset, limit]``.
        params: Positional list or named mapping.
    """

    model_config = ConfigDict(extra="forbid")

    select: StatementSpec | None = None
    insert: StatementSpec | None = None
    update: StatementSpec | None = None
    delete: StatementSpec | None = None
    joins: list[JoinSpec] | None = None
    where: list[Any] | None = None
    having: list[Any] | None = None
    order: list[Any] | None = None
    group: list[Any] | None = None
    limit: int | str | list[Any] | None = None
    params: list[Any] | dict[str, Any] | None = None
