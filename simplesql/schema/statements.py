"""Declared statement parts, as stored on the builder until ``build()``."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from simplesql.schema.conditions import Group, Leaf, Raw


class StatementKind(str, Enum):
    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class TableRef:
    """A quoted table name and optional quoted alias.

    Attributes:
        name: Quoted table name, e.g. ``"`user`"``.
        alias: Quoted alias, or ``None``.
    """

    name: str
    alias: str | None = None

    def render(self) -> str:
        return f"{self.name} AS {self.alias}" if self.alias else self.name


@dataclass
class Statement:
    """The head of the statement: what to select / insert / update / delete.

    Attributes:
        kind: Statement kind.
        table: Target table.
        columns: Column list (select) or ``{column: value}`` mapping
            (insert / update); empty for delete.
        duplicates: Raw ``ON DUPLICATE KEY UPDATE`` assignments (insert).
    """

    kind: StatementKind
    table: TableRef
    columns: list[Any] | dict[Any, Any] = field(default_factory=list)
    duplicates: list[str] = field(default_factory=list)


@dataclass
class JoinDecl:
    """A declared ``JOIN``.

    Attributes:
        type: Join type as given (``"left"``, ``"inner"``...), upper-cased on render.
        table: Joined table.
        conditions: Normalized ``ON`` conditions.
    """

    type: str
    table: TableRef
    conditions: list[Leaf | Group | Raw] = field(default_factory=list)
