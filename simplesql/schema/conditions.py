"""Typed condition models for WHERE / HAVING / JOIN ... ON lists.

Callers describe conditions with plain Python / JSON shapes::

    [
        ["user.active", "=", True],                        # leaf
        {"or": [["user.age", "<", 18], ["user.age", ">", 65]]},  # group
        "DATE(user.created) = CURDATE()",                  # raw fragment
    ]

``to_conditions`` normalizes those shapes once, at the API boundary, into
the closed ``Leaf`` / ``Group`` / ``Raw`` union so the compiler never has to
inspect runtime shapes.  The caller's lists and dicts are not mutated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Discriminator, Tag

from simplesql.errors import MalformedConditionError
from simplesql.schema.operators import Combinator

logger = logging.getLogger(__name__)

_FROZEN = ConfigDict(extra="forbid", frozen=True)


class Leaf(BaseModel):
    """A single ``[column, operator, value]`` comparison."""

    model_config = _FROZEN

    column: Any
    operator: Any
    value: Any = None


class Group(BaseModel):
    """A parenthesized AND / OR combination of child conditions."""

    model_config = _FROZEN

    combinator: Literal["AND", "OR"]
    children: list[Condition]


class Raw(BaseModel):
    """Caller-supplied SQL inserted verbatim, without escaping."""

    model_config = _FROZEN

    sql: str


def _condition_discriminator(v: Any) -> str | None:
    if isinstance(v, Leaf):
        return "leaf"
    if isinstance(v, Group):
        return "group"
    if isinstance(v, Raw):
        return "raw"
    if isinstance(v, dict):
        for key, tag in (("combinator", "group"), ("sql", "raw"), ("operator", "leaf")):
            if key in v:
                return tag
    return None


Condition = Annotated[
    Annotated[Leaf, Tag("leaf")] | Annotated[Group, Tag("group")] | Annotated[Raw, Tag("raw")],
    Discriminator(_condition_discriminator),
]

Group.model_rebuild()


def to_condition(item: Any, strict: bool = False) -> Leaf | Group | Raw | None:
    """Normalize one caller-supplied condition item.

    Args:
        item: A 3-item list / tuple, a single-key ``{"and"|"or": [...]}``
            mapping, a raw SQL string, or an already-typed condition.
        strict: Raise instead of skipping unrecognised shapes.

    Returns:
        The typed condition, or ``None`` when the item is skipped.

    Raises:
        MalformedConditionError: In strict mode, for unrecognised shapes.
    """
    if isinstance(item, (Leaf, Group, Raw)):
        return item
    if isinstance(item, str):
        return Raw(sql=item)
    if isinstance(item, (list, tuple)) and len(item) == 3:
        column, operator, value = item
        return Leaf(column=column, operator=operator, value=value)
    if isinstance(item, Mapping) and len(item) == 1:
        key, children = next(iter(item.items()))
        if (
            isinstance(key, str)
            and key.upper() in Combinator.__members__
            and isinstance(children, (list, tuple))
        ):
            return Group(
                combinator=key.upper(),
                children=to_conditions(children, strict=strict),
            )

    if strict:
        raise MalformedConditionError(f"Unrecognised condition: {item!r}", condition=item)
    logger.debug("Skipping unrecognised condition %r", item)
    return None


def to_conditions(items: Iterable[Any], strict: bool = False) -> list[Leaf | Group | Raw]:
    """Normalize a condition list, dropping skipped items."""
    conditions = []
    for item in items:
        condition = to_condition(item, strict=strict)
        if condition is not None:
            conditions.append(condition)
    return conditions
