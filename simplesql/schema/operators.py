"""Condition operator tokens.

Operators are matched exactly as written (lower case, single spaces).
"""

from __future__ import annotations

from enum import Enum


class ConditionOp(str, Enum):
    """The operator tokens accepted in ``[column, operator, value]`` leaves."""

    EQ = "="
    LTE = "<="
    GTE = ">="
    LT = "<"
    GT = ">"
    NE = "!="
    NE_ALT = "<>"
    IS = "is"
    IS_NOT = "is not"
    BETWEEN = "between"
    IN = "in"
    NOT_IN = "not in"
    CONTAINS = "contains"
    BEGINS = "begins"
    ENDS = "ends"
    IN_SET = "in set"


class Combinator(str, Enum):
    """Boolean connectives for condition groups."""

    AND = "AND"
    OR = "OR"


#: Plain binary comparisons: ``col OP value``.
COMPARISON_OPS: frozenset[str] = frozenset(
    op.value
    for op in (
        ConditionOp.EQ,
        ConditionOp.LTE,
        ConditionOp.GTE,
        ConditionOp.LT,
        ConditionOp.GT,
        ConditionOp.NE,
    )
)

#: ``LIKE`` shortcuts mapped to their pattern template.
LIKE_PATTERNS: dict[str, str] = {
    ConditionOp.CONTAINS.value: "%{}%",
    ConditionOp.BEGINS.value: "{}%",
    ConditionOp.ENDS.value: "%{}",
}

#: Sort directions accepted in ``{column: direction}`` column items.
SORT_DIRECTIONS: frozenset[str] = frozenset({"ASC", "DESC"})
