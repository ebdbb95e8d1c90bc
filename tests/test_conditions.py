"""Unit tests for condition normalization and the ConditionCompiler."""

from __future__ import annotations

import pytest

from simplesql.compile.registry import OperatorRegistry
from simplesql.errors import MalformedConditionError, UnknownOperatorError
from simplesql.schema.conditions import Group, Leaf, Raw, to_condition, to_conditions

# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


class TestNormalization:
    def test_three_item_list_is_a_leaf(self):
        assert to_condition(["user.id", "=", 1]) == Leaf(column="user.id", operator="=", value=1)

    def test_group_key_is_case_insensitive(self):
        group = to_condition({"Or": [["a", "=", 1], "x > 1"]})
        assert isinstance(group, Group)
        assert group.combinator == "OR"
        assert group.children == [Leaf(column="a", operator="=", value=1), Raw(sql="x > 1")]

    def test_string_is_raw(self):
        assert to_condition("NOW() > user.created") == Raw(sql="NOW() > user.created")

    @pytest.mark.parametrize(
        "item",
        [
            ["a", "="],
            {"xor": [["a", "=", 1]]},
            {"and": [], "or": []},
            {"or": "a = 1"},
            42,
            None,
        ],
    )
    def test_unrecognised_shapes_are_skipped(self, item):
        assert to_condition(item) is None
        assert to_conditions([item, "ok"]) == [Raw(sql="ok")]

    def test_unrecognised_shape_raises_in_strict_mode(self):
        with pytest.raises(MalformedConditionError):
            to_conditions([["a", "="]], strict=True)

    def test_caller_input_is_not_mutated(self):
        group = {"or": [["a", "=", 1]]}
        to_conditions([group])
        assert group == {"or": [["a", "=", 1]]}

    def test_typed_conditions_pass_through(self):
        leaf = Leaf(column="a", operator="=", value=1)
        assert to_condition(leaf) is leaf


# ---------------------------------------------------------------------------
# Operator table
# ---------------------------------------------------------------------------


class TestOperators:
    @pytest.mark.parametrize("op", ["=", "<=", ">=", "<", ">", "!="])
    def test_comparisons(self, compile_conditions, op):
        assert compile_conditions([["user.age", op, 18]]) == [f"`user`.`age` {op} 18"]

    def test_angle_bracket_not_equal_renders_bang_equal(self, compile_conditions):
        assert compile_conditions([["user.age", "<>", 18]]) == ["`user`.`age` != 18"]

    def test_is_and_is_not(self, compile_conditions):
        assert compile_conditions(
            [["user.deleted_at", "is", None], ["user.email", "is not", None]]
        ) == ["`user`.`deleted_at` IS NULL", "`user`.`email` IS NOT NULL"]

    def test_identifier_on_both_sides(self, compile_conditions):
        fragments = compile_conditions(
            [["address.user_id", "=", "user.id"]], tables=("user", "address")
        )
        assert fragments == ["`address`.`user_id` = `user`.`id`"]

    def test_bare_string_value_is_not_a_literal(self, compile_conditions):
        assert compile_conditions([["user.name", "=", "John"]]) == ["`user`.`name` = John"]

    def test_between_force_quotes_bounds(self, compile_conditions):
        fragments = compile_conditions([["user.age", "between", ["?", "?"]]], params=[18, 65])
        assert fragments == ["`user`.`age` BETWEEN '18' AND '65'"]

    def test_in_and_not_in(self, compile_conditions):
        fragments = compile_conditions(
            [["user.nickname", "in", ["?", "?", "?"]], ["user.id", "not in", [1, 2]]],
            params=["a", "b", "c"],
        )
        assert fragments == [
            "`user`.`nickname` IN ('a','b','c')",
            "`user`.`id` NOT IN ('1','2')",
        ]

    def test_like_shortcuts_escape_value(self, compile_conditions):
        assert compile_conditions(
            [
                ["user.name", "contains", "O'Brien"],
                ["user.name", "begins", "Jo"],
                ["user.name", "ends", "son"],
            ]
        ) == [
            "`user`.`name` LIKE '%O\\'Brien%'",
            "`user`.`name` LIKE 'Jo%'",
            "`user`.`name` LIKE '%son'",
        ]

    def test_like_shortcuts_do_not_expand_placeholders(self, compile_conditions):
        fragments = compile_conditions(
            [["user.name", "contains", "?"], ["user.id", "=", "?"]], params=[5]
        )
        assert fragments == ["`user`.`name` LIKE '%?%'", "`user`.`id` = 5"]

    def test_in_set(self, compile_conditions):
        assert compile_conditions([["user.roles", "in set", "admin"]]) == [
            "FIND_IN_SET(`user`.`roles`, 'admin')"
        ]

    def test_unknown_operator_fails(self, compile_conditions):
        with pytest.raises(UnknownOperatorError) as exc_info:
            compile_conditions([["user.id", "=", 1], ["user.id", "xor", 1]])
        assert exc_info.value.operator == "xor"
        assert exc_info.value.to_error_response()["error"] == "UNKNOWN_OPERATOR"

    def test_operators_are_case_sensitive(self, compile_conditions):
        with pytest.raises(UnknownOperatorError):
            compile_conditions([["user.id", "IN", [1]]])

    def test_builtin_operator_table(self):
        assert OperatorRegistry.registered_operators() == sorted(
            [
                "=", "<=", ">=", "<", ">", "!=", "<>", "is", "is not",
                "between", "in", "not in", "contains", "begins", "ends", "in set",
            ]
        )

    def test_registered_operator_is_used(self, compile_conditions):
        @OperatorRegistry.register("regexp")
        def _regexp(column, value, operands):
            return f"{column} REGEXP {operands.resolve(value)}"

        try:
            fragments = compile_conditions([["user.name", "regexp", "?"]], params=["^J"])
        finally:
            OperatorRegistry.unregister("regexp")
        assert "regexp" not in OperatorRegistry.registered_operators()
        assert fragments == ["`user`.`name` REGEXP '^J'"]


# ---------------------------------------------------------------------------
# Degenerate sequence values
# ---------------------------------------------------------------------------


class TestDegenerateValues:
    @pytest.mark.parametrize(
        ("op", "value"),
        [
            ("between", 5),
            ("between", [1, 2, 3]),
            ("between", None),
            ("in", "a,b"),
            ("not in", None),
        ],
    )
    def test_malformed_value_renders_empty_fragment(self, compile_conditions, op, value):
        assert compile_conditions([["user.id", op, value]]) == [""]

    def test_malformed_value_raises_in_strict_mode(self, compile_conditions):
        with pytest.raises(MalformedConditionError):
            compile_conditions([["user.id", "in", "a"]], strict=True)

    def test_empty_in_list(self, compile_conditions):
        assert compile_conditions([["user.id", "in", []]]) == ["`user`.`id` IN ()"]


# ---------------------------------------------------------------------------
# Groups and raw fragments
# ---------------------------------------------------------------------------


class TestGroups:
    def test_where_scenario(self, compile_conditions):
        fragments = compile_conditions(
            [
                ["user.active", "=", True],
                {"or": [["user.first_name", "=", "?"], ["user.last_name", "=", "?"]]},
            ],
            params=["John", "Doe"],
        )
        assert " AND ".join(fragments) == (
            "`user`.`active` = 1 AND "
            "(`user`.`first_name` = 'John' OR `user`.`last_name` = 'Doe')"
        )

    def test_nested_groups_are_fully_parenthesized(self, compile_conditions):
        conditions = [["user.a", "=", 1]]
        for depth in range(4):
            combinator = "or" if depth % 2 else "and"
            conditions = [{combinator: [*conditions, [f"user.c{depth}", "=", depth]]}]
        (fragment,) = compile_conditions(conditions)
        assert fragment.count("(") == 4
        assert fragment.count(")") == 4
        assert fragment == (
            "((((`user`.`a` = 1 AND `user`.`c0` = 0) OR `user`.`c1` = 1)"
            " AND `user`.`c2` = 2) OR `user`.`c3` = 3)"
        )

    def test_empty_group(self, compile_conditions):
        assert compile_conditions([{"and": []}]) == ["()"]

    def test_raw_fragment_is_verbatim(self, compile_conditions):
        raw = "DATE(user.created) = '2024-01-01' OR 1 = 1"
        assert compile_conditions([raw]) == [raw]

    def test_positional_parameters_follow_resolution_order(self, compile_conditions):
        fragments = compile_conditions(
            [
                ["user.a", "=", "?"],
                {"and": [["user.b", "=", "?"], {"or": [["user.c", "in", ["?", "?"]]]}]},
                ["user.d", "=", "?"],
            ],
            params=[1, 2, 3, 4, 5],
        )
        assert fragments == [
            "`user`.`a` = 1",
            "(`user`.`b` = 2 AND (`user`.`c` IN ('3','4')))",
            "`user`.`d` = 5",
        ]
