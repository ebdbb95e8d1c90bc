"""simplesql schema models: conditions, tokens, payloads, configuration."""
from simplesql.schema.conditions import Condition, Group, Leaf, Raw, to_condition, to_conditions
from simplesql.schema.config import BuilderConfig, BuilderConfigBuilder
from simplesql.schema.operators import Combinator, ConditionOp
from simplesql.schema.payload import JoinSpec, QueryPayload, StatementSpec
from simplesql.schema.statements import JoinDecl, Statement, StatementKind, TableRef
from simplesql.schema.tokens import TokenKind, classify

__all__ = [
    "Condition",
    "Group",
    "Leaf",
    "Raw",
    "to_condition",
    "to_conditions",
    "BuilderConfig",
    "BuilderConfigBuilder",
    "Combinator",
    "ConditionOp",
    "QueryPayload",
    "StatementSpec",
    "JoinSpec",
    "JoinDecl",
    "Statement",
    "StatementKind",
    "TableRef",
    "TokenKind",
    "classify",
]
