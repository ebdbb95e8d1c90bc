"""simplesql compilation layer: clause declarations → SQL text."""
from simplesql.compile.builder import SimpleSqlBuilder
from simplesql.compile.conditions import ConditionCompiler
from simplesql.compile.context import (
    CompilationContext,
    IdentifierRegistry,
    ParameterStore,
    RuntimeContext,
)
from simplesql.compile.escape import sql_escape
from simplesql.compile.registry import OperatorRegistry
from simplesql.compile.resolver import ValueResolver

__all__ = [
    "SimpleSqlBuilder",
    "ConditionCompiler",
    "CompilationContext",
    "IdentifierRegistry",
    "ParameterStore",
    "RuntimeContext",
    "sql_escape",
    "OperatorRegistry",
    "ValueResolver",
]
