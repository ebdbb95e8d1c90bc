"""Shared pytest fixtures for simplesql unit and integration tests."""
from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

import pytest

from simplesql.compile.conditions import ConditionCompiler
from simplesql.compile.context import RuntimeContext
from simplesql.compile.resolver import ValueResolver
from simplesql.schema.conditions import to_conditions
from tests.fixtures import make_context

CompileFn = Callable[..., list[str]]


@pytest.fixture()
def compile_conditions() -> CompileFn:
    """Compile a raw condition list to its fragments in a fresh context."""

    def _compile(
        conditions: list[Any],
        params: Sequence[Any] | Mapping[str, Any] | None = None,
        tables: Sequence[str] = ("user",),
        strict: bool = False,
    ) -> list[str]:
        ctx = make_context(tables, params, strict)
        compiler = ConditionCompiler(ctx, ValueResolver(ctx))
        return compiler.compile(to_conditions(conditions, strict=strict), RuntimeContext())

    return _compile


@pytest.fixture()
def resolver() -> ValueResolver:
    """Resolver with ``user`` and ``u`` registered and no parameters."""
    return ValueResolver(make_context(tables=("user", "u")))
