"""Test fixtures: sample DDL, seed rows and compilation contexts."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from simplesql.compile.context import CompilationContext
from simplesql.schema.config import BuilderConfig

_FIXTURES_DIR = Path(__file__).parent

USERS = [
    (1, "John", "Doe", 30, 1, "jd", "NZ"),
    (2, "Jane", "Doe", 17, 1, "jane", "AU"),
    (3, "Bob", "Smith", 70, 0, "bob", "NZ"),
    (4, "Alice", "Jones", 45, 1, "al", "NZ"),
]

ADDRESSES = [
    (1, 1, "Wellington"),
    (2, 1, "Auckland"),
    (3, 4, "Sydney"),
]


def load_ddl() -> str:
    """Return the sample SQLite DDL."""
    return (_FIXTURES_DIR / "ddl_sqlite.sql").read_text()


def make_context(
    tables: Sequence[str] = ("user",),
    params: Sequence[Any] | Mapping[str, Any] | None = None,
    strict: bool = False,
) -> CompilationContext:
    """A compilation context with ``tables`` registered and ``params`` merged."""
    ctx = CompilationContext(config=BuilderConfig(strict=strict))
    for table in tables:
        ctx.registry.register(table)
    if params is not None:
        ctx.params.merge(params)
    return ctx
