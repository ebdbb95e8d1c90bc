"""Builder configuration.

The default configuration reproduces the lenient rendering rules: malformed
``between`` / ``in`` values render an empty fragment, unrecognised condition
shapes are skipped and exhausted ``?`` placeholders are echoed back.  Strict
mode turns each of those into an error::

    from simplesql import BuilderConfig, SimpleSqlBuilder

    config = BuilderConfig.builder().strict().build()
    sql = SimpleSqlBuilder(config).select(table="user", columns=["*"]).build()
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BuilderConfig(BaseModel):
    """Options for one :class:`~simplesql.compile.builder.SimpleSqlBuilder`.

    Attributes:
        strict: Raise ``MalformedConditionError`` / ``MissingParamError``
            instead of degrading silently.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    strict: bool = False

    @classmethod
    def builder(cls) -> BuilderConfigBuilder:
        """Return a :class:`BuilderConfigBuilder` with the default options."""
        return BuilderConfigBuilder()


class BuilderConfigBuilder:
    """Fluent builder for :class:`BuilderConfig`."""

    def __init__(self) -> None:
        self._strict = False

    def strict(self, enabled: bool = True) -> BuilderConfigBuilder:
        """Fail on malformed conditions and missing positional parameters."""
        self._strict = enabled
        return self

    def build(self) -> BuilderConfig:
        return BuilderConfig(strict=self._strict)
