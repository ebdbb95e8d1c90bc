"""Per-builder state and per-build runtime context.

``IdentifierRegistry`` and ``ParameterStore`` belong to one builder and grow
as clauses and parameters are declared.  ``RuntimeContext`` belongs to one
``build()`` call: it holds the positional parameter cursor and is threaded
through every compiler and resolver call of that build, so building twice
yields the same text.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from simplesql.schema.config import BuilderConfig


class IdentifierRegistry:
    """Table names and aliases introduced by the statement being built.

    A dotted token is quoted as ``table.column`` only when its first segment
    is registered here.
    """

    def __init__(self) -> None:
        self._names: list[str] = []

    def register(self, name: Any) -> None:
        name = str(name)
        if name not in self._names:
            self._names.append(name)

    def is_registered(self, name: str) -> bool:
        return name in self._names

    __contains__ = is_registered

    def __len__(self) -> int:
        return len(self._names)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._names)


class ParameterStore:
    """Positional and named values for ``?`` / ``?:name`` placeholders.

    Positional values are kept by slot index so later ``merge`` calls can
    overwrite individual slots; a gap stops positional consumption the same
    way an exhausted list does.
    """

    def __init__(self) -> None:
        self._positional: dict[int, Any] = {}
        self._named: dict[str, Any] = {}

    def merge(self, params: Sequence[Any] | Mapping[Any, Any]) -> None:
        """Merge ``params`` into the store, overwriting existing slots / names.

        Args:
            params: A sequence (slots ``0..n-1``) or a mapping.  Mapping keys
                that are ints or digit-only strings address positional slots;
                every other key is a name.  A digit-only ``?:0`` placeholder
                reads the positional slot of the same index.
        """
        if isinstance(params, Mapping):
            for key, value in params.items():
                slot = _slot_index(key)
                if slot is None:
                    self._named[str(key)] = value
                else:
                    self._positional[slot] = value
            return
        for index, value in enumerate(params):
            self._positional[index] = value

    def has_positional(self, index: int) -> bool:
        return index in self._positional

    def positional(self, index: int) -> Any:
        return self._positional[index]

    def has_named(self, name: str) -> bool:
        return name in self._named

    def named(self, name: str) -> Any:
        return self._named[name]

    @property
    def positional_count(self) -> int:
        return len(self._positional)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._named)


def _slot_index(key: Any) -> int | None:
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, str) and key.isdigit():
        return int(key)
    return None


@dataclass
class RuntimeContext:
    """Positional parameter cursor for a single ``build()`` call."""

    cursor: int = 0

    def advance(self) -> int:
        """Return the current cursor position and move past it."""
        position = self.cursor
        self.cursor += 1
        return position


@dataclass(frozen=True)
class CompilationContext:
    """The per-builder state shared by every sub-builder.

    Attributes:
        registry: Registered table names and aliases.
        params: Supplied parameter values.
        config: Builder options.
    """

    registry: IdentifierRegistry = field(default_factory=IdentifierRegistry)
    params: ParameterStore = field(default_factory=ParameterStore)
    config: BuilderConfig = field(default_factory=BuilderConfig)
