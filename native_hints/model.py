"""Dataclasses for declarations and the collected registry: HintDeclaration, HintEntry, HintRegistry."""
from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from .access import AccessBits


@dataclass(slots=True)
class HintDeclaration:
    trigger: Any
    types: Any = field(default_factory=list)
    type_names: Any = field(default_factory=list)
    access: Any = None  # None selects AccessBits.ALL
    source: str | None = None  # e.g. "hints.yaml#2" for error messages


@dataclass(frozen=True, slots=True)
class HintEntry:
    trigger: str
    type_refs: tuple[str, ...]
    type_names: tuple[str, ...]
    access: AccessBits
    source: str | None = None

    def all_types(self) -> Iterator[str]:
        yield from self.type_refs
        yield from self.type_names


@dataclass(frozen=True, slots=True)
class HintRegistry:
    """Collected hint entries in declaration order; duplicates are kept as-is."""

    entries: tuple[HintEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[HintEntry]:
        return iter(self.entries)

    def triggers(self) -> list[str]:
        """One trigger per entry, repeats included."""
        return [entry.trigger for entry in self.entries]

    def for_trigger(self, trigger: str) -> list[HintEntry]:
        return [entry for entry in self.entries if entry.trigger == trigger]

    @classmethod
    def of(cls, entries: Sequence[HintEntry]) -> HintRegistry:
        return cls(entries=tuple(entries))
