"""In-source hint declarations attached to marker classes with decorators."""
from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Callable, TypeVar

from .access import AccessBits
from .model import HintDeclaration

T = TypeVar("T", bound=type)


class HintCatalog:
    """
    Collects declarations made with stacked ``configuration_hint`` decorators.

        catalog = HintCatalog()

        @catalog.configuration_hint("com.example.WebConfig", types=["com.example.Codec"])
        @catalog.configuration_hint("com.example.Registrar", types=["com.example.PostProcessor"])
        class Hints:
            pass

    Declarations are kept in source order: marker classes in the order they
    were first decorated, and within a class the top-most decorator first.
    Blocks are keyed by the class object itself, so two classes sharing a
    qualified name never replace each other.
    """

    def __init__(self) -> None:
        # Insertion order of the dict is the order classes were first decorated.
        self._blocks: dict[type, list[HintDeclaration]] = {}

    def configuration_hint(
        self,
        trigger: str,
        *,
        types: Sequence[str] = (),
        type_names: Sequence[str] = (),
        access: AccessBits | int | str | Sequence[str] | None = None,
    ) -> Callable[[T], T]:
        def decorator(cls: T) -> T:
            block = self._blocks.setdefault(cls, [])
            # Stacked decorators apply bottom-up.
            block.insert(
                0,
                HintDeclaration(
                    trigger=trigger,
                    types=list(types),
                    type_names=list(type_names),
                    access=access,
                    source=f"{cls.__module__}.{cls.__qualname__}",
                ),
            )
            return cls

        return decorator

    def declarations(self) -> list[HintDeclaration]:
        return [declaration for block in self._blocks.values() for declaration in block]

    def __len__(self) -> int:
        return sum(len(block) for block in self._blocks.values())

    def __iter__(self) -> Iterator[HintDeclaration]:
        return iter(self.declarations())
