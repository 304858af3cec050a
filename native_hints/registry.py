from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath

from .base import GeneratorTarget


@dataclass(slots=True)
class TargetRegistry:
    """Emitter targets keyed by name; each owns a distinct default output file."""

    _targets: dict[str, GeneratorTarget] = field(default_factory=dict)

    def register(self, target: GeneratorTarget) -> None:
        key = target.name.lower().strip()
        if not key:
            raise ValueError("Target name must not be empty.")
        if key in self._targets:
            raise ValueError(f"Target '{key}' already registered.")

        filename = PurePosixPath(getattr(target, "default_filename", None) or "")
        if not filename.name or filename.is_absolute() or ".." in filename.parts:
            raise ValueError(
                f"Target '{key}' needs a relative default filename, got {getattr(target, 'default_filename', None)!r}."
            )
        for other_key, other in self._targets.items():
            if PurePosixPath(other.default_filename) == filename:
                raise ValueError(
                    f"Targets '{other_key}' and '{key}' would both write {filename} by default."
                )
        self._targets[key] = target

    def get(self, name: str) -> GeneratorTarget:
        """Look up a target by name (case-insensitive)."""
        key = name.lower().strip()
        if key not in self._targets:
            supported = ", ".join(sorted(self._targets)) or "<none>"
            raise ValueError(f"Unknown target '{name}'. Supported targets: {supported}")
        return self._targets[key]

    def names(self) -> list[str]:
        return sorted(self._targets)

    def default_outputs(self) -> dict[str, str]:
        """Target name -> default artifact filename."""
        return {key: target.default_filename for key, target in sorted(self._targets.items())}


_TARGET_CLASSES: list[type[GeneratorTarget]] = []


def register_target(cls: type[GeneratorTarget]) -> type[GeneratorTarget]:
    """Class decorator adding a built-in target to build_default_registry()."""
    _TARGET_CLASSES.append(cls)
    return cls


def build_default_registry() -> TargetRegistry:
    """Registry with one fresh instance of every built-in target."""
    from . import targets as _targets  # noqa: F401

    registry = TargetRegistry()
    for cls in _TARGET_CLASSES:
        registry.register(cls())
    return registry
