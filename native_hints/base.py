from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .model import HintRegistry
from .output import write_atomic


@dataclass(slots=True)
class GenerationOptions:
    version: str
    output_dir: Path
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class GeneratedArtifact:
    path: Path
    artifact_type: str
    entry_count: int = 0


class GeneratorTarget(ABC):
    """Base contract for hint emitters (reflect-config, manifest, ...)."""

    name: str
    artifact_type: str
    default_filename: str

    @abstractmethod
    def render(self, registry: HintRegistry, options: GenerationOptions) -> str:
        """Serialize the whole registry in memory; raise SerializationError on unencodable values."""

    def output_path(self, options: GenerationOptions) -> Path:
        filename = str(options.extra.get("filename") or self.default_filename)
        return Path(options.output_dir) / filename

    def generate(
        self,
        registry: HintRegistry,
        options: GenerationOptions,
    ) -> list[GeneratedArtifact]:
        """Render, then write the artifact atomically."""
        text = self.render(registry, options)
        path = write_atomic(self.output_path(options), text)
        return [GeneratedArtifact(path=path, artifact_type=self.artifact_type, entry_count=len(registry))]
