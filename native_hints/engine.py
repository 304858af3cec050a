from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .base import GeneratedArtifact, GenerationOptions
from .collector import collect, collect_mappings
from .config import load_target_options, resolve_version
from .descriptors import load_descriptors
from .errors import GenerationError
from .model import HintDeclaration, HintRegistry
from .registry import TargetRegistry

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RunResult:
    hints: HintRegistry
    artifacts: list[GeneratedArtifact]
    version: str


def _version_dir(sources: list[Path]) -> Path | None:
    if not sources:
        return None
    first = Path(sources[0])
    return first if first.is_dir() else first.parent


def run_generation(
    *,
    registry: TargetRegistry,
    target_name: str,
    output_dir: Path,
    version: str | None = None,
    sources: Iterable[Path] = (),
    declarations: Iterable[HintDeclaration | Mapping[str, Any]] = (),
    known_types: Collection[str] | None = None,
    allow_duplicate_triggers: bool = True,
    options_file: Path | None = None,
    extra: dict | None = None,
) -> RunResult:
    """
    Load, collect and emit hints with one target.

    Declarations from descriptor files come first, followed by the in-memory
    ``declarations``. Target options are read from ``options_file`` and then
    overridden by ``extra``. Without an explicit ``version`` the git tag or
    commit of the first source is used. Nothing is written unless every
    declaration is valid and the whole output renders.
    """
    target = registry.get(target_name)
    sources = list(sources)
    try:
        loaded: list[HintDeclaration] = load_descriptors(sources)
        loaded.extend(collect_mappings(declarations))
        hints = collect(
            loaded,
            known_types=known_types,
            allow_duplicate_triggers=allow_duplicate_triggers,
        )
        effective_extra = load_target_options(options_file) if options_file is not None else {}
    except GenerationError:
        raise
    except Exception as exc:  # pragma: no cover - defensive coding
        raise GenerationError(
            f"Failed to collect hints for target '{target_name}' into output_dir={output_dir}"
        ) from exc
    effective_extra.update(extra or {})

    if version is None:
        version = resolve_version(_version_dir(sources))
    options = GenerationOptions(
        version=version,
        output_dir=Path(output_dir),
        extra=effective_extra,
    )
    try:
        artifacts = target.generate(hints, options)
    except GenerationError:
        raise
    except Exception as exc:  # pragma: no cover - defensive coding
        raise GenerationError(
            f"Target '{target_name}' failed while generating artifacts into {output_dir}"
        ) from exc

    for artifact in artifacts:
        logger.info("Generated %s artifact %s (version %s)", artifact.artifact_type, artifact.path, version)
    return RunResult(hints=hints, artifacts=artifacts, version=version)
