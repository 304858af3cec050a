"""Per-trigger hint manifest target and its decoder.

Unlike reflect-config, the manifest keeps the ``access`` bit names next to the
flags, so every mask (with or without CLASS) decodes back exactly.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..access import AccessBits, access_flags, access_from_flags, access_names, parse_access
from ..base import GenerationOptions, GeneratorTarget
from ..collector import validate_declaration
from ..errors import ParsingError, SerializationError, ValidationError
from ..model import HintDeclaration, HintEntry, HintRegistry
from ..naming import encode_jvm_name
from ..registry import register_target


def _manifest_entry(entry: HintEntry) -> dict[str, Any]:
    def encode(name: str, field: str) -> str:
        return encode_jvm_name(name, trigger=entry.trigger, field=field, source=entry.source)

    return {
        "trigger": encode(entry.trigger, "trigger"),
        "source": entry.source,
        "types": [encode(name, "types") for name in entry.type_refs],
        "typeNames": [encode(name, "typeNames") for name in entry.type_names],
        "access": access_names(entry.access),
        "flags": access_flags(entry.access),
    }


@register_target
class ManifestTarget(GeneratorTarget):
    name = "manifest"
    artifact_type = "hint-manifest"
    default_filename = "hints-manifest.json"

    def render(self, registry: HintRegistry, options: GenerationOptions) -> str:
        indent = int(options.extra.get("indent", 2))
        document = {
            "version": options.version,
            "hints": [_manifest_entry(entry) for entry in registry],
        }
        return json.dumps(document, indent=indent, ensure_ascii=False) + "\n"


def _decode_entry(raw: Any, index: int) -> HintEntry:
    if not isinstance(raw, dict):
        raise ParsingError(f"Manifest hint #{index} must be an object")
    for key in ("types", "typeNames", "access"):
        if not isinstance(raw.get(key), list):
            raise ParsingError(f"Manifest hint #{index}: '{key}' must be a list")
    if not isinstance(raw.get("flags"), dict):
        raise ParsingError(f"Manifest hint #{index}: 'flags' must be an object")
    source = raw.get("source")
    if source is not None and not isinstance(source, str):
        raise ParsingError(f"Manifest hint #{index}: 'source' must be a string")

    try:
        declared = parse_access(raw["access"])
        flagged = access_from_flags(raw["flags"], class_access=bool(declared & AccessBits.CLASS))
        if declared != flagged:
            raise ValidationError(
                f"access {access_names(declared)} disagrees with flags {access_names(flagged)}",
                field="flags",
            )
        for name in raw["types"] + raw["typeNames"]:
            if isinstance(name, str):
                encode_jvm_name(name, trigger=raw.get("trigger"), field="types", source=source)
        entry = validate_declaration(
            HintDeclaration(
                trigger=raw.get("trigger"),
                types=raw["types"],
                type_names=raw["typeNames"],
                access=declared,
                source=source,
            )
        )
    except (ValidationError, SerializationError) as exc:
        raise ParsingError(f"Manifest hint #{index}: {exc}") from exc
    return entry


def read_manifest(path: Path) -> HintRegistry:
    """Decode a manifest written by ManifestTarget back into a HintRegistry."""
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ParsingError(f"Cannot read hint manifest {path}: {exc}") from exc
    if not isinstance(payload, dict) or not isinstance(payload.get("hints"), list):
        raise ParsingError(f"Hint manifest {path} must be an object with a 'hints' list")
    return HintRegistry.of([_decode_entry(raw, index) for index, raw in enumerate(payload["hints"], start=1)])
