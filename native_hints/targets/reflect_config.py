"""GraalVM reflect-config.json target.

One record per type per hint entry, in entry order with resolved type
references before string-only type names. The trigger becomes a
``typeReachable`` condition so the compiler only keeps the metadata when the
triggering configuration class is part of the image.

The schema has no class flag: a record registers its type. A mask without
CLASS therefore renders the same record as the mask with CLASS added, and
an empty mask renders a bare ``name`` record. Use the manifest target when
the exact mask must survive.
"""
from __future__ import annotations

import json
from typing import Any

from ..access import access_flags
from ..base import GenerationOptions, GeneratorTarget
from ..model import HintEntry, HintRegistry
from ..naming import encode_jvm_name
from ..registry import register_target


def _entry_records(entry: HintEntry, *, conditional: bool) -> list[dict[str, Any]]:
    condition = None
    if conditional:
        trigger = encode_jvm_name(entry.trigger, trigger=entry.trigger, field="trigger", source=entry.source)
        condition = {"typeReachable": trigger}
    flags = {flag: True for flag, enabled in access_flags(entry.access).items() if enabled}

    records: list[dict[str, Any]] = []
    for type_name in entry.all_types():
        record: dict[str, Any] = {}
        if condition is not None:
            record["condition"] = dict(condition)
        record["name"] = encode_jvm_name(type_name, trigger=entry.trigger, source=entry.source)
        record.update(flags)
        records.append(record)
    return records


def build_reflect_config(registry: HintRegistry, *, conditional: bool = True) -> list[dict[str, Any]]:
    records: list[dict[str, Any]] = []
    for entry in registry:
        records.extend(_entry_records(entry, conditional=conditional))
    return records


@register_target
class ReflectConfigTarget(GeneratorTarget):
    name = "reflect-config"
    artifact_type = "reflect-config"
    default_filename = "reflect-config.json"

    def render(self, registry: HintRegistry, options: GenerationOptions) -> str:
        conditional = bool(options.extra.get("conditional", True))
        indent = int(options.extra.get("indent", 2))
        records = build_reflect_config(registry, conditional=conditional)
        return json.dumps(records, indent=indent, ensure_ascii=False) + "\n"

