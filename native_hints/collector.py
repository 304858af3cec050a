from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Mapping
from typing import Any

from .access import AccessBits, access_names, parse_access
from .errors import DuplicateTriggerError, ValidationError
from .model import HintDeclaration, HintEntry, HintRegistry

logger = logging.getLogger(__name__)

_KEY_ALIASES = {
    "trigger": "trigger",
    "value": "trigger",
    "types": "types",
    "typeRefs": "types",
    "typeNames": "type_names",
    "type_names": "type_names",
    "access": "access",
    "accessMask": "access",
}


def collect_mappings(records: Iterable[Any], *, source: str = "<inline>") -> list[HintDeclaration]:
    """Convert plain descriptor records into HintDeclarations."""
    declarations: list[HintDeclaration] = []
    for index, record in enumerate(records, start=1):
        where = f"{source}#{index}"
        if isinstance(record, HintDeclaration):
            declarations.append(record)
            continue
        if not isinstance(record, Mapping):
            raise ValidationError(
                f"Hint declaration must be a mapping, got {type(record).__name__}",
                source=where,
            )
        values: dict[str, Any] = {}
        for key, value in record.items():
            target = _KEY_ALIASES.get(key)
            if target is None:
                raise ValidationError(
                    f"Unknown key '{key}' in hint declaration",
                    trigger=record.get("trigger") if isinstance(record.get("trigger"), str) else None,
                    field=str(key),
                    source=where,
                )
            if target in values:
                raise ValidationError(
                    f"Key '{key}' duplicates another spelling of '{target}'",
                    field=str(key),
                    source=where,
                )
            values[target] = value
        if "trigger" not in values:
            raise ValidationError("Hint declaration has no trigger", field="trigger", source=where)
        declarations.append(
            HintDeclaration(
                trigger=values["trigger"],
                types=values.get("types"),
                type_names=values.get("type_names"),
                access=values.get("access"),
                source=where,
            )
        )
    return declarations


def _type_list(value: Any, *, trigger: str, field: str, source: str | None) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise ValidationError(
            f"'{field}' must be a list of type names, got {type(value).__name__}",
            trigger=trigger,
            field=field,
            source=source,
        )
    names: list[str] = []
    for item in value:
        if not isinstance(item, str) or not item.strip():
            raise ValidationError(
                f"'{field}' entries must be non-empty strings, got {item!r}",
                trigger=trigger,
                field=field,
                source=source,
            )
        names.append(item.strip())
    return tuple(names)


def validate_declaration(
    declaration: HintDeclaration,
    known_types: Collection[str] | None = None,
) -> HintEntry:
    """Turn one raw declaration into a HintEntry or raise ValidationError."""
    source = declaration.source
    trigger = declaration.trigger
    if not isinstance(trigger, str) or not trigger.strip():
        raise ValidationError(
            f"Trigger must be a non-empty string, got {trigger!r}",
            field="trigger",
            source=source,
        )
    trigger = trigger.strip()

    type_refs = _type_list(declaration.types, trigger=trigger, field="types", source=source)
    type_names = _type_list(declaration.type_names, trigger=trigger, field="typeNames", source=source)
    if not type_refs and not type_names:
        raise ValidationError(
            "Hint declaration names no types",
            trigger=trigger,
            field="types",
            source=source,
        )

    try:
        access = AccessBits.ALL if declaration.access is None else parse_access(declaration.access)
    except ValidationError as exc:
        raise ValidationError(exc.reason, trigger=trigger, field="access", source=source) from exc

    if known_types is not None:
        unresolved = [name for name in type_refs if name not in known_types]
        if unresolved:
            raise ValidationError(
                f"Unresolved type reference(s): {', '.join(unresolved)}",
                trigger=trigger,
                field="types",
                source=source,
            )

    return HintEntry(
        trigger=trigger,
        type_refs=type_refs,
        type_names=type_names,
        access=access,
        source=source,
    )


def collect(
    declarations: Iterable[HintDeclaration | Mapping[str, Any]],
    *,
    known_types: Collection[str] | None = None,
    allow_duplicate_triggers: bool = True,
) -> HintRegistry:
    """
    Validate declarations and build a HintRegistry.

    One entry is produced per declaration, in declaration order. Entries that
    share a trigger stay separate unless ``allow_duplicate_triggers`` is False,
    in which case the repeat raises DuplicateTriggerError.
    """
    entries: list[HintEntry] = []
    seen: dict[str, str | None] = {}
    for declaration in collect_mappings(declarations):
        entry = validate_declaration(declaration, known_types)
        if entry.trigger in seen and not allow_duplicate_triggers:
            first = seen[entry.trigger] or "<unknown>"
            raise DuplicateTriggerError(
                f"Trigger already declared at {first}",
                trigger=entry.trigger,
                field="trigger",
                source=entry.source,
            )
        seen.setdefault(entry.trigger, entry.source)
        logger.debug(
            "Collected hint for %s: %d type(s), %d type name(s), access=%s",
            entry.trigger,
            len(entry.type_refs),
            len(entry.type_names),
            "|".join(access_names(entry.access)),
        )
        entries.append(entry)

    registry = HintRegistry.of(entries)
    logger.info("Collected %d hint entries for %d trigger(s)", len(entries), len(seen))
    return registry
