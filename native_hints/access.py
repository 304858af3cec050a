"""Access bits and their mapping onto reflect-config flag names."""
from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from typing import Any

from .errors import ValidationError


class AccessBits(enum.IntFlag):
    """Reflective capabilities retained for a type after native compilation."""

    CLASS = 0x01
    DECLARED_CONSTRUCTORS = 0x02
    PUBLIC_CONSTRUCTORS = 0x04
    DECLARED_METHODS = 0x08
    PUBLIC_METHODS = 0x10
    DECLARED_FIELDS = 0x20
    PUBLIC_FIELDS = 0x40

    NONE = 0
    LOAD_AND_CONSTRUCT = CLASS | DECLARED_CONSTRUCTORS
    ALL = (
        CLASS
        | DECLARED_CONSTRUCTORS
        | PUBLIC_CONSTRUCTORS
        | DECLARED_METHODS
        | PUBLIC_METHODS
        | DECLARED_FIELDS
        | PUBLIC_FIELDS
    )


# Single bits in definition order; composites are aliases and never listed.
MEMBER_BITS: tuple[AccessBits, ...] = (
    AccessBits.CLASS,
    AccessBits.DECLARED_CONSTRUCTORS,
    AccessBits.PUBLIC_CONSTRUCTORS,
    AccessBits.DECLARED_METHODS,
    AccessBits.PUBLIC_METHODS,
    AccessBits.DECLARED_FIELDS,
    AccessBits.PUBLIC_FIELDS,
)

# CLASS has no flag: a reflect-config record registering the type is the class access.
FLAG_NAMES: dict[AccessBits, str] = {
    AccessBits.DECLARED_CONSTRUCTORS: "allDeclaredConstructors",
    AccessBits.PUBLIC_CONSTRUCTORS: "allPublicConstructors",
    AccessBits.DECLARED_METHODS: "allDeclaredMethods",
    AccessBits.PUBLIC_METHODS: "allPublicMethods",
    AccessBits.DECLARED_FIELDS: "allDeclaredFields",
    AccessBits.PUBLIC_FIELDS: "allPublicFields",
}

_BITS_BY_FLAG = {flag: bit for bit, flag in FLAG_NAMES.items()}
_BITS_BY_NAME = {bit.name: bit for bit in MEMBER_BITS}
_BITS_BY_NAME.update(
    {
        "NONE": AccessBits.NONE,
        "LOAD_AND_CONSTRUCT": AccessBits.LOAD_AND_CONSTRUCT,
        "ALL": AccessBits.ALL,
    }
)


def _bit_from_name(name: str) -> AccessBits:
    key = name.strip().upper()
    if key not in _BITS_BY_NAME:
        supported = ", ".join(_BITS_BY_NAME)
        raise ValidationError(
            f"Unknown access bit '{name}'. Supported bits: {supported}",
            field="access",
        )
    return _BITS_BY_NAME[key]


def parse_access(value: Any) -> AccessBits:
    """
    Parse an access mask from any supported declaration form.

    Accepted forms are an AccessBits value, a plain int, a string such as
    ``"CLASS|PUBLIC_CONSTRUCTORS"`` and a list of bit names. Undefined bits
    and unknown names raise ValidationError.
    """
    if isinstance(value, AccessBits):
        return value
    if isinstance(value, bool):
        raise ValidationError(f"Access mask must not be a boolean: {value!r}", field="access")
    if isinstance(value, int):
        if value < 0 or value & ~int(AccessBits.ALL):
            raise ValidationError(
                f"Access mask 0x{value:x} contains undefined bits "
                f"(defined bits: 0x{int(AccessBits.ALL):x})",
                field="access",
            )
        return AccessBits(value)
    if isinstance(value, str):
        parts = [part for part in value.split("|") if part.strip()]
        if not parts:
            raise ValidationError("Access mask must not be empty", field="access")
        return parse_access([_bit_from_name(part) for part in parts])
    if isinstance(value, Iterable):
        mask = AccessBits.NONE
        for item in value:
            mask |= item if isinstance(item, AccessBits) else parse_access(item)
        return mask
    raise ValidationError(f"Unsupported access mask value: {value!r}", field="access")


def access_names(mask: AccessBits) -> list[str]:
    """Return the names of the single bits set in ``mask``, in definition order."""
    return [bit.name for bit in MEMBER_BITS if mask & bit]


def access_flags(mask: AccessBits) -> dict[str, bool]:
    """Translate ``mask`` into every reflect-config flag, set or not."""
    return {flag: bool(mask & bit) for bit, flag in FLAG_NAMES.items()}


def access_from_flags(flags: Mapping[str, Any], *, class_access: bool = True) -> AccessBits:
    """
    Inverse of access_flags().

    Flags carry no CLASS bit; ``class_access`` supplies it. A reflect-config
    record always registers its type, so the default is True.
    """
    if not isinstance(flags, Mapping):
        raise ValidationError(f"Access flags must be a mapping, got {type(flags).__name__}", field="flags")
    mask = AccessBits.CLASS if class_access else AccessBits.NONE
    for flag, enabled in flags.items():
        if flag not in _BITS_BY_FLAG:
            raise ValidationError(f"Unknown access flag '{flag}'", field="flags")
        if enabled:
            mask |= _BITS_BY_FLAG[flag]
    return mask
