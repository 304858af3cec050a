"""JVM binary-name checks for identifiers written into reflection configuration."""
from __future__ import annotations

import re

from .errors import SerializationError

# Dotted identifiers, '$' for nested classes, optional array suffixes.
JVM_NAME_RE = re.compile(r"(?:[^\W\d]|\$)[\w$]*(?:\.(?:[^\W\d]|\$)[\w$]*)*(?:\[\])*")


def is_jvm_name(value: str) -> bool:
    return JVM_NAME_RE.fullmatch(value) is not None


def encode_jvm_name(
    value: str,
    *,
    trigger: str | None = None,
    field: str = "name",
    source: str | None = None,
) -> str:
    """Return ``value`` unchanged if it can be written as a type name, else raise SerializationError."""
    if not is_jvm_name(value):
        raise SerializationError(
            f"Cannot encode {value!r} as a JVM type name",
            trigger=trigger,
            field=field,
            source=source,
        )
    return value
