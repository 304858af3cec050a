from __future__ import annotations


class GenerationError(Exception):
    """Base error for all hint collection and emission failures."""


class ParsingError(GenerationError):
    """Errors raised while reading descriptor files."""


class _LocatedError(GenerationError):
    """Error that points back at the declaration that caused it."""

    def __init__(
        self,
        message: str,
        *,
        trigger: str | None = None,
        field: str | None = None,
        source: str | None = None,
    ) -> None:
        self.reason = message
        self.trigger = trigger
        self.field = field
        self.source = source
        context = []
        if source:
            context.append(f"source={source}")
        if trigger:
            context.append(f"trigger={trigger}")
        if field:
            context.append(f"field={field}")
        if context:
            message = f"{message} ({', '.join(context)})"
        super().__init__(message)


class ValidationError(_LocatedError):
    """Errors raised while validating hint declarations."""


class DuplicateTriggerError(ValidationError):
    """A trigger was declared twice while trigger uniqueness is enforced."""


class SerializationError(_LocatedError):
    """A value cannot be encoded in the target output schema."""


class SinkError(GenerationError, OSError):
    """The output artifact could not be written."""
