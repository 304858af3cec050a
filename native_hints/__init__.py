"""Collect reflection hints and emit native-image reflection configuration."""

from .access import AccessBits, access_flags, access_from_flags, access_names, parse_access
from .catalog import HintCatalog
from .collector import collect, collect_mappings, validate_declaration
from .config import load_target_options, resolve_version
from .descriptors import load_descriptor, load_descriptors
from .engine import RunResult, run_generation
from .errors import (
    DuplicateTriggerError,
    GenerationError,
    ParsingError,
    SerializationError,
    SinkError,
    ValidationError,
)
from .model import HintDeclaration, HintEntry, HintRegistry
from .registry import TargetRegistry, build_default_registry, register_target

__all__ = [
    "AccessBits",
    "DuplicateTriggerError",
    "GenerationError",
    "HintCatalog",
    "HintDeclaration",
    "HintEntry",
    "HintRegistry",
    "ParsingError",
    "RunResult",
    "SerializationError",
    "SinkError",
    "TargetRegistry",
    "ValidationError",
    "access_flags",
    "access_from_flags",
    "access_names",
    "build_default_registry",
    "collect",
    "collect_mappings",
    "load_descriptor",
    "load_descriptors",
    "load_target_options",
    "parse_access",
    "register_target",
    "resolve_version",
    "run_generation",
    "validate_declaration",
]
