"""Descriptor files: JSON or YAML documents holding hint declarations."""
from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from .collector import collect_mappings
from .errors import ParsingError
from .model import HintDeclaration

logger = logging.getLogger(__name__)

DESCRIPTOR_SUFFIXES = {".json", ".yaml", ".yml"}


def _load_document(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ParsingError(f"Cannot read descriptor {path}: {exc}") from exc
    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            return json.loads(text)
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ParsingError(f"Malformed descriptor {path}: {exc}") from exc
    raise ParsingError(f"Unsupported descriptor extension: {path}")


def load_descriptor(path: Path) -> list[HintDeclaration]:
    """
    Load the declarations of one descriptor file.

    The root is either a mapping with a ``hints`` list or a bare list. An
    empty document yields no declarations.
    """
    path = Path(path)
    document = _load_document(path)
    if document is None:
        records: list[Any] = []
    elif isinstance(document, list):
        records = document
    elif isinstance(document, dict):
        unknown = sorted(set(document) - {"hints"})
        if unknown:
            raise ParsingError(f"Unknown top-level key(s) in {path}: {', '.join(unknown)}")
        records = document.get("hints") or []
        if not isinstance(records, list):
            raise ParsingError(f"'hints' in {path} must be a list")
    else:
        raise ParsingError(f"Descriptor root must be a mapping or a list: {path}")

    declarations = collect_mappings(records, source=path.name)
    logger.info("Loaded %d hint declaration(s) from %s", len(declarations), path)
    return declarations


def iter_descriptor_files(sources: Iterable[Path]) -> list[Path]:
    """Expand directories into their descriptor files (sorted); files are kept in the given order."""
    files: list[Path] = []
    for source in sources:
        source = Path(source)
        if source.is_dir():
            found = sorted(p for p in source.rglob("*") if p.is_file() and p.suffix.lower() in DESCRIPTOR_SUFFIXES)
            if not found:
                raise ParsingError(f"No descriptor files found in {source}")
            files.extend(found)
        else:
            files.append(source)
    return files


def load_descriptors(sources: Iterable[Path]) -> list[HintDeclaration]:
    declarations: list[HintDeclaration] = []
    for path in iter_descriptor_files(sources):
        declarations.extend(load_descriptor(path))
    return declarations
