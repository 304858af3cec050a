"""Target options files and artifact version resolution."""
from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any

import yaml

from .errors import ParsingError

logger = logging.getLogger(__name__)


def resolve_version(cwd: Path | None = None) -> str:
    """
    Resolve version from git (in precedence order): tag at HEAD, short commit, else 'undefined'.
    """
    work_dir = cwd if cwd is not None and cwd.exists() else Path.cwd()
    try:
        for command in (
            ["git", "describe", "--tags", "--exact-match"],
            ["git", "rev-parse", "--short", "HEAD"],
        ):
            r = subprocess.run(
                command,
                cwd=work_dir,
                capture_output=True,
                text=True,
                timeout=5,
            )
            if r.returncode == 0 and r.stdout.strip():
                return r.stdout.strip()
    except (FileNotFoundError, subprocess.TimeoutExpired):
        pass
    logger.debug("No git version found under %s", work_dir)
    return "undefined"


def load_target_options(config_path: Path) -> dict[str, Any]:
    """Read target options (filename, indent, conditional, ...) from a JSON or YAML mapping."""
    config_file = Path(config_path)
    try:
        text = config_file.read_text(encoding="utf-8")
    except OSError as exc:
        raise ParsingError(f"Cannot read options file {config_file}: {exc}") from exc
    try:
        if config_file.suffix.lower() in {".yaml", ".yml"}:
            payload = yaml.safe_load(text) or {}
        else:
            payload = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ParsingError(f"Malformed options file {config_file}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ParsingError(f"Options file {config_file} must contain a mapping.")
    return payload
