"""Atomic artifact writes."""
from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from .errors import SinkError

logger = logging.getLogger(__name__)


def _target_mode(path: Path) -> int:
    """Mode of the file being replaced, else what open() would create under the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_atomic(path: Path, text: str) -> Path:
    """
    Write ``text`` to ``path`` so readers see either the old file or the new one.

    The content goes to a temporary file in the target directory, is flushed
    to disk, then renamed over ``path``. The result keeps the mode of the file
    it replaces (new files follow the umask). On failure the temporary file
    is removed and the previous ``path`` is left untouched.
    """
    path = Path(path)
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        mode = _target_mode(path)
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as handle:
            tmp_name = handle.name
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as exc:
        raise SinkError(f"Failed to write {path}: {exc}") from exc
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
    logger.info("Wrote %s (%d bytes)", path, len(text.encode("utf-8")))
    return path
