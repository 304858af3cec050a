"""Built-in emitter targets; importing this package registers them."""

from .manifest import ManifestTarget, read_manifest
from .reflect_config import ReflectConfigTarget

__all__ = [
    "ManifestTarget",
    "ReflectConfigTarget",
    "read_manifest",
]
