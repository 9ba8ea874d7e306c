"""I/O helpers: atomic file writes and the YAML codec."""
from __future__ import annotations

from .core import PathLike, atomic_write, copy_stream, ensure_parent_dir, read_text, write_text
from .yaml import YamlCodec

__all__ = [
    "PathLike",
    "atomic_write",
    "copy_stream",
    "ensure_parent_dir",
    "read_text",
    "write_text",
    "YamlCodec",
]
