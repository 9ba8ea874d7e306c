"""File primitives for configuration files.

- Atomic writes with fsync (temp file in the target directory, then replace)
- UTF-8 text reads
- Parent directory creation for bootstrapped files
"""
from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import IO, Any, BinaryIO, Callable, Optional, TextIO, Union

PathLike = Union[str, Path]


def ensure_parent_dir(path: PathLike) -> None:
    """Ensure the parent directory for ``path`` exists."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def atomic_write(
    path: PathLike,
    write_fn: Callable[[IO[Any]], None],
    *,
    binary: bool = False,
    encoding: str = "utf-8",
) -> None:
    """Write to ``path`` atomically using a temp file + fsync + rename.

    - Data is written to a temporary file in the same directory
    - The file is fsync'd, then atomically replaces ``path``
    - Any leftover temp file is cleaned up on failure, and ``path`` is left
      untouched

    The parent directory must already exist.

    Args:
        path: Target file path
        write_fn: Callable that writes content to the file object
        binary: Open the temp file in binary mode (``encoding`` is ignored)
        encoding: Text encoding (default: utf-8)
    """
    path = Path(path)
    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "wb" if binary else "w",
            encoding=None if binary else encoding,
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())

        os.replace(str(tmp_path), str(path))
    finally:
        if tmp_path is not None and tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                # Best-effort cleanup
                pass


def write_text(path: PathLike, content: str) -> None:
    """Atomically write UTF-8 text to ``path``."""

    def _writer(f: TextIO) -> None:
        f.write(content)

    atomic_write(path, _writer)


def read_text(path: PathLike) -> str:
    """Read a UTF-8 text file.

    Raises:
        FileNotFoundError: If the file does not exist
        Other I/O errors are propagated to callers
    """
    return Path(path).read_text(encoding="utf-8")


def copy_stream(source: BinaryIO, path: PathLike) -> None:
    """Atomically copy the bytes of ``source`` to ``path``.

    A failure while reading ``source`` leaves no file behind.
    """

    def _writer(f: BinaryIO) -> None:
        shutil.copyfileobj(source, f)

    atomic_write(path, _writer, binary=True)


__all__ = [
    "PathLike",
    "ensure_parent_dir",
    "atomic_write",
    "write_text",
    "read_text",
    "copy_stream",
]
