"""Dotted-path handling for configuration sections."""
from __future__ import annotations

from typing import Any, Tuple

from .exceptions import InvalidPathError

SEPARATOR = "."


def split_path(path: Any) -> Tuple[str, ...]:
    """Split ``path`` into its key segments.

    Raises:
        InvalidPathError: If ``path`` is not a string, is empty, or has an
            empty segment (leading, trailing or doubled separators).

    Example:
        >>> split_path("a.b.c")
        ('a', 'b', 'c')
    """
    if not isinstance(path, str) or not path:
        raise InvalidPathError(path)
    segments = tuple(path.split(SEPARATOR))
    if any(segment == "" for segment in segments):
        raise InvalidPathError(path)
    return segments


def join_path(*segments: str) -> str:
    """Join segments into a dotted path, skipping empty prefixes."""
    return SEPARATOR.join(segment for segment in segments if segment)


__all__ = ["SEPARATOR", "split_path", "join_path"]
