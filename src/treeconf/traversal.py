"""Key traversal modes for :meth:`ConfigurationSection.get_keys`.

Given a section holding the paths::

    root.section.val1
    root.section.val2
    root.val1
    val1

``ROOT`` yields ``{root, val1}``; ``LEAVES`` yields every path whose value is
not a section (``{root.section.val1, root.section.val2, root.val1, val1}``);
``ALL`` yields the leaves plus every branch (``root`` and ``root.section``).

Branch paths alone are ``get_keys(ALL) - get_keys(LEAVES)``.
"""
from __future__ import annotations

from enum import Enum


class TraversalMode(Enum):
    ROOT = "root"
    """Direct keys of the section only."""

    LEAVES = "leaves"
    """Every path, at any depth, whose value is not a section."""

    ALL = "all"
    """Every branch and leaf path."""


__all__ = ["TraversalMode"]
