"""Test helper modules for the treeconf test suite.

- io_utils: writing and reading YAML fixtures
"""
from __future__ import annotations

from .io_utils import read_yaml, write_text, write_yaml

__all__ = ["read_yaml", "write_text", "write_yaml"]
