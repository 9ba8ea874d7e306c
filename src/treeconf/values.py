"""Value model for configuration trees.

Every value stored in a section is one of a closed set of kinds:

- ``NULL``: ``None`` (only ever seen as a list element; a mapping to ``None``
  is the same as no mapping at all)
- ``INT``: a Python ``int`` in 32-bit range
- ``LONG``: a Python ``int`` in 64-bit range, outside 32-bit range
- ``DOUBLE``: a Python ``float``
- ``BOOLEAN``: ``bool``
- ``STRING``: ``str``
- ``LIST``: ``list`` of values
- ``SECTION``: a nested :class:`~treeconf.section.ConfigurationSection`

Byte, short and 32-bit float are not stored kinds; they are coerced on read
by :mod:`treeconf.converters`.
"""
from __future__ import annotations

from enum import Enum
from typing import Any

from .exceptions import UnsupportedValueError

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1
LONG_MIN = -(2**63)
LONG_MAX = 2**63 - 1


class ValueKind(Enum):
    """Stored kind of a configuration value."""

    NULL = "null"
    INT = "int"
    LONG = "long"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    STRING = "string"
    LIST = "list"
    SECTION = "section"


def kind_of(value: Any) -> ValueKind:
    """Classify a stored value.

    Raises:
        UnsupportedValueError: If ``value`` is not one of the stored kinds.
    """
    # Lazy import to avoid circular dependency
    from .section import ConfigurationSection

    if value is None:
        return ValueKind.NULL
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        if INT_MIN <= value <= INT_MAX:
            return ValueKind.INT
        if LONG_MIN <= value <= LONG_MAX:
            return ValueKind.LONG
        raise UnsupportedValueError(value)
    if isinstance(value, float):
        return ValueKind.DOUBLE
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, list):
        return ValueKind.LIST
    if isinstance(value, ConfigurationSection):
        return ValueKind.SECTION
    raise UnsupportedValueError(value)


def to_text(value: Any) -> str:
    """Return the textual representation of a stored value.

    Booleans and null render the way YAML spells them; lists and sections
    render their elements recursively.
    """
    kind = kind_of(value)
    if kind is ValueKind.NULL:
        return "null"
    if kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind is ValueKind.LIST:
        return "[" + ", ".join(to_text(item) for item in value) + "]"
    if kind is ValueKind.SECTION:
        return "{" + ", ".join(f"{key}: {to_text(item)}" for key, item in value._entries()) + "}"
    return str(value)


def key_text(key: Any) -> str:
    """Normalize a mapping key read from a document to a section key."""
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)


def to_plain(value: Any) -> Any:
    """Return a detached plain-Python copy of a stored value.

    Sections become ``dict`` objects and lists are copied recursively, so the
    result shares nothing with the tree it came from.
    """
    kind = kind_of(value)
    if kind is ValueKind.LIST:
        return [to_plain(item) for item in value]
    if kind is ValueKind.SECTION:
        return {key: to_plain(item) for key, item in value._entries()}
    return value


__all__ = [
    "ValueKind",
    "kind_of",
    "to_text",
    "key_text",
    "to_plain",
    "INT_MIN",
    "INT_MAX",
    "LONG_MIN",
    "LONG_MAX",
]
