"""Conversions from stored value kinds to requested scalar kinds.

Conversion matrix (stored kind → requested kind):

- byte: INT within [-128, 127]
- short: INT within [-32768, 32767]
- int: INT
- long: INT, LONG
- float: INT, DOUBLE that rounds into the 32-bit float range (NaN and
  infinities fail)
- double: INT, LONG, DOUBLE
- boolean: BOOLEAN
- string: anything but NULL
- enum: STRING naming a member exactly (case-sensitive)

Each converter raises :class:`ConversionError` when the value does not fit;
the accessor layer turns that into the public error types with path
information attached.
"""
from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Type, TypeVar

from .values import INT_MAX, INT_MIN, ValueKind, kind_of, to_text

E = TypeVar("E", bound=Enum)

BYTE_MIN, BYTE_MAX = -128, 127
SHORT_MIN, SHORT_MAX = -32768, 32767
FLOAT_MAX = 3.4028234663852886e38


class ConversionError(ValueError):
    """A stored value cannot be converted to the requested kind."""


@dataclass(frozen=True)
class Converter:
    """A named conversion from a stored value to a requested kind."""

    name: str
    convert: Callable[[Any, ValueKind], Any]

    def __call__(self, value: Any) -> Any:
        return self.convert(value, kind_of(value))


def _bounded_int(low: int, high: int) -> Callable[[Any, ValueKind], int]:
    def _convert(value: Any, kind: ValueKind) -> int:
        if kind is ValueKind.INT and low <= value <= high:
            return value
        raise ConversionError(value)

    return _convert


def _to_long(value: Any, kind: ValueKind) -> int:
    if kind in (ValueKind.INT, ValueKind.LONG):
        return value
    raise ConversionError(value)


def _to_float(value: Any, kind: ValueKind) -> float:
    if kind is ValueKind.INT:
        return float(value)
    if kind is ValueKind.DOUBLE and math.isfinite(value):
        try:
            # Overflows only when the value does not round into 32-bit range
            struct.pack("f", value)
        except OverflowError:
            raise ConversionError(value) from None
        return value
    raise ConversionError(value)


def _to_double(value: Any, kind: ValueKind) -> float:
    if kind in (ValueKind.INT, ValueKind.LONG, ValueKind.DOUBLE):
        return float(value)
    raise ConversionError(value)


def _to_boolean(value: Any, kind: ValueKind) -> bool:
    if kind is ValueKind.BOOLEAN:
        return value
    raise ConversionError(value)


def _to_string(value: Any, kind: ValueKind) -> str:
    if kind is ValueKind.NULL:
        raise ConversionError(value)
    return to_text(value)


BYTE = Converter("byte", _bounded_int(BYTE_MIN, BYTE_MAX))
SHORT = Converter("short", _bounded_int(SHORT_MIN, SHORT_MAX))
INT = Converter("int", _bounded_int(INT_MIN, INT_MAX))
LONG = Converter("long", _to_long)
FLOAT = Converter("float", _to_float)
DOUBLE = Converter("double", _to_double)
BOOLEAN = Converter("boolean", _to_boolean)
STRING = Converter("string", _to_string)


def enum_converter(enum_cls: Type[E]) -> Converter:
    """Build a converter resolving member names of ``enum_cls``."""

    def _convert(value: Any, kind: ValueKind) -> E:
        if kind is ValueKind.STRING and value in enum_cls.__members__:
            return enum_cls.__members__[value]
        raise ConversionError(value)

    return Converter(enum_cls.__name__, _convert)


__all__ = [
    "ConversionError",
    "Converter",
    "BYTE",
    "SHORT",
    "INT",
    "LONG",
    "FLOAT",
    "DOUBLE",
    "BOOLEAN",
    "STRING",
    "enum_converter",
    "BYTE_MIN",
    "BYTE_MAX",
    "SHORT_MIN",
    "SHORT_MAX",
    "FLOAT_MAX",
]
