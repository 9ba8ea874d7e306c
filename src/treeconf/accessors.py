"""Typed accessors layered over the section tree.

For each kind K there is ``get_K(path)``, ``get_K(path, default)`` and
``get_K_list(path)``:

- without a default, an absent mapping raises :class:`MissingMappingError`;
- with a default, an absent mapping returns the default (never stored);
- a present value that does not convert raises
  :class:`ConfigurationTypeError`, default or not;
- list forms raise :class:`ConfigurationListTypeError` when any element is
  ``None`` or does not convert, and always return a new list.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, List, Tuple, Type, TypeVar

from . import converters
from .converters import ConversionError, Converter
from .exceptions import ConfigurationListTypeError, ConfigurationTypeError, MissingMappingError
from .values import ValueKind, kind_of

if TYPE_CHECKING:
    from .section import SectionTree

E = TypeVar("E", bound=Enum)


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()
"""Marks an omitted ``default`` argument (``None`` is a valid default)."""


class TypedAccessors:
    """Mixin providing typed getters.

    Hosts must provide ``_tree`` (whose ``lock`` guards the data) and
    ``_lookup_locked(path) -> (found, value)``, called with the read lock held.
    """

    _tree: "SectionTree"

    def _lookup_locked(self, path: str) -> Tuple[bool, Any]:  # pragma: no cover - provided by host
        raise NotImplementedError

    def _get_converted(self, path: str, converter: Converter, default: Any) -> Any:
        with self._tree.lock.read():
            found, value = self._lookup_locked(path)
            if not found:
                if default is MISSING:
                    raise MissingMappingError(path)
                return default
            try:
                return converter(value)
            except ConversionError:
                raise ConfigurationTypeError(
                    path, converter.name, value, kind_of(value).value
                ) from None

    def _get_converted_list(self, path: str, converter: Converter) -> List[Any]:
        with self._tree.lock.read():
            found, value = self._lookup_locked(path)
            if not found:
                raise MissingMappingError(path)
            kind = kind_of(value)
            if kind is not ValueKind.LIST:
                raise ConfigurationTypeError(path, f"list[{converter.name}]", value, kind.value)
            result: List[Any] = []
            for element in value:
                if element is None:
                    raise ConfigurationListTypeError(path, converter.name, list(value), None)
                try:
                    result.append(converter(element))
                except ConversionError:
                    raise ConfigurationListTypeError(
                        path, converter.name, list(value), element
                    ) from None
            return result

    # byte / short / int / long

    def get_byte(self, path: str, default: Any = MISSING) -> int:
        return self._get_converted(path, converters.BYTE, default)

    def get_byte_list(self, path: str) -> List[int]:
        return self._get_converted_list(path, converters.BYTE)

    def get_short(self, path: str, default: Any = MISSING) -> int:
        return self._get_converted(path, converters.SHORT, default)

    def get_short_list(self, path: str) -> List[int]:
        return self._get_converted_list(path, converters.SHORT)

    def get_int(self, path: str, default: Any = MISSING) -> int:
        return self._get_converted(path, converters.INT, default)

    def get_int_list(self, path: str) -> List[int]:
        return self._get_converted_list(path, converters.INT)

    def get_long(self, path: str, default: Any = MISSING) -> int:
        return self._get_converted(path, converters.LONG, default)

    def get_long_list(self, path: str) -> List[int]:
        return self._get_converted_list(path, converters.LONG)

    # float / double

    def get_float(self, path: str, default: Any = MISSING) -> float:
        """Read a value that fits a 32-bit float.

        Doubles that round into the 32-bit range are accepted; the returned
        Python float is not rounded to 32-bit precision.
        """
        return self._get_converted(path, converters.FLOAT, default)

    def get_float_list(self, path: str) -> List[float]:
        return self._get_converted_list(path, converters.FLOAT)

    def get_double(self, path: str, default: Any = MISSING) -> float:
        return self._get_converted(path, converters.DOUBLE, default)

    def get_double_list(self, path: str) -> List[float]:
        return self._get_converted_list(path, converters.DOUBLE)

    # boolean / string

    def get_boolean(self, path: str, default: Any = MISSING) -> bool:
        return self._get_converted(path, converters.BOOLEAN, default)

    def get_boolean_list(self, path: str) -> List[bool]:
        return self._get_converted_list(path, converters.BOOLEAN)

    def get_string(self, path: str, default: Any = MISSING) -> str:
        """Read any value as text. Never raises a type error."""
        return self._get_converted(path, converters.STRING, default)

    def get_string_list(self, path: str) -> List[str]:
        return self._get_converted_list(path, converters.STRING)

    # enum

    def get_enum(self, path: str, enum_cls: Type[E], default: Any = MISSING) -> E:
        """Read a string naming a member of ``enum_cls`` (case-sensitive)."""
        return self._get_converted(path, converters.enum_converter(enum_cls), default)

    def get_enum_list(self, path: str, enum_cls: Type[E]) -> List[E]:
        return self._get_converted_list(path, converters.enum_converter(enum_cls))


__all__ = ["MISSING", "TypedAccessors"]
