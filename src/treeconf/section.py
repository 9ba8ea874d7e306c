"""Hierarchical configuration sections addressed by dotted paths.

A section is an ordered mapping from string keys to values (see
:mod:`treeconf.values`). Nested sections are owned by exactly one parent and
carry no back-pointer to it; every section of one tree shares a
:class:`SectionTree` handle holding the reader/writer lock and the mutation
hook used for auto-save.

Path rules:

- reads never create anything; a missing or non-section intermediate reports
  the full path as not found;
- ``set``, ``create_section`` and ``get_or_create_section`` create missing
  intermediate sections; an intermediate holding a non-section value raises
  :class:`ConfigurationTypeError` for that intermediate path;
- ``unset`` is a no-op when anything along the path is missing.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Set, Tuple

from .accessors import MISSING, TypedAccessors
from .exceptions import ConfigurationTypeError, MissingMappingError, SectionExistsError
from .locking import ReadWriteLock
from .paths import join_path, split_path
from .traversal import TraversalMode
from .values import ValueKind, key_text, kind_of, to_plain


class SectionTree:
    """State shared by every section of one tree."""

    def __init__(
        self,
        lock: Optional[ReadWriteLock] = None,
        on_mutation: Optional[Callable[[], None]] = None,
    ) -> None:
        self.lock = lock if lock is not None else ReadWriteLock()
        self.on_mutation = on_mutation

    def mutated(self) -> None:
        """Run the mutation hook. Callers hold the write lock."""
        if self.on_mutation is not None:
            self.on_mutation()


class ConfigurationSection(TypedAccessors):
    """A mutable, ordered section of a configuration tree."""

    def __init__(self, tree: Optional[SectionTree] = None) -> None:
        self._tree = tree if tree is not None else SectionTree()
        self._data: Dict[str, Any] = {}

    @staticmethod
    def from_mapping(mapping: Mapping[Any, Any]) -> "ConfigurationSection":
        """Build a standalone section holding a deep copy of ``mapping``.

        Always returns a plain :class:`ConfigurationSection`, also when called
        on a subclass.
        """
        section = ConfigurationSection()
        section._data = import_entries(mapping, section._tree)
        return section

    # ------------------------------------------------------------------
    # Resolution (lock held by caller)
    # ------------------------------------------------------------------
    def _parent_locked(self, segments: Tuple[str, ...]) -> Optional["ConfigurationSection"]:
        section = self
        for key in segments[:-1]:
            child = section._data.get(key)
            if not isinstance(child, ConfigurationSection):
                return None
            section = child
        return section

    def _parent_for_write_locked(self, segments: Tuple[str, ...]) -> "ConfigurationSection":
        section = self
        for index, key in enumerate(segments[:-1]):
            child = section._data.get(key)
            if child is None:
                child = ConfigurationSection(self._tree)
                section._data[key] = child
            elif not isinstance(child, ConfigurationSection):
                raise ConfigurationTypeError(
                    join_path(*segments[: index + 1]), "section", child, kind_of(child).value
                )
            section = child
        return section

    def _lookup_locked(self, path: str) -> Tuple[bool, Any]:
        segments = split_path(path)
        parent = self._parent_locked(segments)
        if parent is None or segments[-1] not in parent._data:
            return False, None
        return True, parent._data[segments[-1]]

    def _entries(self) -> List[Tuple[str, Any]]:
        return list(self._data.items())

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def contains(self, path: str) -> bool:
        """Return True if a value is mapped at ``path``."""
        with self._tree.lock.read():
            found, _ = self._lookup_locked(path)
            return found

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        return self.contains(path)

    def get(self, path: str, default: Any = MISSING) -> Any:
        """Return the value mapped at ``path``.

        Sections are returned live (they share this tree's lock); lists are
        returned as detached plain copies.

        Raises:
            MissingMappingError: If nothing is mapped and no default is given.
        """
        with self._tree.lock.read():
            found, value = self._lookup_locked(path)
            if not found:
                if default is MISSING:
                    raise MissingMappingError(path)
                return default
            if isinstance(value, list):
                return to_plain(value)
            return value

    def get_list(self, path: str, default: Any = MISSING) -> List[Any]:
        """Return a new plain copy of the list mapped at ``path``."""
        with self._tree.lock.read():
            found, value = self._lookup_locked(path)
            if not found:
                if default is MISSING:
                    raise MissingMappingError(path)
                return default
            kind = kind_of(value)
            if kind is not ValueKind.LIST:
                raise ConfigurationTypeError(path, "list", value, kind.value)
            return to_plain(value)

    def get_section(self, path: str, default: Any = MISSING) -> "ConfigurationSection":
        """Return the section mapped at ``path``.

        Raises:
            MissingMappingError: If nothing is mapped and no default is given.
            ConfigurationTypeError: If the mapped value is not a section.
        """
        with self._tree.lock.read():
            found, value = self._lookup_locked(path)
            if not found:
                if default is MISSING:
                    raise MissingMappingError(path)
                return default
            if not isinstance(value, ConfigurationSection):
                raise ConfigurationTypeError(path, "section", value, kind_of(value).value)
            return value

    def get_keys(self, mode: TraversalMode = TraversalMode.ROOT) -> Set[str]:
        """Return the keys of this section, relative to it, per ``mode``."""
        with self._tree.lock.read():
            return self._keys_locked(mode, "")

    def _keys_locked(self, mode: TraversalMode, prefix: str) -> Set[str]:
        keys: Set[str] = set()
        for key, value in self._data.items():
            path = join_path(prefix, key)
            if mode is not TraversalMode.ROOT and isinstance(value, ConfigurationSection):
                if mode is TraversalMode.ALL:
                    keys.add(path)
                keys |= value._keys_locked(mode, path)
            else:
                keys.add(path)
        return keys

    def to_dict(self) -> Dict[str, Any]:
        """Return a deep plain snapshot of this section."""
        with self._tree.lock.read():
            return to_plain(self)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def set(self, path: str, value: Any) -> None:
        """Map ``value`` at ``path``, replacing whatever was there.

        ``None`` removes the mapping. Mappings and sections are deep-copied
        into new sections owned by this tree; enum members are stored by name.

        Raises:
            UnsupportedValueError: If ``value`` (or any nested value) has no
                stored kind.
            ConfigurationTypeError: If an intermediate path holds a
                non-section value.
        """
        segments = split_path(path)
        if value is None:
            self.unset(path)
            return
        with self._tree.lock.write():
            imported = import_value(value, self._tree)
            parent = self._parent_for_write_locked(segments)
            parent._data[segments[-1]] = imported
            self._tree.mutated()

    def unset(self, path: str) -> None:
        """Remove the mapping at ``path`` (value, list or subtree), if any."""
        segments = split_path(path)
        with self._tree.lock.write():
            parent = self._parent_locked(segments)
            if parent is None or segments[-1] not in parent._data:
                return
            del parent._data[segments[-1]]
            self._tree.mutated()

    def create_section(self, path: str) -> "ConfigurationSection":
        """Create and return an empty section at ``path``.

        Raises:
            SectionExistsError: If any value is already mapped at ``path``.
        """
        segments = split_path(path)
        with self._tree.lock.write():
            parent = self._parent_for_write_locked(segments)
            if segments[-1] in parent._data:
                raise SectionExistsError(path)
            section = ConfigurationSection(self._tree)
            parent._data[segments[-1]] = section
            self._tree.mutated()
            return section

    def get_or_create_section(self, path: str) -> "ConfigurationSection":
        """Return the section at ``path``, creating it when nothing is mapped."""
        segments = split_path(path)
        with self._tree.lock.write():
            parent = self._parent_for_write_locked(segments)
            existing = parent._data.get(segments[-1])
            if isinstance(existing, ConfigurationSection):
                return existing
            if existing is not None:
                raise ConfigurationTypeError(path, "section", existing, kind_of(existing).value)
            section = ConfigurationSection(self._tree)
            parent._data[segments[-1]] = section
            self._tree.mutated()
            return section

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if isinstance(other, ConfigurationSection):
            return self.to_dict() == other.to_dict()
        if isinstance(other, Mapping):
            return self.to_dict() == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"


def import_value(value: Any, tree: SectionTree) -> Any:
    """Convert ``value`` into its stored form for ``tree``.

    Raises:
        UnsupportedValueError: If ``value`` or a nested value has no stored kind.
    """
    if isinstance(value, ConfigurationSection):
        value = value.to_dict()
    if isinstance(value, Mapping):
        section = ConfigurationSection(tree)
        section._data = import_entries(value, tree)
        return section
    if isinstance(value, (list, tuple)):
        return [import_value(item, tree) for item in value]
    if isinstance(value, Enum):
        return value.name
    # Raises for anything without a stored kind
    kind_of(value)
    return value


def import_entries(mapping: Mapping[Any, Any], tree: SectionTree) -> Dict[str, Any]:
    """Import the entries of ``mapping``; keys become text, ``None`` values are dropped."""
    entries: Dict[str, Any] = {}
    for key, item in mapping.items():
        if item is None:
            continue
        entries[key_text(key)] = import_value(item, tree)
    return entries


__all__ = ["ConfigurationSection", "SectionTree", "import_value", "import_entries"]
