"""Configuration root bound to a YAML file.

A :class:`Configuration` is the root section of its tree. It owns the file
path, the codec, the auto-save flag and the tree's reader/writer lock.

Lifecycle: constructed (which loads the file), mutated through the section
API, persisted with :meth:`Configuration.save`, and replaced wholesale with
:meth:`Configuration.reload`. Reload discards unsaved changes and rebuilds the
tree; sections obtained before a reload are detached from it and must not be
used afterwards. They still share the lock, but writes to them no longer reach
the file, not even with auto-save on.

With auto-save enabled every successful mutation writes the whole file before
returning, inside the same write-lock critical section. That is one file write
per ``set``; batch changes with auto-save off and call ``save`` instead.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .exceptions import (
    ConfigurationFileNotFoundError,
    ConfigurationIOError,
    MalformedConfigurationError,
    UnsupportedValueError,
)
from .io.core import PathLike, read_text, write_text
from .io.yaml import YamlCodec
from .section import ConfigurationSection, SectionTree, import_entries
from .values import to_plain

logger = logging.getLogger(__name__)


class Configuration(ConfigurationSection):
    """Root section of a configuration tree loaded from ``path``.

    Args:
        path: YAML file backing this configuration.
        auto_save: Save after every successful mutation.
        codec: Codec used to parse and serialize the file (YAML by default).
        missing_ok: Start with an empty tree instead of failing when the file
            does not exist.

    Raises:
        ConfigurationFileNotFoundError: If the file is missing and
            ``missing_ok`` is False.
        MalformedConfigurationError: If the file does not hold a mapping of
            supported values.
        ConfigurationIOError: If the file cannot be read.
    """

    def __init__(
        self,
        path: PathLike,
        *,
        auto_save: bool = False,
        codec: Optional[YamlCodec] = None,
        missing_ok: bool = False,
    ) -> None:
        super().__init__(SectionTree(on_mutation=self._on_mutation))
        self._path = Path(path)
        self._auto_save = auto_save
        self._codec = codec if codec is not None else YamlCodec()
        self._missing_ok = missing_ok
        self.reload()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def auto_save(self) -> bool:
        return self._auto_save

    @auto_save.setter
    def auto_save(self, value: bool) -> None:
        with self._tree.lock.write():
            self._auto_save = bool(value)

    def reload(self) -> None:
        """Discard the in-memory tree and load the file again."""
        with self._tree.lock.write():
            self._load_locked()

    def save(self) -> None:
        """Write the tree to the file atomically.

        Raises:
            ConfigurationIOError: If the file cannot be written. The
                in-memory tree is left as it is.
        """
        with self._tree.lock.write():
            self._save_locked()

    def _on_mutation(self) -> None:
        if self._auto_save:
            self._save_locked()

    def _load_locked(self) -> None:
        try:
            text = read_text(self._path)
        except FileNotFoundError as exc:
            if not self._missing_ok:
                raise ConfigurationFileNotFoundError(self._path) from exc
            logger.debug("Configuration %s does not exist, starting empty", self._path)
            data = {}
        except OSError as exc:
            raise ConfigurationIOError(
                f"failed to read configuration {self._path}: {exc}",
                context={"path": str(self._path)},
            ) from exc
        except UnicodeDecodeError as exc:
            raise MalformedConfigurationError(
                f"configuration {self._path} is not valid UTF-8",
                context={"path": str(self._path)},
            ) from exc
        else:
            data = self._codec.parse(text)

        # Sections from before a reload keep the old handle, which has no hook
        tree = SectionTree(self._tree.lock, self._on_mutation)
        try:
            entries = import_entries(data, tree)
        except UnsupportedValueError as exc:
            raise MalformedConfigurationError(
                f"configuration {self._path} holds an unsupported value: {exc}",
                context={"path": str(self._path)},
            ) from exc
        self._tree.on_mutation = None
        self._tree = tree
        self._data = entries
        logger.debug("Loaded configuration %s (%d top-level keys)", self._path, len(entries))

    def _save_locked(self) -> None:
        text = self._codec.serialize(to_plain(self))
        try:
            write_text(self._path, text)
        except OSError as exc:
            raise ConfigurationIOError(
                f"failed to save configuration {self._path}: {exc}",
                context={"path": str(self._path)},
            ) from exc
        logger.debug("Saved configuration %s", self._path)

    def __repr__(self) -> str:
        return f"Configuration(path={str(self._path)!r}, auto_save={self._auto_save!r})"


__all__ = ["Configuration"]
