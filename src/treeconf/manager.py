"""Registry of configurations described by the members of an enum.

Each member names one configuration file. A member whose value is a
:class:`ConfigOptions` customizes how that file is loaded; any other value
(``auto()``, a string, ...) uses the defaults:

- path: ``<member name>.yml``, passed through the manager's normalizer
  (``str.lower`` by default);
- default resource: the resolved path;
- save default resource: enabled;
- auto-save: disabled.

Example:
    >>> class Configs(Enum):
    ...     CONFIG = auto()
    ...     MESSAGES = ConfigOptions(path="lang/messages.yml", auto_save=True)
    >>> manager = ConfigurationManager(data_dir, Configs, resources=PackageResources("myplugin"))
    >>> manager.on_enable()
    >>> manager.get(Configs.CONFIG).get_string("prefix", "")
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Generic, Optional, Type, TypeVar

from .configuration import Configuration
from .io.core import PathLike
from .loader import ConfigurationLoader
from .locking import ReadWriteLock
from .resources import ResourceResolver

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=Enum)


@dataclass(eq=False)
class ConfigOptions:
    """Load options attached to an enum member as its value.

    Instances never compare equal to each other, so members with identical
    options stay distinct enum members.
    """

    path: str = ""
    default_resource: str = ""
    auto_save: bool = False
    save_default_resource: bool = True


@dataclass(frozen=True)
class ResolvedOptions:
    path: str
    default_resource: str
    auto_save: bool
    save_default_resource: bool


class ConfigurationManager(Generic[M]):
    """Loads and owns one :class:`Configuration` per member of ``descriptions``."""

    def __init__(
        self,
        data_folder: PathLike,
        descriptions: Type[M],
        *,
        normalizer: Callable[[str], str] = str.lower,
        resources: Optional[ResourceResolver] = None,
    ) -> None:
        self._lock = ReadWriteLock()
        self._configurations: Dict[M, Configuration] = {}
        self._data_folder = Path(data_folder)
        self._descriptions = descriptions
        self._normalizer = normalizer
        self._resources = resources

    @property
    def data_folder(self) -> Path:
        return self._data_folder

    def make_options(self, member: M) -> ResolvedOptions:
        """Resolve the load options of ``member``."""
        options = member.value if isinstance(member.value, ConfigOptions) else ConfigOptions()
        path = self._normalizer(options.path or f"{member.name}.yml")
        return ResolvedOptions(
            path=path,
            default_resource=options.default_resource or path,
            auto_save=options.auto_save,
            save_default_resource=options.save_default_resource,
        )

    def _load(self, member: M) -> Configuration:
        options = self.make_options(member)
        loader = ConfigurationLoader.from_file(self._data_folder, options.path)
        loader.auto_save(options.auto_save)
        if options.save_default_resource:
            loader.set_default_resource(options.default_resource, self._resources)
        configuration = loader.load()
        logger.debug("Loaded %s from %s", member.name, configuration.path)
        return configuration

    def on_enable(self) -> None:
        """Load every member; nothing is registered if any load fails."""
        with self._lock.write():
            loaded = {member: self._load(member) for member in self._descriptions}
            self._configurations = loaded

    def on_disable(self) -> None:
        """Drop every loaded configuration. Unsaved changes are discarded."""
        with self._lock.write():
            self._configurations = {}

    def on_reload(self) -> None:
        """Reload every loaded configuration from its file."""
        with self._lock.read():
            for member, configuration in self._configurations.items():
                configuration.reload()
                logger.debug("Reloaded %s", member.name)

    def get_optional(self, member: M) -> Optional[Configuration]:
        with self._lock.read():
            return self._configurations.get(member)

    def get(self, member: M) -> Configuration:
        """Return the configuration of ``member``.

        Raises:
            KeyError: If the manager is not enabled.
        """
        configuration = self.get_optional(member)
        if configuration is None:
            raise KeyError(f"configuration {member.name} is not loaded")
        return configuration


__all__ = ["ConfigOptions", "ResolvedOptions", "ConfigurationManager"]
