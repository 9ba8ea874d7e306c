"""Loading configurations, bootstrapping missing files from defaults.

Example:
    >>> config = (
    ...     ConfigurationLoader.from_file(data_dir, "config.yml")
    ...     .auto_save(True)
    ...     .set_default_resource(resources=PackageResources("myplugin.defaults"))
    ...     .load()
    ... )
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .configuration import Configuration
from .exceptions import ConfigurationFileNotFoundError, ConfigurationIOError
from .io.core import PathLike, copy_stream, ensure_parent_dir
from .resources import ResourceResolver

logger = logging.getLogger(__name__)


class ConfigurationLoader:
    """Fluent builder resolving load options for one configuration file."""

    def __init__(self, path: PathLike) -> None:
        path = Path(path)
        if path.is_dir():
            raise ConfigurationIOError(f"{path} is a directory", context={"path": str(path)})
        self._path = path
        self._auto_save = False
        self._save_default_resource = False
        self._resource_name: Optional[str] = None
        self._resources: Optional[ResourceResolver] = None

    @classmethod
    def from_file(cls, path: PathLike, name: Optional[str] = None) -> "ConfigurationLoader":
        """Start loading ``path``, or ``path / name`` when ``name`` is given.

        Raises:
            ConfigurationIOError: If the resolved path is a directory.
        """
        if name is not None:
            return cls(Path(path) / name)
        return cls(path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def default_resource(self) -> Optional[str]:
        return self._resource_name if self._save_default_resource else None

    def auto_save(self, flag: bool = True) -> "ConfigurationLoader":
        self._auto_save = flag
        return self

    def set_default_resource(
        self,
        name: Optional[str] = None,
        resources: Optional[ResourceResolver] = None,
    ) -> "ConfigurationLoader":
        """Copy resource ``name`` into place when the file does not exist.

        ``name`` defaults to the file name; a leading ``/`` is ignored.
        Without a resolver the resource counts as absent.
        """
        self._save_default_resource = True
        self._resource_name = (name or self._path.name).lstrip("/")
        self._resources = resources
        return self

    def load(self) -> Configuration:
        """Load the configuration, bootstrapping the file if needed.

        Raises:
            ConfigurationFileNotFoundError: If the file is missing and no
                default resource was requested.
            ConfigurationIOError: If copying the default resource fails.
        """
        missing_ok = False
        if not self._path.exists():
            if not self._save_default_resource:
                raise ConfigurationFileNotFoundError(self._path)
            missing_ok = not self._copy_default_resource()
        return Configuration(self._path, auto_save=self._auto_save, missing_ok=missing_ok)

    def _copy_default_resource(self) -> bool:
        name = self._resource_name or self._path.name
        try:
            ensure_parent_dir(self._path)
            stream = self._resources.open_resource(name) if self._resources is not None else None
            if stream is None:
                logger.warning(
                    "Default resource %s not found; %s starts empty", name, self._path
                )
                return False
            with stream:
                copy_stream(stream, self._path)
        except OSError as exc:
            raise ConfigurationIOError(
                f"failed to copy default resource {name} to {self._path}: {exc}",
                context={"path": str(self._path), "resource": name},
            ) from exc
        logger.debug("Copied default resource %s to %s", name, self._path)
        return True


def load_configuration(
    path: PathLike,
    *,
    auto_save: bool = False,
    default_resource: Optional[str] = None,
    resources: Optional[ResourceResolver] = None,
) -> Configuration:
    """Load ``path`` in one call.

    A default resource is used when either ``default_resource`` or
    ``resources`` is given.
    """
    loader = ConfigurationLoader.from_file(path).auto_save(auto_save)
    if default_resource is not None or resources is not None:
        loader.set_default_resource(default_resource, resources)
    return loader.load()


__all__ = ["ConfigurationLoader", "load_configuration"]
