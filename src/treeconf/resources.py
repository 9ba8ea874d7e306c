"""Sources of default configuration files.

A :class:`ResourceResolver` opens a bundled default by name. The loader copies
it into place when a configuration file does not exist yet.
"""
from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import BinaryIO, Optional, Protocol, Union, runtime_checkable


@runtime_checkable
class ResourceResolver(Protocol):
    def open_resource(self, name: str) -> Optional[BinaryIO]:
        """Open resource ``name`` for binary reading, or return None if absent."""
        ...


class PackageResources:
    """Resources bundled as package data.

    Example:
        >>> PackageResources("myplugin.defaults").open_resource("config.yml")
    """

    def __init__(self, package: str) -> None:
        self.package = package

    def open_resource(self, name: str) -> Optional[BinaryIO]:
        resource = resources.files(self.package)
        for part in name.split("/"):
            resource = resource.joinpath(part)
        if not resource.is_file():
            return None
        return resource.open("rb")

    def __repr__(self) -> str:
        return f"PackageResources({self.package!r})"


class DirectoryResources:
    """Resources stored as plain files under a directory."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)

    def open_resource(self, name: str) -> Optional[BinaryIO]:
        path = self.root / name
        if not path.is_file():
            return None
        return open(path, "rb")

    def __repr__(self) -> str:
        return f"DirectoryResources({str(self.root)!r})"


__all__ = ["ResourceResolver", "PackageResources", "DirectoryResources"]
