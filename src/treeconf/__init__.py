"""Typed, path-addressed access to YAML-backed configuration trees."""
from __future__ import annotations

from .accessors import MISSING
from .configuration import Configuration
from .exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationIOError,
    ConfigurationListTypeError,
    ConfigurationTypeError,
    InvalidPathError,
    MalformedConfigurationError,
    MissingMappingError,
    SectionExistsError,
    UnsupportedValueError,
)
from .io.yaml import YamlCodec
from .loader import ConfigurationLoader, load_configuration
from .manager import ConfigOptions, ConfigurationManager, ResolvedOptions
from .resources import DirectoryResources, PackageResources, ResourceResolver
from .section import ConfigurationSection
from .traversal import TraversalMode
from .values import ValueKind, kind_of

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "MISSING",
    "Configuration",
    "ConfigurationSection",
    "ConfigurationLoader",
    "load_configuration",
    "ConfigurationManager",
    "ConfigOptions",
    "ResolvedOptions",
    "ResourceResolver",
    "PackageResources",
    "DirectoryResources",
    "YamlCodec",
    "TraversalMode",
    "ValueKind",
    "kind_of",
    "ConfigurationError",
    "MissingMappingError",
    "ConfigurationTypeError",
    "ConfigurationListTypeError",
    "SectionExistsError",
    "InvalidPathError",
    "UnsupportedValueError",
    "MalformedConfigurationError",
    "ConfigurationFileNotFoundError",
    "ConfigurationIOError",
]
