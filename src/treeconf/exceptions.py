from __future__ import annotations

from typing import Any, Dict, List, Mapping


class ConfigurationError(Exception):
    """Base exception for treeconf."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": {key: _jsonable(value) for key, value in self.context.items()},
        }


class MissingMappingError(ConfigurationError, LookupError):
    """Raised when no value is mapped at an exact path."""

    def __init__(self, path: str) -> None:
        message = f"no mapping found for path `{path}` in configuration section"
        ConfigurationError.__init__(self, message, context={"path": path})
        LookupError.__init__(self, message)
        self.path = path


class ConfigurationTypeError(ConfigurationError, TypeError):
    """Raised when a mapped value cannot be converted to the requested kind.

    Carries the path, the requested kind, the offending value and the kind the
    value is actually stored as.
    """

    def __init__(self, path: str, requested: str, value: Any, actual: str) -> None:
        message = _type_message(path, requested, value, actual)
        ConfigurationError.__init__(
            self,
            message,
            context={"path": path, "requested": requested, "value": value, "actual": actual},
        )
        TypeError.__init__(self, message)
        self.path = path
        self.requested = requested
        self.value = value
        self.actual = actual


class ConfigurationListTypeError(ConfigurationError, TypeError):
    """Raised when a list holds a null element or one of the wrong kind."""

    def __init__(self, path: str, requested: str, values: List[Any], element: Any) -> None:
        message = _list_message(path, requested, values, element)
        ConfigurationError.__init__(
            self,
            message,
            context={"path": path, "requested": requested, "list": values, "element": element},
        )
        TypeError.__init__(self, message)
        self.path = path
        self.requested = requested
        self.values = values
        self.element = element


class SectionExistsError(ConfigurationError, ValueError):
    """Raised by ``create_section`` when the target path is already mapped."""

    def __init__(self, path: str) -> None:
        message = f"path `{path}` already exists in this configuration section"
        ConfigurationError.__init__(self, message, context={"path": path})
        ValueError.__init__(self, message)
        self.path = path


class InvalidPathError(ConfigurationError, ValueError):
    """Raised for malformed dotted paths (empty segments, stray separators)."""

    def __init__(self, path: Any) -> None:
        message = f"invalid configuration path `{path}`"
        ConfigurationError.__init__(self, message, context={"path": path})
        ValueError.__init__(self, message)
        self.path = path


class UnsupportedValueError(ConfigurationError, TypeError):
    """Raised when a value has no representation in the configuration tree."""

    def __init__(self, value: Any) -> None:
        message = (
            f"value `{value!r}` of type {type(value).__name__} "
            "cannot be stored in a configuration section"
        )
        ConfigurationError.__init__(self, message, context={"value": value})
        TypeError.__init__(self, message)
        self.value = value


class MalformedConfigurationError(ConfigurationError, ValueError):
    """Raised when a configuration file cannot be parsed into a mapping."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ConfigurationError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ConfigurationFileNotFoundError(ConfigurationError, FileNotFoundError):
    """Raised when a configuration file is missing and cannot be bootstrapped."""

    def __init__(self, path: Any) -> None:
        message = f"configuration file not found: {path}"
        ConfigurationError.__init__(self, message, context={"path": str(path)})
        FileNotFoundError.__init__(self, message)
        self.path = str(path)


class ConfigurationIOError(ConfigurationError, OSError):
    """Raised when reading, writing or bootstrapping a configuration file fails."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ConfigurationError.__init__(self, message, context=context)
        OSError.__init__(self, message)


def _type_message(path: str, requested: str, value: Any, actual: str) -> str:
    if value is None:
        found = "value `null`"
    elif actual == "section":
        found = "section"
    else:
        found = f"value `{_text(value)}` of type {actual}"
    return f"{found} found in path `{path}` cannot be converted to {requested}"


def _list_message(path: str, requested: str, values: List[Any], element: Any) -> str:
    message = (
        f"list `{_text(values)}` found in path `{path}` "
        f"could not be converted to list[{requested}] because it contains "
    )
    if element is None:
        return message + "null element(s)"
    # Lazy import to avoid circular dependency
    from treeconf.values import kind_of

    return (
        message
        + f"value `{_text(element)}` of type {kind_of(element).value} "
        + f"that cannot be converted to {requested}"
    )


def _text(value: Any) -> str:
    # Lazy import to avoid circular dependency
    from treeconf.values import to_text

    return to_text(value)


def _jsonable(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(value, list):
        return [_jsonable(item) for item in value]
    return value


__all__ = [
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
