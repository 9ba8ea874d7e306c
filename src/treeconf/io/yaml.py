"""YAML codec for configuration files."""
from __future__ import annotations

import logging
from typing import Any, Dict

import yaml

from ..exceptions import MalformedConfigurationError

logger = logging.getLogger(__name__)


class _Loader(yaml.SafeLoader):
    """Safe loader that keeps timestamps as plain strings."""


_Loader.add_constructor("tag:yaml.org,2002:timestamp", yaml.SafeLoader.construct_yaml_str)


class _Dumper(yaml.SafeDumper):
    """Safe dumper writing multiline strings in literal block style."""


# Custom representer for multiline strings - use literal block style (|)
def _str_representer(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_Dumper.add_representer(str, _str_representer)


class YamlCodec:
    """Parse and serialize the mapping stored in a configuration file."""

    def parse(self, text: str) -> Dict[Any, Any]:
        """Parse ``text`` into a mapping; an empty document is an empty mapping.

        Raises:
            MalformedConfigurationError: If ``text`` is not valid YAML or its
                root is not a mapping.
        """
        try:
            data = yaml.load(text, Loader=_Loader)  # type: ignore[no-untyped-call]
        except yaml.YAMLError as exc:
            raise MalformedConfigurationError(
                f"invalid YAML: {exc}", context={"error": str(exc)}
            ) from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise MalformedConfigurationError(
                f"configuration root must be a mapping, got {type(data).__name__}",
                context={"root": type(data).__name__},
            )
        return data

    def serialize(self, data: Dict[str, Any]) -> str:
        """Dump ``data`` preserving key order, in block style."""
        text = yaml.dump(  # type: ignore[no-untyped-call]
            data,
            Dumper=_Dumper,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
        logger.debug("Serialized configuration (%d characters)", len(text))
        return text


__all__ = ["YamlCodec"]
