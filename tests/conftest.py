import sys
from pathlib import Path
from typing import Any, Callable

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'treeconf'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from treeconf import ConfigurationSection
from helpers.io_utils import write_yaml


@pytest.fixture
def section() -> ConfigurationSection:
    """A fresh, empty standalone section."""
    return ConfigurationSection()


@pytest.fixture
def keys_section() -> ConfigurationSection:
    """Section holding ``a.b.c``, ``a.b.d``, ``a.e.f``, ``g.h`` and ``i``."""
    sec = ConfigurationSection()
    sec.set("a.b.c", 1)
    sec.set("a.b.d", 2)
    sec.set("a.e.f", 3)
    sec.set("g.h", 4)
    sec.set("i", 5)
    return sec


@pytest.fixture
def yaml_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a YAML document under ``tmp_path`` and returning its path."""

    def _write(data: Any, name: str = "config.yml") -> Path:
        path = tmp_path / name
        write_yaml(path, data)
        return path

    return _write
