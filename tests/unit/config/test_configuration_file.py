from __future__ import annotations

import threading
from pathlib import Path

import pytest

from helpers.io_utils import read_yaml, write_text, write_yaml
from treeconf import Configuration, ConfigurationSection, TraversalMode
from treeconf.exceptions import (
    ConfigurationFileNotFoundError,
    ConfigurationIOError,
    MalformedConfigurationError,
)


def test_load_reads_nested_document(yaml_file) -> None:
    path = yaml_file({"server": {"host": "localhost", "port": 8080}, "tags": ["a", "b"]})
    config = Configuration(path)
    assert config.path == path
    assert config.get_string("server.host") == "localhost"
    assert config.get_int("server.port") == 8080
    assert config.get_string_list("tags") == ["a", "b"]
    assert config.auto_save is False


def test_empty_file_loads_empty_tree(tmp_path: Path) -> None:
    path = tmp_path / "empty.yml"
    write_text(path, "")
    config = Configuration(path)
    assert config.get_keys(TraversalMode.ALL) == set()


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationFileNotFoundError, match="configuration file not found"):
        Configuration(tmp_path / "missing.yml")


def test_missing_file_allowed_starts_empty(tmp_path: Path) -> None:
    config = Configuration(tmp_path / "missing.yml", missing_ok=True)
    assert config.to_dict() == {}
    config.set("a", 1)
    config.save()
    assert read_yaml(tmp_path / "missing.yml") == {"a": 1}


@pytest.mark.parametrize("text", ["a: [1\n", "- 1\n- 2\n", "big: 100000000000000000000\n"])
def test_malformed_file_raises(tmp_path: Path, text: str) -> None:
    path = tmp_path / "bad.yml"
    write_text(path, text)
    with pytest.raises(MalformedConfigurationError):
        Configuration(path)


def test_directory_is_an_io_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationIOError):
        Configuration(tmp_path)


def test_save_writes_tree_in_insertion_order(tmp_path: Path) -> None:
    path = tmp_path / "config.yml"
    config = Configuration(path, missing_ok=True)
    config.set("z", 1)
    config.set("a.b", [1, 2])
    config.set("a.c", "multi\nline")
    config.save()
    assert path.read_text(encoding="utf-8") == "z: 1\na:\n  b:\n  - 1\n  - 2\n  c: |-\n    multi\n    line\n"
    assert Configuration(path) == config


def test_save_failure_raises_io_error(tmp_path: Path) -> None:
    config = Configuration(tmp_path / "gone" / "config.yml", missing_ok=True)
    config.set("a", 1)
    with pytest.raises(ConfigurationIOError, match="failed to save"):
        config.save()
    assert config.get_int("a") == 1


def test_reload_discards_unsaved_changes(yaml_file) -> None:
    path = yaml_file({"a": 1})
    config = Configuration(path)
    config.set("a", 2)
    config.set("b.c", True)
    config.reload()
    assert config.to_dict() == {"a": 1}


def test_reload_from_empty_file_clears_tree(tmp_path: Path) -> None:
    path = tmp_path / "config.yml"
    write_yaml(path, {"a": {"b": 1}, "c": [1]})
    config = Configuration(path)
    write_text(path, "")
    config.reload()
    assert config.get_keys(TraversalMode.ALL) == set()


def test_reload_picks_up_external_edits(yaml_file) -> None:
    path = yaml_file({"a": 1})
    config = Configuration(path)
    write_yaml(path, {"a": 5, "new": "x"})
    config.reload()
    assert config.get_int("a") == 5
    assert config.get_string("new") == "x"


def test_sections_detached_by_reload_do_not_auto_save(yaml_file) -> None:
    path = yaml_file({"a": {"b": 1}})
    config = Configuration(path, auto_save=True)
    stale = config.get_section("a")
    config.reload()
    before = path.read_text(encoding="utf-8")

    stale.set("x", 2)
    assert path.read_text(encoding="utf-8") == before
    assert config.to_dict() == {"a": {"b": 1}}

    config.get_section("a").set("x", 3)
    assert read_yaml(path) == {"a": {"b": 1, "x": 3}}


def test_from_mapping_on_configuration_builds_plain_section() -> None:
    section = Configuration.from_mapping({"a": {"b": 1}})
    assert type(section) is ConfigurationSection
    assert section.get_int("a.b") == 1


def test_auto_save_writes_after_every_mutation(yaml_file) -> None:
    path = yaml_file({"keep": 1})
    config = Configuration(path, auto_save=True)

    config.set("a.b", 2)
    assert read_yaml(path) == {"keep": 1, "a": {"b": 2}}

    config.get_section("a").set("c", "x")
    assert read_yaml(path) == {"keep": 1, "a": {"b": 2, "c": "x"}}

    config.create_section("s")
    assert read_yaml(path) == {"keep": 1, "a": {"b": 2, "c": "x"}, "s": {}}

    config.get_or_create_section("t.u")
    assert read_yaml(path)["t"] == {"u": {}}

    config.unset("keep")
    assert read_yaml(path) == config.to_dict()


def test_auto_save_disabled_leaves_file_alone(yaml_file) -> None:
    path = yaml_file({"a": 1})
    config = Configuration(path)
    config.set("a", 2)
    assert read_yaml(path) == {"a": 1}
    config.auto_save = True
    config.set("b", 3)
    assert read_yaml(path) == {"a": 2, "b": 3}


def test_concurrent_writers_and_readers(tmp_path: Path) -> None:
    config = Configuration(tmp_path / "c.yml", missing_ok=True)
    errors = []

    def writer(prefix: str) -> None:
        try:
            for i in range(200):
                config.set(f"{prefix}.k{i}", i)
        except Exception as exc:  # pragma: no cover - surfaced by the assertion
            errors.append(exc)

    def reader() -> None:
        try:
            for _ in range(200):
                config.get_keys(TraversalMode.LEAVES)
                config.to_dict()
        except Exception as exc:  # pragma: no cover - surfaced by the assertion
            errors.append(exc)

    threads = [threading.Thread(target=writer, args=(p,)) for p in ("x", "y")]
    threads += [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(10)
    assert errors == []
    assert len(config.get_keys(TraversalMode.LEAVES)) == 400
