from __future__ import annotations

import math
from enum import Enum

import pytest

from treeconf import ConfigurationSection
from treeconf.converters import BYTE_MAX, BYTE_MIN, FLOAT_MAX, SHORT_MAX, SHORT_MIN
from treeconf.exceptions import (
    ConfigurationListTypeError,
    ConfigurationTypeError,
    MissingMappingError,
)
from treeconf.io.yaml import YamlCodec
from treeconf.values import INT_MAX, INT_MIN, LONG_MAX, LONG_MIN


class Level(Enum):
    LOW = 1
    HIGH = 2


@pytest.mark.parametrize(
    "getter, value",
    [
        ("get_byte", BYTE_MIN),
        ("get_byte", BYTE_MAX),
        ("get_short", SHORT_MIN),
        ("get_short", SHORT_MAX),
        ("get_int", INT_MIN),
        ("get_int", INT_MAX),
        ("get_long", LONG_MIN),
        ("get_long", LONG_MAX),
        ("get_float", FLOAT_MAX),
        ("get_float", -FLOAT_MAX),
        ("get_double", 1.7976931348623157e308),
    ],
)
def test_boundary_values_round_trip(section: ConfigurationSection, getter: str, value) -> None:
    section.set("n", value)
    assert getattr(section, getter)("n") == value


@pytest.mark.parametrize(
    "getter, value",
    [
        ("get_byte", BYTE_MAX + 1),
        ("get_byte", BYTE_MIN - 1),
        ("get_short", SHORT_MAX + 1),
        ("get_short", SHORT_MIN - 1),
        ("get_int", INT_MAX + 1),
        ("get_int", INT_MIN - 1),
        ("get_int", 1.0),
        ("get_long", 1.5),
        ("get_float", 1e39),
        ("get_float", float("nan")),
        ("get_float", float("inf")),
        ("get_float", LONG_MAX),
        ("get_double", "1.0"),
        ("get_boolean", 1),
        ("get_boolean", "true"),
    ],
)
def test_narrower_getters_reject_out_of_range(section: ConfigurationSection, getter: str, value) -> None:
    section.set("n", value)
    with pytest.raises(ConfigurationTypeError) as excinfo:
        getattr(section, getter)("n")
    assert excinfo.value.path == "n"


def test_widening_conversions(section: ConfigurationSection) -> None:
    section.set("i", 7)
    section.set("l", LONG_MAX)
    assert section.get_long("i") == 7
    assert section.get_double("i") == 7.0
    assert isinstance(section.get_double("i"), float)
    assert section.get_double("l") == float(LONG_MAX)
    assert section.get_float("i") == 7.0


def test_getter_default_only_applies_when_absent(section: ConfigurationSection) -> None:
    assert section.get_int("missing", 5) == 5
    assert section.get_string("missing", None) is None
    assert not section.contains("missing")
    section.set("present", "text")
    with pytest.raises(ConfigurationTypeError):
        section.get_int("present", 5)


def test_getter_without_default_raises_missing(section: ConfigurationSection) -> None:
    with pytest.raises(MissingMappingError):
        section.get_int("missing")
    with pytest.raises(MissingMappingError):
        section.get_string("missing")
    with pytest.raises(MissingMappingError):
        section.get_int_list("missing")


def test_type_error_message(section: ConfigurationSection) -> None:
    section.set("a.b", "hello")
    with pytest.raises(ConfigurationTypeError) as excinfo:
        section.get_int("a.b")
    assert str(excinfo.value) == (
        "value `hello` of type string found in path `a.b` cannot be converted to int"
    )
    assert excinfo.value.actual == "string"
    assert excinfo.value.requested == "int"


def test_string_accepts_every_kind(section: ConfigurationSection) -> None:
    section.set("b", True)
    section.set("i", 3)
    section.set("d", 2.5)
    section.set("l", ["x", 1, False])
    section.set("s.k", "v")
    assert section.get_string("b") == "true"
    assert section.get_string("i") == "3"
    assert section.get_string("d") == "2.5"
    assert section.get_string("l") == "[x, 1, false]"
    assert section.get_string("s") == "{k: v}"


def test_enum_getter_is_case_sensitive(section: ConfigurationSection) -> None:
    section.set("level", "HIGH")
    section.set("lower", "high")
    assert section.get_enum("level", Level) is Level.HIGH
    with pytest.raises(ConfigurationTypeError, match="cannot be converted to Level"):
        section.get_enum("lower", Level)
    assert section.get_enum("missing", Level, Level.LOW) is Level.LOW


def test_list_getters(section: ConfigurationSection) -> None:
    section.set("ints", [1, 2, 3])
    section.set("levels", ["LOW", "HIGH"])
    section.set("flags", [True, False])
    assert section.get_int_list("ints") == [1, 2, 3]
    assert section.get_double_list("ints") == [1.0, 2.0, 3.0]
    assert section.get_string_list("ints") == ["1", "2", "3"]
    assert section.get_enum_list("levels", Level) == [Level.LOW, Level.HIGH]
    assert section.get_boolean_list("flags") == [True, False]


def test_list_getters_return_independent_copies(section: ConfigurationSection) -> None:
    section.set("ints", [1, 2])
    first = section.get_int_list("ints")
    first.append(99)
    assert section.get_int_list("ints") == [1, 2]
    assert section.get_int_list("ints") is not section.get_int_list("ints")


def test_list_getter_rejects_null_elements(section: ConfigurationSection) -> None:
    section.set("l", [1, None, 3])
    with pytest.raises(ConfigurationListTypeError) as excinfo:
        section.get_int_list("l")
    assert str(excinfo.value) == (
        "list `[1, null, 3]` found in path `l` could not be converted to list[int] "
        "because it contains null element(s)"
    )
    with pytest.raises(ConfigurationListTypeError):
        section.get_string_list("l")


def test_list_getter_rejects_wrong_element(section: ConfigurationSection) -> None:
    section.set("l", [1, "two", 3])
    with pytest.raises(ConfigurationListTypeError) as excinfo:
        section.get_int_list("l")
    assert str(excinfo.value) == (
        "list `[1, two, 3]` found in path `l` could not be converted to list[int] "
        "because it contains value `two` of type string that cannot be converted to int"
    )
    assert excinfo.value.element == "two"


def test_list_getter_on_non_list_is_type_error(section: ConfigurationSection) -> None:
    section.set("n", 1)
    with pytest.raises(ConfigurationTypeError, match=r"cannot be converted to list\[int\]"):
        section.get_int_list("n")


def test_byte_list_range_checked(section: ConfigurationSection) -> None:
    section.set("l", [1, 200])
    with pytest.raises(ConfigurationListTypeError):
        section.get_byte_list("l")
    assert section.get_short_list("l") == [1, 200]


def test_float_getter_does_not_round(section: ConfigurationSection) -> None:
    section.set("f", 0.1)
    assert section.get_float("f") == 0.1
    assert not math.isnan(section.get_float("f"))


def test_float_accepts_doubles_that_round_into_range() -> None:
    document = YamlCodec().parse(
        "f: 3.4028235E+38\n"
        "l:\n"
        "- 3.4028235E+38\n"
        "- -3.4028235E+38\n"
        "over: 3.4028236E+38\n"
    )
    sec = ConfigurationSection.from_mapping(document)
    assert sec.get_float("f") == 3.4028235e38
    assert sec.get_float_list("l") == [3.4028235e38, -3.4028235e38]
    with pytest.raises(ConfigurationTypeError, match="cannot be converted to float"):
        sec.get_float("over")
