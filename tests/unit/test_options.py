"""
Unit tests for Param construction and the option accessor.
"""
import re
from datetime import datetime

from fieldparam import Param


def test_infers_name(param):
    assert param().option("name") == "foo"


def test_infers_type(param):
    assert param(str).option("type") is str


def test_infers_list_type(param):
    assert param([int]).option("type") == [int]


def test_infers_default_value_and_type(param):
    p = param("bar")
    assert p.option("type") is str
    assert p.option("default") == "bar"


def test_infers_default_value_and_type_as_list(param):
    p = param(["bar"])
    assert p.option("type") == [str]
    assert p.option("default") == ["bar"]


def test_infers_numeric_and_boolean_defaults(param):
    assert param(5).option("type") is int
    assert param(1.5).option("type") is float
    assert param(True).option("type") is bool
    assert param(datetime(2016, 4, 24)).option("type") is datetime


def test_inferred_default_applies_before_type(param):
    assert param(True).parse() == {"foo": True}
    assert param(5).parse("7") == {"foo": 7}
    assert param(5).parse() == {"foo": 5}


def test_set_and_get_default_to_identity(param):
    p = param()
    assert p.option("set")("x") == "x"
    assert p.option("get")("x") == "x"


def test_caller_options_override_seeded_options(param):
    upper = str.upper
    p = param({"set": upper, "name": "a"})
    assert p.option("set") is upper
    assert p.name == "a"


def test_retrieves_option_defined_in_constructor(param):
    assert param({"type": str}).option("type") is str


def test_unknown_option_is_none(param):
    assert param().option("nope") is None


def test_setting_option_returns_same_param(param):
    p = param()
    assert p.option("type", int) is p


def test_defines_option_and_retrieves_param(param):
    assert param().option("type", int).option("type") is int


def test_option_can_be_set_to_none(param):
    p = param({"default": "x"}).option("default", None)
    assert "default" in p.options
    assert p.option("default") is None


def test_fluent_chain(param):
    p = param().option("type", int).option("max", 10).option("required", True)
    assert p.options["max"] == 10
    assert p.options["required"] is True


def test_option_stores_are_not_shared():
    options = {"type": int}
    a = Param("a", options)
    b = Param("b", options)
    a.option("max", 3)
    assert b.option("max") is None
    assert "max" not in options


def test_unknown_options_are_inert(param):
    assert param({"whatever": 1}).parse("x") == {"foo": "x"}


def test_name_option_drives_output_key(param):
    assert param({"name": "a"}).parse("bar") == {"a": "bar"}
    assert param().option("name", "a").parse("bar") == {"a": "bar"}


def test_pattern_marker(param):
    assert param(re.Pattern).option("type") is re.Pattern


def test_tuple_type_marker(param):
    p = param((int,))
    assert p.option("type") == (int,)
    assert p.option("default") is None
    assert p.parse("1") == {"foo": [1]}
