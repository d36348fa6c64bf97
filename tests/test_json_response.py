"""
Tests for the JSON helpers used to read structured model responses.
"""
import pytest

from backend.json_response import (
    ResponseParseError,
    load_json_object,
    optional_int,
    optional_str,
    require_array,
    require_str,
)


@pytest.mark.parametrize("text", [
    '{"a": 1}',
    '```json\n{"a": 1}\n```',
    '```\n{"a": 1}\n```',
    'Sure! Here it is:\n```json\n{"a": 1}\n```\nEnjoy.',
])
def test_load_json_object(text):
    assert load_json_object(text) == {"a": 1}


@pytest.mark.parametrize("text", ["", "not json", "[1, 2]", None])
def test_load_json_object_rejects(text):
    with pytest.raises(ResponseParseError):
        load_json_object(text)


def test_require_helpers_name_the_field():
    with pytest.raises(ResponseParseError, match="Missing 'rounds' field in summary"):
        require_array({"rounds": "x"}, "rounds", where="summary")
    with pytest.raises(ResponseParseError, match="Missing 'name' field"):
        require_str({"name": None}, "name")


def test_optional_str():
    assert optional_str({"a": "x"}, "a") == "x"
    assert optional_str({"a": 3}, "a") == "3"
    assert optional_str({"a": {"b": 1}}, "a") is None
    assert optional_str({}, "a") is None


@pytest.mark.parametrize("value,expected", [
    (3, 3), (3.9, 3), (" 12 ", 12), ("twelve", None), (None, None), (True, None),
    (float("inf"), None), (float("-inf"), None), (float("nan"), None),
])
def test_optional_int(value, expected):
    assert optional_int({"n": value}, "n") == expected
