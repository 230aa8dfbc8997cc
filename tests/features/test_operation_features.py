"""
Tests for the feature registry wrappers around the string primitives
"""

import pytest

from strme.errors import ALLOCATION_FAILURE, INVALID_ARGUMENT, NULL_INPUT
from strme.config import allocation_limit
from strme.features import FeatureRegistry, OperationResult

OPERATIONS = [
    "length",
    "copy",
    "copy_bounded",
    "compare",
    "find_byte",
    "concatenate",
    "concatenate_bounded",
    "swap",
    "reverse",
    "parse_integer",
]


def _run(name, **kwargs):
    feature = FeatureRegistry.get_feature(name)
    assert feature is not None
    return feature.handler(**kwargs)


def test_all_operations_are_registered():
    features = FeatureRegistry.get_all_features()
    for name in OPERATIONS + ["version", "list_operations"]:
        assert name in features
        assert features[name].description


def test_version_feature():
    result = _run("version")
    assert result.success is True
    assert "." in result.data["version"]


def test_list_operations_feature():
    result = _run("list_operations")
    assert sorted(result.data["operations"]) == sorted(OPERATIONS)


def test_operation_result_constructors():
    ok = OperationResult.ok({"x": 1})
    assert ok.success and ok.data == {"x": 1} and ok.error is None
    failed = OperationResult.fail("boom", NULL_INPUT)
    assert not failed.success and failed.error == "boom" and failed.error_kind == NULL_INPUT


def test_string_results_carry_storage():
    result = _run("reverse", s="abc")
    assert result.success
    assert result.data["result"] == {
        "text": "cba",
        "length": 3,
        "storage": [ord("c"), ord("b"), ord("a"), 0],
    }


@pytest.mark.parametrize(
    "name, kwargs, expected",
    [
        ("length", {"s": "hello"}, {"length": 5}),
        ("compare", {"a": "ab", "b": "abc"}, {"result": 1}),
        ("find_byte", {"buffer": "hello", "target": "l"}, {"position": 2}),
        ("find_byte", {"buffer": "hello", "target": "o", "length": 3}, {"position": None}),
        ("parse_integer", {"s": "-123", "base": 10}, {"value": -123}),
        ("parse_integer", {"s": None}, {"value": 0}),
    ],
)
def test_scalar_operations(name, kwargs, expected):
    result = _run(name, **kwargs)
    assert result.success
    assert result.data == expected


def test_string_operations():
    assert _run("copy", source="hi").data["result"]["text"] == "hi"
    assert _run("copy_bounded", source="hello", n=2).data["result"]["text"] == "he"
    assert _run("concatenate", a="foo", b="bar").data["result"]["text"] == "foobar"
    assert _run("concatenate_bounded", a="world", b="hi ", n=3).data["result"]["text"] == "hi wor"
    swapped = _run("swap", a="left", b="right").data
    assert swapped["a"]["text"] == "right"
    assert swapped["b"]["text"] == "left"


@pytest.mark.parametrize(
    "name, kwargs, kind",
    [
        ("length", {}, NULL_INPUT),
        ("compare", {"a": "x"}, NULL_INPUT),
        ("copy_bounded", {"source": "x", "n": -1}, INVALID_ARGUMENT),
        ("parse_integer", {"s": "ff", "base": 16}, INVALID_ARGUMENT),
        ("find_byte", {"buffer": "x", "target": "xy"}, INVALID_ARGUMENT),
    ],
)
def test_failures_are_tagged_with_kind(name, kwargs, kind):
    result = _run(name, **kwargs)
    assert result.success is False
    assert result.error_kind == kind
    assert result.error


def test_allocation_failure_is_reported():
    with allocation_limit(2):
        result = _run("copy", source="abc")
    assert result.success is False
    assert result.error_kind == ALLOCATION_FAILURE
