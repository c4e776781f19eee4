"""Tests for the tabular uniformity check."""

from __future__ import annotations

from json2toon.classify import NonTabular, Tabular, classify
from json2toon.values import Array, Number, Object, String, from_python


def items(data: list) -> list:
    value = from_python(data)
    assert isinstance(value, Array)
    return value.items


def test_empty_array_is_not_tabular() -> None:
    assert classify([]) == NonTabular("empty")


def test_scalar_elements() -> None:
    assert classify(items([1, 2])) == NonTabular("non_object_element")


def test_mixed_elements() -> None:
    assert classify(items([{"a": 1}, [1]])) == NonTabular("non_object_element")


def test_empty_objects_have_no_columns() -> None:
    assert classify(items([{}, {}])) == NonTabular("no_columns")


def test_key_mismatch() -> None:
    assert classify(items([{"a": 1}, {"b": 2}])) == NonTabular("key_mismatch")
    assert classify(items([{"a": 1}, {"a": 1, "b": 2}])) == NonTabular("key_mismatch")


def test_nested_value_disqualifies() -> None:
    data = [{"id": 1, "meta": {"x": 1}}, {"id": 2, "meta": {"x": 2}}]
    assert classify(items(data)) == NonTabular("nested_value")


def test_nested_array_disqualifies() -> None:
    assert classify(items([{"tags": []}])) == NonTabular("nested_value")


def test_tabular_uses_first_element_key_order() -> None:
    data = [{"b": 1, "a": 2}, {"a": 3, "b": 4}]
    assert classify(items(data)) == Tabular(["b", "a"])


def test_tabular_sorted_columns() -> None:
    data = [{"b": 1, "a": 2}, {"a": 3, "b": 4}]
    assert classify(items(data), sort_keys=True) == Tabular(["a", "b"])


def test_value_instances() -> None:
    rows = [Object({"n": Number(1), "s": String("x")})]
    assert classify(rows) == Tabular(["n", "s"])
