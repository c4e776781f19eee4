"""Uniformity check deciding whether an array can use the tabular layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias

from json2toon.values import Array, Object, Value

Reason = Literal["empty", "non_object_element", "no_columns", "key_mismatch", "nested_value"]


@dataclass(frozen=True)
class Tabular:
    """Array of same-shaped flat objects; rows hold `columns` in order."""

    columns: list[str]


@dataclass(frozen=True)
class NonTabular:
    reason: Reason


Classification: TypeAlias = Tabular | NonTabular


def classify(items: list[Value], *, sort_keys: bool = False) -> Classification:
    """Classify an array for rendering.

    Args:
        items: The array elements.
        sort_keys: Order columns lexicographically instead of by the first
            element's key order.

    Returns:
        `Tabular` with the shared columns, or `NonTabular` with the first
        disqualifying reason found.
    """
    if not items:
        return NonTabular("empty")

    objects = []
    for item in items:
        if not isinstance(item, Object):
            return NonTabular("non_object_element")
        objects.append(item)

    columns = list(objects[0].entries)
    if not columns:
        return NonTabular("no_columns")

    shape = sorted(columns)
    if any(sorted(obj.entries) != shape for obj in objects[1:]):
        return NonTabular("key_mismatch")

    for obj in objects:
        if any(isinstance(cell, (Object, Array)) for cell in obj.entries.values()):
            return NonTabular("nested_value")

    return Tabular(shape if sort_keys else columns)
