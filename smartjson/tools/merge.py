"""
Deep merging of parsed documents.
"""

import copy
from typing import Any


def _union(first: list[Any], second: list[Any]) -> list[Any]:
    """Concatenate two lists, keeping the first occurrence of equal items."""
    result: list[Any] = []
    for item in [*first, *second]:
        if item not in result:
            result.append(item)
    return result


def _merge_two(target: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    for key, value in source.items():
        previous = target.get(key)
        if isinstance(previous, dict) and isinstance(value, dict):
            target[key] = _merge_two(dict(previous), value)
        elif isinstance(previous, list) and isinstance(value, list):
            target[key] = _union(previous, copy.deepcopy(value))
        else:
            target[key] = copy.deepcopy(value)
    return target


def merge(*objects: dict[str, Any]) -> dict[str, Any]:
    """
    Merge objects left to right into a new object.

    Nested objects merge recursively, arrays are concatenated without
    duplicates, and any other value from a later object overwrites the
    earlier one. Non-object arguments are skipped. The inputs are not modified.

    Example:
        >>> merge({"a": {"x": 1}, "t": [1]}, {"a": {"y": 2}, "t": [1, 2]})
        {'a': {'x': 1, 'y': 2}, 't': [1, 2]}
    """
    result: dict[str, Any] = {}
    for obj in objects:
        if isinstance(obj, dict):
            _merge_two(result, obj)
    return result
