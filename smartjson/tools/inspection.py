"""
Structural statistics for parsed documents.
"""

from dataclasses import dataclass, field
from typing import Any

from .formatting import stringify_safe


def json_type_name(value: Any) -> str:
    """Name of the JSON type a Python value serializes to."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _children(value: Any) -> Any:
    if isinstance(value, dict):
        return value.values()
    if isinstance(value, (list, tuple)):
        return value
    return None


@dataclass
class DocumentStats:
    """Summary of a document's shape."""

    keys: int = 0
    types: dict[str, int] = field(default_factory=dict)
    depth: int = 0
    size: int = 0
    preview: str = ""


def _depth(value: Any, current: int, ancestors: set[int]) -> int:
    children = _children(value)
    if children is None or id(value) in ancestors:
        return current

    ancestors.add(id(value))
    deepest = max(
        (_depth(child, current + 1, ancestors) for child in children),
        default=current,
    )
    ancestors.discard(id(value))
    return deepest


def inspect_document(obj: Any) -> DocumentStats:
    """
    Count keys and value types, and measure nesting depth and size.

    ``depth`` is the number of container levels below the root that hold a
    value (``{"a": 1}`` has depth 1). ``size`` is the length of the indented
    serialization; ``preview`` is the compact one. Containers reached a
    second time are not counted again.
    """
    stats = DocumentStats()
    seen: set[int] = set()

    stack = [obj]
    while stack:
        value = stack.pop()
        children = _children(value)
        if children is not None:
            if id(value) in seen:
                continue
            seen.add(id(value))
            if isinstance(value, dict):
                stats.keys += len(value)
            stack.extend(children)

        type_name = json_type_name(value)
        stats.types[type_name] = stats.types.get(type_name, 0) + 1

    stats.depth = _depth(obj, 0, set())
    stats.size = len(stringify_safe(obj))
    stats.preview = stringify_safe(obj, 0)
    return stats
