"""
Formatting helpers: minify, pretty-print and cycle-safe serialization.
"""

import json
from typing import Any

CIRCULAR_MARKER = "[Circular ~]"


def minify(text: str) -> str:
    """Re-serialize valid JSON text without insignificant whitespace.

    Raises:
        json.JSONDecodeError: If ``text`` is not valid JSON
    """
    return json.dumps(json.loads(text), separators=(",", ":"), ensure_ascii=False)


def pretty(text: str, spaces: int = 2) -> str:
    """Re-serialize valid JSON text with ``spaces`` of indentation.

    Raises:
        json.JSONDecodeError: If ``text`` is not valid JSON
    """
    return json.dumps(json.loads(text), indent=spaces, ensure_ascii=False)


def _break_cycles(value: Any, seen: set[int]) -> Any:
    """Copy ``value``, replacing containers already visited with a marker.

    Visits are tracked by identity, so a container reached twice (through a
    cycle or through a shared reference) is written out once.
    """
    if isinstance(value, (dict, list, tuple)):
        if id(value) in seen:
            return CIRCULAR_MARKER
        seen.add(id(value))
        if isinstance(value, dict):
            return {key: _break_cycles(item, seen) for key, item in value.items()}
        return [_break_cycles(item, seen) for item in value]
    return value


def stringify_safe(obj: Any, space: int = 2) -> str:
    """
    Serialize ``obj`` to JSON even if it contains reference cycles.

    Args:
        obj: Any JSON-like Python structure; unknown types are written with str()
        space: Indentation width; 0 gives compact output

    Returns:
        JSON text where every revisited container is ``"[Circular ~]"``
    """
    safe = _break_cycles(obj, set())
    if space:
        return json.dumps(safe, indent=space, ensure_ascii=False, default=str)
    return json.dumps(safe, separators=(",", ":"), ensure_ascii=False, default=str)
