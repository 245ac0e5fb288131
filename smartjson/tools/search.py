"""
Key and value search inside parsed documents.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SearchMatch:
    """A matching entry and its location, e.g. ``users[0].name``."""

    path: str
    value: Any


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def search(
    document: Any,
    query: Any,
    match_key: bool = True,
    match_value: bool = True,
    case_sensitive: bool = False,
) -> list[SearchMatch]:
    """
    Find object entries whose key or scalar value contains ``query``.

    Matching is substring-based. Every object entry is checked; array items
    are descended into but only object entries produce matches. An entry
    matching on both key and value is reported twice.

    Args:
        document: A parsed document
        query: Text to look for (non-strings are converted with str())
        match_key: Look at object keys
        match_value: Look at string, number and boolean values
        case_sensitive: Compare without lower-casing

    Returns:
        Matches in document order
    """

    def fold(text: Any) -> str:
        text = _to_text(text)
        return text if case_sensitive else text.lower()

    needle = fold(query)
    results: list[SearchMatch] = []

    def walk(node: Any, path: str) -> None:
        if isinstance(node, list):
            for index, item in enumerate(node):
                walk(item, f"{path}[{index}]")
        elif isinstance(node, dict):
            for key, value in node.items():
                current = f"{path}.{key}" if path else str(key)

                if match_key and needle in fold(key):
                    results.append(SearchMatch(current, value))

                if (
                    match_value
                    and isinstance(value, (str, int, float))
                    and needle in fold(value)
                ):
                    results.append(SearchMatch(current, value))

                if isinstance(value, (dict, list)):
                    walk(value, current)

    walk(document, "")
    return results
