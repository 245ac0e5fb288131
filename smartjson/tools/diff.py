"""
Comparison and patching of parsed documents.

``compare`` works on top-level keys only; ``patch`` recurses into nested
objects. Neither mutates its arguments.
"""

import copy
import html
import json
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class DiffResult:
    """Top-level key differences between two objects."""

    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    changed: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        """True if any key was added, removed or changed."""
        return bool(self.added or self.removed or self.changed)


def _as_mapping(obj: Optional[Any]) -> dict[str, Any]:
    return obj if isinstance(obj, dict) else {}


def compare(old: Optional[dict[str, Any]], new: Optional[dict[str, Any]]) -> DiffResult:
    """
    Classify every top-level key of ``old`` and ``new``.

    Values are compared by equality, so key order inside nested objects does
    not count as a change. ``None`` is treated as an empty object.
    """
    old_map = _as_mapping(old)
    new_map = _as_mapping(new)
    result = DiffResult()

    for key in dict.fromkeys([*old_map, *new_map]):
        if key not in old_map:
            result.added.append(key)
        elif key not in new_map:
            result.removed.append(key)
        elif old_map[key] != new_map[key]:
            result.changed.append(key)
        else:
            result.unchanged.append(key)

    return result


def patch(old: Any, new: Any) -> Any:
    """
    Return a copy of ``old`` updated to match ``new``.

    Nested objects are patched recursively; arrays and scalars from ``new``
    replace the old value; keys missing from ``new`` are removed. If ``old``
    is not an object a copy of ``new`` is returned; if ``new`` is not an
    object, ``old`` is returned unchanged.
    """
    if not isinstance(old, dict):
        return copy.deepcopy(new)
    if not isinstance(new, dict):
        return old

    result = copy.deepcopy(old)
    for key, new_value in new.items():
        if isinstance(new_value, dict):
            result[key] = patch(old.get(key) or {}, new_value)
        else:
            result[key] = copy.deepcopy(new_value)

    for key in old:
        if key not in new:
            del result[key]

    return result


def _dump(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def changelog(old: Optional[dict[str, Any]], new: Optional[dict[str, Any]]) -> str:
    """Describe the differences between two objects, one line per change."""
    diff = compare(old, new)
    old_map = _as_mapping(old)
    new_map = _as_mapping(new)
    lines = []

    for key in diff.added:
        lines.append(f'+ "{key}" was added.')
    for key in diff.removed:
        lines.append(f'- "{key}" was removed.')
    for key in diff.changed:
        lines.append(
            f'~ "{key}" changed from {_dump(old_map[key])} to {_dump(new_map[key])}.'
        )
    if diff.unchanged:
        lines.append(f"= Unchanged: {', '.join(diff.unchanged)}.")

    if not lines:
        return "No changes."
    return "\n".join(lines)


def _esc(value: Any) -> str:
    return html.escape(str(value), quote=False)


def diff_html(old: Optional[dict[str, Any]], new: Optional[dict[str, Any]]) -> str:
    """Render the differences between two objects as an HTML fragment."""
    diff = compare(old, new)
    old_map = _as_mapping(old)
    new_map = _as_mapping(new)
    rows = []

    for key in diff.added:
        rows.append(
            f'<div class="json-added"><b>{_esc(key)}</b> added: '
            f'<span class="value">{_esc(_dump(new_map[key]))}</span></div>'
        )
    for key in diff.removed:
        rows.append(
            f'<div class="json-removed"><b>{_esc(key)}</b> removed (was '
            f'<span class="value">{_esc(_dump(old_map[key]))}</span>)</div>'
        )
    for key in diff.changed:
        rows.append(
            f'<div class="json-changed"><b>{_esc(key)}</b> changed: '
            f'<span class="old">{_esc(_dump(old_map[key]))}</span> to '
            f'<span class="new">{_esc(_dump(new_map[key]))}</span></div>'
        )
    if diff.unchanged:
        rows.append(
            f'<div class="json-unchanged">Unchanged: '
            f'{_esc(", ".join(diff.unchanged))}</div>'
        )

    if not rows:
        rows.append('<div class="json-same">No differences.</div>')

    body = "\n".join(rows)
    return f'<div class="smartjson-diff">{body}</div>'
