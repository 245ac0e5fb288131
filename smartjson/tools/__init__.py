"""
Utilities that work on already-parsed documents.

Nothing in the extraction pipeline depends on these; they consume its output.
"""

from .diff import DiffResult, changelog, compare, diff_html, patch
from .formatting import CIRCULAR_MARKER, minify, pretty, stringify_safe
from .inspection import DocumentStats, inspect_document, json_type_name
from .merge import merge
from .schema import SchemaResult, validate_schema
from .search import SearchMatch, search

__all__ = [
    "minify",
    "pretty",
    "stringify_safe",
    "CIRCULAR_MARKER",
    "inspect_document",
    "json_type_name",
    "DocumentStats",
    "compare",
    "patch",
    "changelog",
    "diff_html",
    "DiffResult",
    "merge",
    "search",
    "SearchMatch",
    "validate_schema",
    "SchemaResult",
]
