"""
smartjson - Recover JSON from text that was only supposed to be JSON.

Language models are asked for JSON and answer with something close to it:
unquoted keys, trailing commas, single quotes, markdown code fences, a polite
sentence before and after, Python's None/True/False. smartjson gets the data
out anyway, and when it cannot, it says so with ``None`` instead of raising.

Key Features:
- parse_safe(): json.loads with one repair-and-retry, never raises
- extract(): find one or all JSON objects inside free text
- stream_extract(): pull objects out of chunked input with bounded memory
- normalize() / strip_noise(): the repair steps on their own
- Tools for parsed documents: diff, patch, merge, search, inspect, schema

Quick Start:
    import smartjson

    smartjson.parse_safe('{name: "Egehan", age: 5,}')
    # {'name': 'Egehan', 'age': 5}

    smartjson.extract('Result 1: {"a":1} Result 2: {"b":2}', multi=True)
    # [{'a': 1}, {'b': 2}]

    await smartjson.stream_extract(response_chunks, on_document=print)
"""

from .core.engine import autofix, fix_json, is_valid, looks_broken, parse_safe
from .core.scanner import BraceSpanScanner, CandidateSpan, scan_spans
from .extraction.extractor import DocumentExtractor, auto_extract, extract, extract_all
from .preprocessing.pipeline import normalize, strip_noise
from .streaming.processor import (
    ChunkBuffer,
    IncrementalExtractor,
    iter_extract,
    stream_extract,
)
from .tools import (
    changelog,
    compare,
    diff_html,
    inspect_document,
    merge,
    minify,
    patch,
    pretty,
    search,
    stringify_safe,
    validate_schema,
)
from .utils.config import (
    ExtractionConfig,
    NoiseSettings,
    NormalizationSettings,
    PreprocessingConfig,
    StreamingConfig,
)
from .utils.exceptions import (
    ConfigurationError,
    ParseError,
    RegexTimeoutError,
    SmartJSONError,
)

__version__ = "0.1.0"
__author__ = "smartjson contributors"

__all__ = [
    # Repair and safe parsing
    "normalize", "fix_json", "strip_noise", "parse_safe", "is_valid",
    "looks_broken", "autofix",
    # Candidate location
    "scan_spans", "BraceSpanScanner", "CandidateSpan",
    # Extraction
    "extract", "extract_all", "auto_extract", "DocumentExtractor",
    # Streaming
    "stream_extract", "iter_extract", "IncrementalExtractor", "ChunkBuffer",
    # Configuration classes
    "ExtractionConfig", "StreamingConfig", "PreprocessingConfig",
    "NormalizationSettings", "NoiseSettings",
    # Exception classes
    "SmartJSONError", "ConfigurationError", "ParseError", "RegexTimeoutError",
    # Document tools
    "minify", "pretty", "stringify_safe", "inspect_document", "compare",
    "patch", "changelog", "diff_html", "merge", "search", "validate_schema",
]
