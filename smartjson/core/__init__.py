"""
smartjson core: safe parsing, brace-span scanning and regex execution.
"""

from .engine import autofix, fix_json, is_valid, looks_broken, parse_safe
from .regex_engine import RegexConfig, RegexEngine, TimeoutBehavior, get_engine
from .scanner import BraceSpanScanner, CandidateSpan, scan_spans

__all__ = [
    "parse_safe",
    "is_valid",
    "looks_broken",
    "autofix",
    "fix_json",
    "scan_spans",
    "BraceSpanScanner",
    "CandidateSpan",
    "RegexConfig",
    "RegexEngine",
    "TimeoutBehavior",
    "get_engine",
]
