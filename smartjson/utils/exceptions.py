"""
Exception types for smartjson.

None of these are raised for malformed input: the extraction pipeline turns
unparseable text into ``None``. They exist for caller misuse (bad
configuration), for the regex engine's timeout reporting, and to carry
position/context information about a rejected candidate into the logs.
"""

import json
from typing import Optional


class SmartJSONError(Exception):
    """Base class for all smartjson exceptions."""


class ConfigurationError(SmartJSONError, ValueError):
    """Raised when a configuration value is out of range."""


class ParseError(SmartJSONError):
    """A candidate that could not be parsed, with position and context."""

    def __init__(
        self,
        message: str,
        position: int = 0,
        line: int = 1,
        column: int = 1,
        context: str = "",
    ):
        self.message = message
        self.position = position
        self.line = line
        self.column = column
        self.context = context
        super().__init__(self._format())

    def _format(self) -> str:
        text = f"{self.message} at line {self.line}, column {self.column}"
        if self.context:
            text += f" near {self.context!r}"
        return text

    @classmethod
    def from_decode_error(
        cls, error: json.JSONDecodeError, context_length: int = 40
    ) -> "ParseError":
        """Build a ParseError from the standard library's decode error."""
        doc = error.doc or ""
        start = max(0, error.pos - context_length // 2)
        end = min(len(doc), error.pos + context_length // 2)
        return cls(
            error.msg,
            position=error.pos,
            line=error.lineno,
            column=error.colno,
            context=doc[start:end],
        )


class RegexTimeoutError(SmartJSONError):
    """Raised when a regex operation exceeds its timeout."""

    def __init__(
        self,
        pattern: str,
        input_length: int,
        timeout: float,
        operation: str = "sub",
        detail: Optional[str] = None,
    ):
        self.pattern = pattern
        self.input_length = input_length
        self.timeout = timeout
        self.operation = operation

        pattern_display = pattern[:100] + "..." if len(pattern) > 100 else pattern
        message = (
            f"Regex {operation} timed out after {timeout}s\n"
            f"Pattern: {pattern_display}\n"
            f"Input length: {input_length} chars"
        )
        if detail:
            message += f"\n{detail}"
        super().__init__(message)
