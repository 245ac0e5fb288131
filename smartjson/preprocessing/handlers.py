"""
Comment handling for candidate spans.

Models occasionally annotate JSON with ``//`` and ``/* */`` comments. They are
removed from each candidate before parsing; comment markers inside quoted
strings (URLs, for instance) are left alone.
"""

from ..utils.config import PreprocessingConfig
from .base import PreprocessingStepBase


class CommentHandler(PreprocessingStepBase):
    """Strips // and /* */ comments outside string literals."""

    def process(self, text: str, config: PreprocessingConfig) -> str:
        """Return ``text`` without comments; text without a slash is returned as is."""
        if "/" not in text:
            return text
        return self.remove_comments(text)

    @staticmethod
    def remove_comments(text: str) -> str:
        """Remove single-line and multi-line comments outside of strings."""
        result = []
        i = 0
        string_char = None

        while i < len(text):
            char = text[i]
            next_char = text[i + 1] if i + 1 < len(text) else ""

            if string_char is not None:
                result.append(char)
                if char == "\\" and next_char:
                    result.append(next_char)
                    i += 2
                    continue
                if char == string_char:
                    string_char = None
                i += 1
                continue

            if char in "\"'":
                string_char = char
                result.append(char)
                i += 1
            elif char == "/" and next_char == "/":
                # Single-line comment - skip to end of line, keep the newline
                while i < len(text) and text[i] != "\n":
                    i += 1
            elif char == "/" and next_char == "*":
                end = text.find("*/", i + 2)
                i = len(text) if end == -1 else end + 2
                # Keep tokens on either side of the comment apart
                if result and not result[-1].isspace():
                    result.append(" ")
            else:
                result.append(char)
                i += 1

        return "".join(result)
