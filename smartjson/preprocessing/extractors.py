"""
Noise stripping preprocessing steps.

This module contains preprocessing steps that remove the material language
models tend to wrap around JSON: markdown code fences, leading and trailing
prose, Python-style literals and escaped newlines.
"""

import regex

from ..utils.config import PreprocessingConfig
from .base import PreprocessingStepBase

CODE_FENCE_PATTERN = r"```[A-Za-z0-9_+.\-]*[ \t]*\r?\n?(.*?)```"
PYTHON_LITERAL_PATTERN = r"\b(None|True|False)\b"

PYTHON_LITERALS = {"None": "null", "True": "true", "False": "false"}


class MarkdownExtractor(PreprocessingStepBase):
    """Unwraps every fenced markdown code block, keeping its content."""

    def should_apply(self, config: PreprocessingConfig) -> bool:
        """Apply if markdown extraction is enabled."""
        return config.extract_from_markdown

    def process(self, text: str, config: PreprocessingConfig) -> str:
        """Replace each ```` ```lang ... ``` ```` block with its body."""
        if "```" not in text:
            return text
        return self.engine.sub(CODE_FENCE_PATTERN, r"\1", text, flags=regex.DOTALL)


class ContentExtractor(PreprocessingStepBase):
    """Drops text before the first '{' and after the last '}'."""

    def should_apply(self, config: PreprocessingConfig) -> bool:
        """Apply if surrounding text trimming is enabled."""
        return config.trim_surrounding_text

    def process(self, text: str, config: PreprocessingConfig) -> str:
        """Cut prose such as ``Here is the JSON:`` from around the object."""
        return self.trim_surrounding_text(text)

    @staticmethod
    def trim_surrounding_text(text: str) -> str:
        """Trim to the outermost braces; text without both passes through."""
        first = text.find("{")
        if first == -1 or "}" not in text:
            return text

        result = text[first:]
        last = result.rfind("}")
        if last == -1:
            return result
        return result[: last + 1]


class LiteralTranslator(PreprocessingStepBase):
    """Translates Python's None/True/False into JSON literals."""

    def should_apply(self, config: PreprocessingConfig) -> bool:
        """Apply if literal translation is enabled."""
        return config.translate_literals

    def process(self, text: str, config: PreprocessingConfig) -> str:
        """Replace whole-word ``None``, ``True`` and ``False``."""
        return self.engine.sub(
            PYTHON_LITERAL_PATTERN, lambda m: PYTHON_LITERALS[m.group(1)], text
        )


class EscapedNewlineHandler(PreprocessingStepBase):
    """Turns literal backslash-n pairs into real newlines."""

    def should_apply(self, config: PreprocessingConfig) -> bool:
        """Apply if newline unescaping is enabled."""
        return config.unescape_newlines

    def process(self, text: str, config: PreprocessingConfig) -> str:
        r"""Collapse ``\n`` written as two characters into a newline."""
        return text.replace("\\n", "\n")
