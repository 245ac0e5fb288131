"""
Syntax repair steps that make up the normalizer.

Bare keys, trailing commas, single quotes and surrounding whitespace are
repaired in that order. Key quoting has to come before quote conversion,
otherwise a colon inside a single-quoted value could be taken for a key
separator.
"""

from ..utils.config import PreprocessingConfig
from .base import PreprocessingStepBase

BARE_KEY_PATTERN = r"([{,]\s*)([A-Za-z0-9_]+)\s*:"
TRAILING_COMMA_PATTERN = r",(?:\s*,)*(\s*[}\]])"


class KeyQuoter(PreprocessingStepBase):
    """Wraps identifier-style object keys in double quotes."""

    def should_apply(self, config: PreprocessingConfig) -> bool:
        """Apply if key quoting is enabled."""
        return config.quote_keys

    def process(self, text: str, config: PreprocessingConfig) -> str:
        """Quote keys such as ``{name: 1}`` -> ``{"name": 1}``."""
        return self.engine.sub(BARE_KEY_PATTERN, r'\1"\2":', text)


class TrailingCommaRemover(PreprocessingStepBase):
    """Removes commas that directly precede a closing brace or bracket."""

    def should_apply(self, config: PreprocessingConfig) -> bool:
        """Apply if trailing comma removal is enabled."""
        return config.remove_trailing_commas

    def process(self, text: str, config: PreprocessingConfig) -> str:
        """Turn ``{"a": 1,}`` into ``{"a": 1}``; runs of commas go together."""
        return self.engine.sub(TRAILING_COMMA_PATTERN, r"\1", text)


class QuoteNormalizer(PreprocessingStepBase):
    """Converts single quotes to double quotes."""

    def should_apply(self, config: PreprocessingConfig) -> bool:
        """Apply if single quotes should be converted."""
        return config.normalize_quotes

    def process(self, text: str, config: PreprocessingConfig) -> str:
        """Replace single quotes.

        By default every ``'`` becomes ``"``, which also hits apostrophes in
        string values. ``string_aware_quotes`` switches to a scan that only
        rewrites single-quoted strings found outside double-quoted ones.
        """
        if config.string_aware_quotes:
            return self._convert_single_quotes_safe(text)
        return text.replace("'", '"')

    @staticmethod
    def _convert_single_quotes_safe(text: str) -> str:
        """Convert single-quoted strings while preserving apostrophes inside strings."""
        result = []
        i = 0
        in_double_quote = False

        while i < len(text):
            char = text[i]

            if in_double_quote:
                result.append(char)
                if char == "\\" and i + 1 < len(text):
                    result.append(text[i + 1])
                    i += 2
                    continue
                if char == '"':
                    in_double_quote = False
                i += 1
                continue

            if char == '"':
                in_double_quote = True
                result.append(char)
                i += 1
                continue

            if char != "'":
                result.append(char)
                i += 1
                continue

            # Closing quote, skipping escapes
            j = i + 1
            while j < len(text) and text[j] != "'":
                j += 2 if text[j] == "\\" else 1

            if j >= len(text):
                # Unterminated: convert the lone quote and carry on
                result.append('"')
                i += 1
                continue

            content = text[i + 1 : j].replace("\\'", "'")
            content = QuoteNormalizer._escape_double_quotes(content)
            result.append(f'"{content}"')
            i = j + 1

        return "".join(result)

    @staticmethod
    def _escape_double_quotes(content: str) -> str:
        """Escape bare double quotes inside what used to be a single-quoted string."""
        escaped = []
        i = 0
        while i < len(content):
            char = content[i]
            if char == "\\" and i + 1 < len(content):
                escaped.append(content[i : i + 2])
                i += 2
                continue
            escaped.append('\\"' if char == '"' else char)
            i += 1
        return "".join(escaped)


class WhitespaceNormalizer(PreprocessingStepBase):
    """Trims leading and trailing whitespace."""

    def should_apply(self, config: PreprocessingConfig) -> bool:
        """Apply if whitespace stripping is enabled."""
        return config.strip_whitespace

    def process(self, text: str, config: PreprocessingConfig) -> str:
        """Strip surrounding whitespace."""
        return text.strip()
