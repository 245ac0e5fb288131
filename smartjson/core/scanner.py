"""
Brace-span scanner.

Locates top-level ``{...}`` substrings in arbitrary text by tracking brace
depth, so nested objects come back as one span rather than being cut at the
first inner ``}``. Quotes are not tracked: a brace inside a string literal is
counted like any other brace, and a document whose strings hold unbalanced
braces may be spanned wrongly.
"""

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class CandidateSpan:
    """A substring believed to hold one JSON object.

    ``end`` is the index of the closing brace, so ``text`` equals
    ``source[start:end + 1]``.
    """

    start: int
    end: int
    text: str

    def __len__(self) -> int:
        return self.end - self.start + 1


class BraceSpanScanner:
    """Single-pass scanner yielding balanced top-level brace spans."""

    def __init__(self, text: str):
        self.text = text
        self.spans_found = 0
        self.depth = 0

    def scan(self) -> Iterator[CandidateSpan]:
        """Yield each closed top-level span, left to right.

        A ``}`` seen at depth 0 is ignored. A span still open at the end of
        the text is not yielded.
        """
        text = self.text
        start = -1

        for i, char in enumerate(text):
            if char == "{":
                if self.depth == 0:
                    start = i
                self.depth += 1
            elif char == "}" and self.depth > 0:
                self.depth -= 1
                if self.depth == 0:
                    self.spans_found += 1
                    yield CandidateSpan(start, i, text[start : i + 1])

    @property
    def open_depth(self) -> int:
        """Depth left unclosed after the last scanned character."""
        return self.depth


def scan_spans(text: str) -> Iterator[CandidateSpan]:
    """Lazily yield the balanced ``{...}`` spans of ``text``."""
    return BraceSpanScanner(text).scan()
