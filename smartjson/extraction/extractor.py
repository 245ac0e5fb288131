"""
Multi-document extraction from free text.

Model responses often hold one or more JSON objects wrapped in prose and code
fences. ``extract`` strips the wrapping, finds each balanced ``{...}`` span,
removes comments, optionally repairs it and parses it. A span that will not
parse is dropped; it never stops its siblings from being returned.
"""

import json
import logging
from collections.abc import Iterator
from typing import Any, Optional

from ..core.engine import loads_strict, parse_with_repair
from ..core.scanner import CandidateSpan, scan_spans
from ..preprocessing.handlers import CommentHandler
from ..preprocessing.pipeline import strip_noise
from ..utils.config import ExtractionConfig
from ..utils.exceptions import ParseError

logger = logging.getLogger(__name__)


class DocumentExtractor:
    """Extracts parsed JSON documents from text according to a config."""

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or ExtractionConfig()
        self.comment_handler = CommentHandler()

    def extract(self, text: str) -> Any:
        """
        Extract according to the configured mode.

        Returns:
            The first document (``multi=False``), a list of documents
            (``multi=True``), or None when nothing could be parsed
        """
        if not isinstance(text, str):
            return None

        if not self.config.multi:
            for document in self.iter_documents(text):
                return document
            return None

        documents = list(self.iter_documents(text))
        return documents or None

    def iter_documents(self, text: str) -> Iterator[Any]:
        """Yield each successfully parsed candidate, in order of appearance."""
        cleaned = strip_noise(text, self.config.preprocessing)

        for span in scan_spans(cleaned):
            try:
                document = self.parse_candidate(span)
            except ParseError as e:
                logger.debug(
                    "Dropping candidate at %d-%d: %s", span.start, span.end, e
                )
                continue

            if self.config.as_text:
                yield json.dumps(
                    document, indent=self.config.indent, ensure_ascii=False
                )
            else:
                yield document

    def parse_candidate(self, span: CandidateSpan) -> Any:
        """
        Parse a single candidate span.

        Raises:
            ParseError: If the candidate cannot be parsed
        """
        candidate = span.text
        if self.config.remove_comments:
            candidate = self.comment_handler.process(
                candidate, self.config.preprocessing
            )

        if self.config.repair:
            return parse_with_repair(
                candidate, self.config.strict, self.config.preprocessing
            )
        return loads_strict(candidate, self.config.strict)


def extract(
    text: str, config: Optional[ExtractionConfig] = None, **options: Any
) -> Any:
    """
    Extract JSON document(s) from arbitrary text.

    Args:
        text: Raw text, e.g. a model response
        config: ExtractionConfig; mutually exclusive with keyword options
        **options: ``repair``, ``multi``, ``as_text`` (``asText``), ``indent``,
            ``remove_comments``, ``strict``, ``preprocessing``

    Returns:
        The first parsed document, a list of all of them when ``multi`` is
        set, or None if no candidate could be parsed

    Example:
        >>> extract('Result 1: {"a":1} Result 2: {"b":2}', multi=True)
        [{'a': 1}, {'b': 2}]
    """
    if config is not None and options:
        raise TypeError("Pass either config or keyword options, not both")
    if config is None:
        config = ExtractionConfig.from_options(**options)

    return DocumentExtractor(config).extract(text)


def extract_all(text: str, **options: Any) -> list[Any]:
    """Extract every document; returns an empty list rather than None."""
    options["multi"] = True
    return extract(text, **options) or []


auto_extract = extract
