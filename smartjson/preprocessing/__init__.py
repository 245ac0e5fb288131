"""
JSON preprocessing module.

This module provides the composable preprocessing steps used to repair
near-JSON text (the normalizer) and to strip wrapping noise from model output
(the noise stripper), plus per-candidate comment removal.
"""

from .base import PreprocessingStep, PreprocessingStepBase
from .extractors import (
    ContentExtractor,
    EscapedNewlineHandler,
    LiteralTranslator,
    MarkdownExtractor,
)
from .handlers import CommentHandler
from .normalizers import (
    KeyQuoter,
    QuoteNormalizer,
    TrailingCommaRemover,
    WhitespaceNormalizer,
)
from .pipeline import PreprocessingPipeline, normalize, strip_noise

__all__ = [
    "PreprocessingPipeline",
    "PreprocessingStep",
    "PreprocessingStepBase",
    "normalize",
    "strip_noise",
    "KeyQuoter",
    "TrailingCommaRemover",
    "QuoteNormalizer",
    "WhitespaceNormalizer",
    "MarkdownExtractor",
    "ContentExtractor",
    "LiteralTranslator",
    "EscapedNewlineHandler",
    "CommentHandler",
]
