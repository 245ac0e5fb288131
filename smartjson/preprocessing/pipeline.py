"""
Preprocessing pipelines for composable repair steps.

Two fixed pipelines are built from the steps in this package: the
normalizer, which repairs near-JSON syntax, and the noise stripper, which
removes wrapping material around a JSON object. Both are total: the worst
outcome is text that still fails to parse, which the caller detects.
"""

from typing import Optional

from ..utils.config import PreprocessingConfig
from .base import PreprocessingStep
from .extractors import (
    ContentExtractor,
    EscapedNewlineHandler,
    LiteralTranslator,
    MarkdownExtractor,
)
from .normalizers import (
    KeyQuoter,
    QuoteNormalizer,
    TrailingCommaRemover,
    WhitespaceNormalizer,
)


class PreprocessingPipeline:
    """An ordered list of steps; each enabled step rewrites the previous output."""

    def __init__(self, steps: Optional[list[PreprocessingStep]] = None):
        self.steps = steps or []

    def add_step(self, step: PreprocessingStep) -> None:
        """Append ``step``; it runs after every step already added."""
        self.steps.append(step)

    def process(self, text: str, config: Optional[PreprocessingConfig] = None) -> str:
        """Run the steps the config enables, in order (defaults when config is None)."""
        if config is None:
            config = PreprocessingConfig()

        result = text
        for step in self.steps:
            if step.should_apply(config):
                result = step.process(result, config)
        return result

    @classmethod
    def create_normalizer_pipeline(cls) -> "PreprocessingPipeline":
        """Syntax repair: keys, trailing commas, quotes, whitespace."""
        pipeline = cls()
        pipeline.add_step(KeyQuoter())
        pipeline.add_step(TrailingCommaRemover())
        pipeline.add_step(QuoteNormalizer())
        pipeline.add_step(WhitespaceNormalizer())
        return pipeline

    @classmethod
    def create_noise_pipeline(cls) -> "PreprocessingPipeline":
        """Noise removal: code fences, prose, Python literals, escaped newlines."""
        pipeline = cls()
        pipeline.add_step(MarkdownExtractor())
        pipeline.add_step(ContentExtractor())
        pipeline.add_step(LiteralTranslator())
        pipeline.add_step(EscapedNewlineHandler())
        return pipeline


_NORMALIZER = PreprocessingPipeline.create_normalizer_pipeline()
_NOISE_STRIPPER = PreprocessingPipeline.create_noise_pipeline()


def normalize(text: str, config: Optional[PreprocessingConfig] = None) -> str:
    """
    Repair common near-JSON syntax problems.

    Quotes bare keys, removes trailing commas, converts single quotes to
    double quotes and trims whitespace, in that order. Never raises; running
    it twice gives the same result as running it once.

    Args:
        text: Text that is supposed to be JSON
        config: Optional PreprocessingConfig to switch individual steps off

    Returns:
        The repaired text
    """
    return _NORMALIZER.process(text, config)


def strip_noise(text: str, config: Optional[PreprocessingConfig] = None) -> str:
    """
    Remove non-JSON material from around a JSON object.

    Unwraps markdown code fences, drops text before the first ``{`` and after
    the last ``}``, translates ``None``/``True``/``False`` and turns literal
    ``\\n`` sequences into newlines. Never raises.
    """
    return _NOISE_STRIPPER.process(text, config)
