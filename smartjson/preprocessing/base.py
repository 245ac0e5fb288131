"""
Shared interface for text rewriting steps.

A step decides from the config whether it runs and, if so, maps text to
text. Steps never raise for malformed input.
"""

from typing import Any, Protocol

from ..core.regex_engine import RegexEngine, get_engine
from ..utils.config import PreprocessingConfig


class PreprocessingStep(Protocol):
    """Anything a ``PreprocessingPipeline`` can run."""

    def process(self, text: str, config: Any) -> str: ...

    def should_apply(self, config: Any) -> bool: ...


class PreprocessingStepBase:
    """Default step behaviour: always enabled, pattern work via the shared engine."""

    @property
    def engine(self) -> RegexEngine:
        return get_engine()

    def should_apply(self, config: PreprocessingConfig) -> bool:
        return True

    def process(self, text: str, config: PreprocessingConfig) -> str:
        raise NotImplementedError(f"{type(self).__name__} must implement process()")
