"""
Shared configuration and exception types for smartjson.
"""

from .config import (
    ExtractionConfig,
    NoiseSettings,
    NormalizationSettings,
    PreprocessingConfig,
    StreamingConfig,
)
from .exceptions import ConfigurationError, ParseError, RegexTimeoutError, SmartJSONError

__all__ = [
    "ExtractionConfig",
    "NoiseSettings",
    "NormalizationSettings",
    "PreprocessingConfig",
    "StreamingConfig",
    "SmartJSONError",
    "ConfigurationError",
    "ParseError",
    "RegexTimeoutError",
]
