"""
Configuration for smartjson repair, extraction and streaming.

Settings are grouped into small dataclasses; ``PreprocessingConfig`` bundles
the repair and noise groups and exposes flat properties so preprocessing steps
can ask a single object whether they should run.
"""

from dataclasses import dataclass, fields
from typing import Any, Optional

from .exceptions import ConfigurationError


@dataclass
class NormalizationSettings:
    """Settings for syntactic repair of near-JSON text."""
    quote_keys: bool = True
    remove_trailing_commas: bool = True
    normalize_quotes: bool = True
    string_aware_quotes: bool = False
    strip_whitespace: bool = True


@dataclass
class NoiseSettings:
    """Settings for removal of non-JSON wrapping material."""
    extract_from_markdown: bool = True
    trim_surrounding_text: bool = True
    translate_literals: bool = True
    unescape_newlines: bool = True


@dataclass
class PreprocessingConfig:
    """Granular control over normalization and noise stripping steps."""

    normalization: Optional[NormalizationSettings] = None
    noise: Optional[NoiseSettings] = None

    def __post_init__(self) -> None:
        if self.normalization is None:
            self.normalization = NormalizationSettings()
        if self.noise is None:
            self.noise = NoiseSettings()

    @property
    def quote_keys(self) -> bool:
        """Whether to quote bare identifier keys."""
        assert self.normalization is not None
        return self.normalization.quote_keys

    @property
    def remove_trailing_commas(self) -> bool:
        """Whether to drop commas before closing braces and brackets."""
        assert self.normalization is not None
        return self.normalization.remove_trailing_commas

    @property
    def normalize_quotes(self) -> bool:
        """Whether to convert single quotes to double quotes."""
        assert self.normalization is not None
        return self.normalization.normalize_quotes

    @property
    def string_aware_quotes(self) -> bool:
        """Whether quote conversion skips apostrophes inside strings."""
        assert self.normalization is not None
        return self.normalization.string_aware_quotes

    @property
    def strip_whitespace(self) -> bool:
        """Whether to trim surrounding whitespace."""
        assert self.normalization is not None
        return self.normalization.strip_whitespace

    @property
    def extract_from_markdown(self) -> bool:
        """Whether to unwrap fenced code blocks."""
        assert self.noise is not None
        return self.noise.extract_from_markdown

    @property
    def trim_surrounding_text(self) -> bool:
        """Whether to drop prose before the first '{' and after the last '}'."""
        assert self.noise is not None
        return self.noise.trim_surrounding_text

    @property
    def translate_literals(self) -> bool:
        """Whether to translate None/True/False into JSON literals."""
        assert self.noise is not None
        return self.noise.translate_literals

    @property
    def unescape_newlines(self) -> bool:
        """Whether to turn literal backslash-n sequences into newlines."""
        assert self.noise is not None
        return self.noise.unescape_newlines

    @classmethod
    def conservative(cls) -> "PreprocessingConfig":
        """Repair keys and commas only; leave quotes and literals alone."""
        return cls(
            normalization=NormalizationSettings(
                normalize_quotes=False,
            ),
            noise=NoiseSettings(
                translate_literals=False,
                unescape_newlines=False,
            ),
        )

    @classmethod
    def aggressive(cls) -> "PreprocessingConfig":
        """Every repair and noise step enabled (the default)."""
        return cls()

    @classmethod
    def from_features(cls, enabled_features: set[str]) -> "PreprocessingConfig":
        """Create a configuration with only the named steps enabled."""
        normalization = NormalizationSettings(
            **{f.name: False for f in fields(NormalizationSettings)}
        )
        noise = NoiseSettings(**{f.name: False for f in fields(NoiseSettings)})

        for feature_name in enabled_features:
            for group in (normalization, noise):
                if hasattr(group, feature_name):
                    setattr(group, feature_name, True)

        return cls(normalization=normalization, noise=noise)


# camelCase spellings accepted by ExtractionConfig.from_options
_OPTION_ALIASES = {
    "asText": "as_text",
    "returnString": "as_text",
    "return_string": "as_text",
    "tryFix": "repair",
    "try_fix": "repair",
}


@dataclass
class ExtractionConfig:
    """Options for the multi-document extractor."""

    repair: bool = True
    multi: bool = False
    as_text: bool = False
    indent: int = 2
    remove_comments: bool = True
    strict: bool = False
    preprocessing: Optional[PreprocessingConfig] = None

    def __post_init__(self) -> None:
        if self.preprocessing is None:
            self.preprocessing = PreprocessingConfig()
        if self.indent < 0:
            raise ConfigurationError("indent must not be negative")

    @classmethod
    def from_options(cls, **options: Any) -> "ExtractionConfig":
        """Build a config from keyword options, accepting camelCase aliases."""
        kwargs = {}
        known = {f.name for f in fields(cls)}
        for name, value in options.items():
            name = _OPTION_ALIASES.get(name, name)
            if name not in known:
                raise ConfigurationError(f"Unknown extraction option: {name}")
            kwargs[name] = value
        return cls(**kwargs)


@dataclass
class StreamingConfig:
    """Options for the incremental chunk extractor."""

    chunk_size: int = 1024 * 10
    buffer_multiplier: int = 5
    repair: bool = False

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ConfigurationError("chunk_size must be positive")
        if self.buffer_multiplier < 1:
            raise ConfigurationError("buffer_multiplier must be at least 1")

    @property
    def max_buffer_size(self) -> int:
        """Ceiling on the rolling buffer length."""
        return self.chunk_size * self.buffer_multiplier

    @classmethod
    def from_options(cls, **options: Any) -> "StreamingConfig":
        """Build a config from keyword options, accepting ``chunkSize``."""
        if "chunkSize" in options:
            options["chunk_size"] = options.pop("chunkSize")
        known = {f.name for f in fields(cls)}
        unknown = set(options) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown streaming option: {', '.join(sorted(unknown))}"
            )
        return cls(**options)
