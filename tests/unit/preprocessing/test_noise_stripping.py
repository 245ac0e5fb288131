"""
Test cases for the noise stripper.

Tests markdown unwrapping, prose trimming, literal translation and newline
unescaping, each on its own and as the combined pipeline.
"""

import json

import pytest

from smartjson.preprocessing import (
    ContentExtractor,
    EscapedNewlineHandler,
    LiteralTranslator,
    MarkdownExtractor,
    strip_noise,
)
from smartjson.utils.config import NoiseSettings, PreprocessingConfig


class TestMarkdownExtractor:
    """Test unwrapping of fenced code blocks."""

    def setup_method(self):
        self.step = MarkdownExtractor()
        self.config = PreprocessingConfig()

    def test_json_fence(self):
        text = '```json\n{"a": 1}\n```'
        assert self.step.process(text, self.config) == '{"a": 1}\n'

    def test_fence_without_language(self):
        text = '```\n{"a": 1}```'
        assert self.step.process(text, self.config) == '{"a": 1}'

    def test_every_fence_is_unwrapped(self):
        text = '```json\n{"a": 1}\n```\nand\n```json\n{"b": 2}\n```'
        assert self.step.process(text, self.config) == '{"a": 1}\n\nand\n{"b": 2}\n'

    def test_text_without_fence_untouched(self):
        text = 'no fences {"a": 1}'
        assert self.step.process(text, self.config) is text

    def test_unclosed_fence_left_alone(self):
        text = '```json\n{"a": 1}'
        assert self.step.process(text, self.config) == text


class TestContentExtractor:
    """Test trimming prose around the outermost braces."""

    def test_prose_on_both_sides(self):
        text = 'Here is the JSON: {"a": 1} Hope this helps!'
        assert ContentExtractor.trim_surrounding_text(text) == '{"a": 1}'

    def test_keeps_everything_between_first_and_last_brace(self):
        text = 'x {"a": 1} and {"b": 2} y'
        assert ContentExtractor.trim_surrounding_text(text) == '{"a": 1} and {"b": 2}'

    @pytest.mark.parametrize("text", ["no braces here", "only { opening", "only } closing"])
    def test_missing_brace_passes_through(self, text):
        assert ContentExtractor.trim_surrounding_text(text) == text

    def test_closing_before_opening(self):
        assert ContentExtractor.trim_surrounding_text("} then {") == "{"


class TestLiteralTranslator:
    """Test translation of Python literals."""

    def test_translates_whole_words(self):
        step = LiteralTranslator()
        text = '{"a": None, "b": True, "c": False}'
        assert step.process(text, PreprocessingConfig()) == (
            '{"a": null, "b": true, "c": false}'
        )

    def test_partial_words_untouched(self):
        step = LiteralTranslator()
        text = '{"Nonetheless": "TrueType", "x": Falsey}'
        assert step.process(text, PreprocessingConfig()) == text

    def test_translates_inside_strings_too(self):
        step = LiteralTranslator()
        assert step.process('{"msg": "None left"}', PreprocessingConfig()) == (
            '{"msg": "null left"}'
        )


class TestEscapedNewlineHandler:
    """Test unescaping of literal backslash-n."""

    def test_backslash_n_becomes_newline(self):
        step = EscapedNewlineHandler()
        assert step.process('{"a":\\n1}', PreprocessingConfig()) == '{"a":\n1}'

    def test_real_newline_untouched(self):
        step = EscapedNewlineHandler()
        assert step.process('{"a":\n1}', PreprocessingConfig()) == '{"a":\n1}'


class TestStripNoise:
    """Test the combined noise stripper."""

    def test_fenced_answer_with_prose(self):
        text = 'Here is the data: ```json\n{"a":1}\n``` Thanks!'
        result = strip_noise(text)
        assert result == '{"a":1}'
        assert json.loads(result.strip()) == {"a": 1}

    def test_python_literals(self):
        result = strip_noise('{"a": None, "b": True}')
        assert json.loads(result) == {"a": None, "b": True}

    def test_no_braces_passes_through(self):
        assert strip_noise("nothing to see") == "nothing to see"

    def test_empty_string(self):
        assert strip_noise("") == ""

    def test_escaped_newlines_between_tokens(self):
        result = strip_noise('Sure!\\n{\\n  "a": 1\\n}\\nDone')
        assert json.loads(result) == {"a": 1}

    def test_conservative_config_keeps_literals(self):
        config = PreprocessingConfig.conservative()
        assert strip_noise('x {"a": None} y', config) == '{"a": None}'

    def test_disabled_steps(self):
        config = PreprocessingConfig(
            noise=NoiseSettings(
                extract_from_markdown=False,
                trim_surrounding_text=False,
                translate_literals=False,
                unescape_newlines=False,
            )
        )
        text = 'say ```json\n{"a": None}``` \\n'
        assert strip_noise(text, config) == text

    def test_never_raises(self):
        for text in ["```", "``````", "{", "}", "\\", "```json\n```", "None"]:
            assert isinstance(strip_noise(text), str)
