"""
Safe-parse orchestration for smartjson.

``parse_safe`` tries a plain parse, repairs the text once with the
normalizer and tries again, then gives up with ``None``. There is no loop:
pathological input costs exactly two parse attempts.
"""

import json
import logging
from typing import Any, Optional, Union

from ..preprocessing.pipeline import normalize, strip_noise
from ..utils.config import PreprocessingConfig
from ..utils.exceptions import ParseError

logger = logging.getLogger(__name__)

# Substrings that suggest text needs the repair pipeline rather than json.loads
BROKEN_MARKERS = ("```", "```json", "undefined", "None", "NaN")


def _as_text(text: Any) -> Optional[str]:
    """Return ``text`` as str, decoding bytes; None for anything else."""
    if isinstance(text, str):
        return text
    if isinstance(text, (bytes, bytearray)):
        try:
            return bytes(text).decode("utf-8")
        except UnicodeDecodeError:
            return None
    return None


def loads_strict(text: str, strict: bool = True) -> Any:
    """
    Parse ``text`` with the standard library, raising ParseError on failure.

    Args:
        text: JSON text
        strict: When False, control characters are allowed inside strings

    Raises:
        ParseError: With position and context of the failure
    """
    try:
        return json.loads(text, strict=strict)
    except json.JSONDecodeError as e:
        raise ParseError.from_decode_error(e) from e
    except RecursionError as e:
        raise ParseError("Nesting too deep to parse") from e
    except ValueError as e:
        # e.g. integers beyond the interpreter's digit limit
        raise ParseError(str(e)) from e


def parse_with_repair(
    text: str,
    strict: bool = True,
    config: Optional[PreprocessingConfig] = None,
) -> Any:
    """
    Parse ``text``, retrying once after normalization.

    Raises:
        ParseError: From the repaired attempt if both attempts fail
    """
    try:
        return loads_strict(text, strict)
    except ParseError as e:
        logger.debug("Direct parse failed (%s); retrying after repair", e)

    return loads_strict(normalize(text, config), strict)


def parse_safe(
    text: Union[str, bytes],
    strict: bool = True,
    config: Optional[PreprocessingConfig] = None,
) -> Any:
    """
    Parse JSON-like text without ever raising for bad input.

    Valid JSON is parsed directly and never touched by the repair step.
    Otherwise the text is normalized once and parsed again.

    Args:
        text: Text that is supposed to be JSON (bytes are decoded as UTF-8)
        strict: When False, control characters are allowed inside strings
        config: Optional PreprocessingConfig for the repair step

    Returns:
        The parsed value, or None if both attempts failed. A document that is
        literally ``null`` also yields None.
    """
    source = _as_text(text)
    if source is None:
        return None

    try:
        return parse_with_repair(source, strict, config)
    except ParseError as e:
        logger.debug("Repaired parse failed: %s", e)
        return None


def is_valid(text: Union[str, bytes]) -> bool:
    """Return True iff ``text`` is exactly valid JSON (no repair)."""
    source = _as_text(text)
    if source is None:
        return False

    try:
        loads_strict(source)
    except ParseError:
        return False
    return True


def looks_broken(text: Union[str, bytes]) -> bool:
    """
    Cheap triage: does ``text`` carry a marker of typical model corruption?

    Checks for code fences, ``undefined``, ``None`` and ``NaN``. This is a
    hint for choosing between ``json.loads`` and the repair pipeline, not a
    verdict; both false positives and false negatives happen.
    """
    source = _as_text(text)
    if source is None:
        return False
    return any(marker in source for marker in BROKEN_MARKERS)


def autofix(
    text: Union[str, bytes],
    strict: bool = True,
    config: Optional[PreprocessingConfig] = None,
) -> Any:
    """
    Strip noise, normalize and parse in one go.

    Returns:
        The parsed value, or None if the cleaned text still does not parse
    """
    source = _as_text(text)
    if source is None:
        return None

    cleaned = normalize(strip_noise(source, config), config)
    try:
        return loads_strict(cleaned, strict)
    except ParseError as e:
        logger.debug("autofix could not parse cleaned text: %s", e)
        return None


fix_json = normalize
