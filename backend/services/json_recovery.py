"""Recover a JSON object from free-form model output.

Models do not always honor "JSON only" instructions, so parsing is an ordered
chain of pure attempts. Each attempt returns a dict or None; the first dict
wins.
"""

import json
import logging
import re
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

# Contents of each ```json ... ``` (or bare ```) fence, shortest match
_FENCED_BLOCK = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)

_decoder = json.JSONDecoder()

ParseAttempt = Callable[[str], dict[str, Any] | None]


def _loads_object(candidate: str) -> dict[str, Any] | None:
    try:
        value = json.loads(candidate)
    except (json.JSONDecodeError, TypeError):
        return None
    return value if isinstance(value, dict) else None


def parse_fenced_block(text: str) -> dict[str, Any] | None:
    """Parse the first code fence whose contents are a JSON object."""
    for match in _FENCED_BLOCK.finditer(text):
        result = _loads_object(match.group(1).strip())
        if result is not None:
            return result
    return None


def parse_embedded_object(text: str) -> dict[str, Any] | None:
    """Decode from each "{" in turn and return the first complete object.

    Braces in surrounding prose (e.g. "{mg/dL}") fail to decode and are
    skipped.
    """
    start = text.find("{")
    while start != -1:
        try:
            value, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, dict):
            return value
        start = text.find("{", start + 1)
    return None


def parse_whole_text(text: str) -> dict[str, Any] | None:
    """Parse the entire reply as JSON."""
    return _loads_object(text.strip())


DEFAULT_ATTEMPTS: tuple[ParseAttempt, ...] = (
    parse_fenced_block,
    parse_embedded_object,
    parse_whole_text,
)


def recover_json(
    text: str,
    attempts: tuple[ParseAttempt, ...] = DEFAULT_ATTEMPTS,
) -> dict[str, Any] | None:
    """Run the parse attempts in order and return the first object found."""
    for attempt in attempts:
        result = attempt(text)
        if result is not None:
            return result
        logger.debug("JSON attempt %s found nothing", attempt.__name__)
    return None
