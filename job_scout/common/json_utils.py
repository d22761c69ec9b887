"""
JSON Utilities for LLM Response Parsing.

Gemini replies grounded with Google Search cannot be forced into JSON mode,
so the model text may wrap the JSON in prose or markdown code fences.

``extract_json`` runs an ordered chain of extraction strategies and returns
the first object or array that parses:

1. The interior of the first fenced code block (```json ... ```)
2. The span from the first ``{`` or ``[`` (whichever comes first) to the last
   matching closer in the whole text
3. The whole trimmed text
4. Optionally, a json-repair pass over the best candidate span

Each strategy returns ``None`` instead of raising. If all of them fail the
failure is logged and ``None`` is returned.
"""

import json
import logging
import re
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)

# Non-greedy so only the first fence is taken
_CODE_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")

_PREVIEW_CHARS = 200

Strategy = Callable[[str], Optional[Any]]


def _loads(candidate: str) -> Optional[Any]:
    """Strict json.loads that reports failure, or a bare scalar, as None."""
    try:
        value = json.loads(candidate)
    except (json.JSONDecodeError, TypeError):
        return None
    if isinstance(value, (dict, list)):
        return value
    return None


def _fenced_block(text: str) -> Optional[str]:
    """Return the interior of the first code fence, or None if absent/empty."""
    match = _CODE_FENCE_RE.search(text)
    if match and match.group(1):
        return match.group(1)
    return None


def _bracketed_span(text: str) -> Optional[str]:
    """
    Return the span from the first opener to the last matching closer.

    The earlier of ``{`` and ``[`` decides whether an object or an array is
    sought. The closer is searched in the whole text, so trailing commentary
    containing the same closer is included in the span.
    """
    start_brace = text.find("{")
    start_bracket = text.find("[")

    if start_brace != -1 and (start_bracket == -1 or start_brace < start_bracket):
        start, end = start_brace, text.rfind("}")
    elif start_bracket != -1:
        start, end = start_bracket, text.rfind("]")
    else:
        return None

    if end <= start:
        return None
    return text[start:end + 1]


def from_code_fence(text: str) -> Optional[Any]:
    """Strategy 1: strict parse of the first fenced code block."""
    block = _fenced_block(text)
    if block is None:
        return None
    return _loads(block)


def from_bracket_scan(text: str) -> Optional[Any]:
    """Strategy 2: strict parse of the first-opener-to-last-closer span."""
    span = _bracketed_span(text)
    if span is None:
        return None
    return _loads(span)


def from_whole_text(text: str) -> Optional[Any]:
    """Strategy 3: strict parse of the entire trimmed text."""
    return _loads(text.strip())


def from_repair(text: str) -> Optional[Any]:
    """
    Strategy 4: repair malformed JSON with json-repair.

    Only objects and arrays are accepted; json-repair turns plain prose into
    an empty string, which counts as a failure here.
    """
    from json_repair import repair_json

    candidate = _fenced_block(text) or _bracketed_span(text)
    if candidate is None:
        return None

    try:
        repaired = repair_json(candidate, return_objects=True)
    except Exception as e:
        logger.debug(f"json_repair failed: {e}")
        return None

    if isinstance(repaired, (dict, list)) and repaired:
        return repaired
    return None


DEFAULT_STRATEGIES: List[Strategy] = [from_code_fence, from_bracket_scan, from_whole_text]


def extract_json(text: Optional[str], repair: bool = False) -> Optional[Any]:
    """
    Recover a JSON value from free-form model output.

    Args:
        text: Raw model response text
        repair: Append the json-repair strategy to the chain

    Returns:
        The parsed object or array, or None when nothing parses

    Example:
        >>> extract_json('Here you go:\\n```json\\n[{"a": 1}]\\n```\\nThanks')
        [{'a': 1}]
        >>> extract_json('noise { "x": 1 } trailing')
        {'x': 1}
        >>> extract_json("I found nothing.") is None
        True
    """
    if not text or not text.strip():
        return None

    strategies = list(DEFAULT_STRATEGIES)
    if repair:
        strategies.append(from_repair)

    for strategy in strategies:
        value = strategy(text)
        if value is not None:
            logger.debug(f"Extracted JSON via {strategy.__name__}")
            return value

    logger.warning(
        f"Failed to parse JSON from model response: {text[:_PREVIEW_CHARS]!r}"
    )
    return None
