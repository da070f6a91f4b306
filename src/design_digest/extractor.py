"""Recover a JSON payload from free-form model output.

模型输出常带有解释文字、markdown 代码块或 <think> 推理标签。
This is a slicing heuristic, not a parser: the candidate runs from the
first opening delimiter to the *last* closing delimiter of the same kind,
so stray brackets in trailing prose can still break it. Callers must
parse the result (see ``parse_json_payload``).
"""

import json
import logging
import re
from typing import Any

from .errors import ExtractionError

logger = logging.getLogger(__name__)

_THINK_RE = re.compile(r"<think>.*?</think>", re.DOTALL)
_FENCE_RE = re.compile(r"```json\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)


def extract_json_payload(raw: str) -> str:
    """Return the candidate JSON text (object or array) inside *raw*.

    Raises:
        ExtractionError: no plausible JSON region exists.
    """
    text = _THINK_RE.sub("", raw or "").strip()

    match = _FENCE_RE.search(text)
    if match:
        return match.group(1)

    first_brace = text.find("{")
    first_bracket = text.find("[")

    if first_bracket != -1 and (first_brace == -1 or first_bracket < first_brace):
        start, end = first_bracket, text.rfind("]")
    elif first_brace != -1:
        start, end = first_brace, text.rfind("}")
    else:
        raise ExtractionError("no JSON object or array found in model output")

    if end < start:
        raise ExtractionError("JSON region is not closed")

    return text[start:end + 1]


def parse_json_payload(raw: str) -> Any:
    """Extract and parse; a parse error counts as extraction failure."""
    candidate = extract_json_payload(raw)
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.warning("Raw response (first 500 chars): %s", raw[:500])
        raise ExtractionError(f"extracted region is not valid JSON: {e}") from e
