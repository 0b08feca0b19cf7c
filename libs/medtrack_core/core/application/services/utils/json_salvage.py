from __future__ import annotations

import json
import re
from typing import Any

import structlog

from medtrack_core.core.domain.events.exceptions import CoverageAnalysisError

logger = structlog.get_logger(__name__)

PREVIEW_CHARS = 500

_FENCED_RE = re.compile(r"```(?:json)?\s*(\{[\s\S]*\})\s*```")
_BRACED_RE = re.compile(r"(\{[\s\S]*\})")
_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")


def _loads_object(text: str) -> dict[str, Any] | None:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def repair_json(text: str) -> str:
    """
    Best-effort fix for truncated model output: appends the closing
    brackets/braces that are missing, then drops trailing commas.
    """
    fixed = text.strip()
    missing_brackets = fixed.count("[") - fixed.count("]")
    missing_braces = fixed.count("{") - fixed.count("}")
    if missing_brackets > 0:
        fixed += "]" * missing_brackets
    if missing_braces > 0:
        fixed += "}" * missing_braces
    return _TRAILING_COMMA_RE.sub(r"\1", fixed)


def salvage_json_object(text: str) -> dict[str, Any]:
    """
    Pull a JSON object out of an LLM reply.

    Tries, in order: the whole reply, a fenced ```json block (or the outermost
    braces), then everything from the first ``{`` onwards. The last two get
    one repair pass each before giving up.
    """
    data = _loads_object(text.strip())
    if data is not None:
        return data

    candidates: list[str] = []
    match = _FENCED_RE.search(text) or _BRACED_RE.search(text)
    if match:
        candidates.append(match.group(1).strip())
    start = text.find("{")
    if start != -1:
        candidates.append(text[start:].strip())

    for candidate in candidates:
        data = _loads_object(candidate)
        if data is None:
            data = _loads_object(repair_json(candidate))
        if data is not None:
            logger.debug("coverage.json_salvaged", length=len(candidate))
            return data

    preview = (candidates[-1] if candidates else text)[:PREVIEW_CHARS]
    logger.warning("coverage.json_unparseable", preview=preview)
    if not candidates:
        raise CoverageAnalysisError(
            f"No JSON object found in the model response. Response preview: {preview}..."
        )
    raise CoverageAnalysisError(f"Failed to parse the model response as JSON. Response preview: {preview}...")
