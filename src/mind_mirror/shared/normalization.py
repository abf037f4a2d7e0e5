"""
Normalization of the model's generated text into an AnalysisResult.

The model is asked for strict JSON but may wrap it in a markdown fence, omit
fields or answer with free text. Every path here returns a fully populated
AnalysisResult; a reply that is not a JSON object is recovered into a fixed
fallback shape instead of raising.
"""
import json
import logging
import re
from typing import Any

from mind_mirror.analysis_api.models.analysis_result import AnalysisResult

logger = logging.getLogger(__name__)

DEFAULT_SENTIMENT = "neutral"
DEFAULT_TONE = "Not specified"
SUMMARY_PREVIEW_CHARS = 200

FALLBACK_SENTIMENT = "neutral"
FALLBACK_TONE = "mixed"
FALLBACK_SUMMARY_CHARS = 500

_JSON_FENCE = re.compile(r"```json\n?")
_FENCE = re.compile(r"```\n?")


def strip_code_fence(raw_text: str) -> str:
    """Remove a surrounding markdown code fence, if the text starts with one."""
    text = raw_text.strip()
    if text.startswith("```json"):
        text = _FENCE.sub("", _JSON_FENCE.sub("", text)).strip()
    elif text.startswith("```"):
        text = _FENCE.sub("", text).strip()
    return text


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def normalize_analysis(data: Any, raw_text: str) -> AnalysisResult:
    """Fill in defaults for any field the model omitted or left empty."""
    if not isinstance(data, dict):
        data = {}

    sentiment = data.get("sentiment")
    themes = data.get("themes")
    tone = data.get("tone")
    summary = data.get("summary")

    return AnalysisResult(
        sentiment=_as_text(sentiment) if sentiment else DEFAULT_SENTIMENT,
        themes=[_as_text(theme) for theme in themes] if isinstance(themes, list) else [],
        tone=_as_text(tone) if tone else DEFAULT_TONE,
        summary=_as_text(summary) if summary else raw_text[:SUMMARY_PREVIEW_CHARS],
    )


def fallback_analysis(raw_text: str) -> AnalysisResult:
    """Best-effort result used when the model did not answer with JSON."""
    return AnalysisResult(
        sentiment=FALLBACK_SENTIMENT,
        themes=[],
        tone=FALLBACK_TONE,
        summary=raw_text[:FALLBACK_SUMMARY_CHARS],
    )


def parse_model_text(raw_text: str) -> AnalysisResult:
    """Parse the candidate text returned by the model into an AnalysisResult."""
    try:
        data = json.loads(strip_code_fence(raw_text))
    except ValueError:
        logger.warning("Failed to parse JSON response, using fallback format")
        return fallback_analysis(raw_text)

    if not isinstance(data, dict):
        logger.warning("Model returned %s instead of a JSON object, using fallback format",
                       type(data).__name__)
        return fallback_analysis(raw_text)

    return normalize_analysis(data, raw_text)
