"""Checks applied to raw model output before it is accepted."""
import json
import re
from typing import Any, Dict

from .errors import EmptyResponseError, ResponseValidationError

_LIST_FIELDS = ("missingSkills", "weakSkills", "suggestedImprovements", "atsOptimizations")


def strip_code_fences(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = re.sub(r"```json\n?", "", cleaned)
        cleaned = re.sub(r"```\n?", "", cleaned)
    elif cleaned.startswith("```"):
        cleaned = re.sub(r"```\n?", "", cleaned)
    return cleaned.strip()


def parse_analysis_response(text: str) -> Dict[str, Any]:
    """Decode the analysis JSON. json.JSONDecodeError propagates to the caller."""
    analysis = json.loads(strip_code_fences(text))

    if not isinstance(analysis, dict):
        raise ResponseValidationError("Invalid response structure from Gemini API")

    score = analysis.get("matchScore")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise ResponseValidationError("Invalid response structure from Gemini API")
    for key in _LIST_FIELDS:
        if not isinstance(analysis.get(key), list):
            raise ResponseValidationError("Invalid response structure from Gemini API")

    return analysis


def validate_proposal_text(text: str) -> str:
    if not text or not text.strip():
        raise EmptyResponseError("Empty response from Gemini API")
    return text.strip()
