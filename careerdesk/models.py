"""Gemini model catalog and fallback ordering."""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelDescriptor:
    identifier: str
    display_label: str
    requests_per_minute: int
    description: str


# Order defines default fallback priority
GEMINI_MODELS: List[ModelDescriptor] = [
    ModelDescriptor("gemini-2.5-flash", "Gemini 2.5 Flash", 3, "Balanced speed and quality"),
    ModelDescriptor("gemini-2.0-flash-lite", "Gemini 2.0 Flash Lite", 5, "Fastest, lightweight"),
    ModelDescriptor("gemini-2.5-flash-lite", "Gemini 2.5 Flash Lite", 3, "Fast, lightweight"),
    ModelDescriptor("gemini-2.0-flash", "Gemini 2.0 Flash", 3, "Balanced"),
    ModelDescriptor("gemini-2.5-pro", "Gemini 2.5 Pro", 1, "Highest quality (slowest)"),
]

# Resume analysis only reaches the pro model when the user picks it
ANALYSIS_MODELS: List[ModelDescriptor] = GEMINI_MODELS[:4]
PROPOSAL_MODELS: List[ModelDescriptor] = list(GEMINI_MODELS)

DEFAULT_MODEL = GEMINI_MODELS[0].identifier


def find_model(identifier: Optional[str]) -> Optional[ModelDescriptor]:
    if not identifier:
        return None
    return next((m for m in GEMINI_MODELS if m.identifier == identifier), None)


def candidate_order(preferred: Optional[str], defaults: Sequence[ModelDescriptor]) -> List[ModelDescriptor]:
    """Preferred model first (when known), then the defaults without duplicates."""
    ordered: List[ModelDescriptor] = []
    chosen = find_model(preferred)
    if preferred and chosen is None:
        logger.warning(f"Ignoring unknown preferred model: {preferred}")
    if chosen is not None:
        ordered.append(chosen)
    for m in defaults:
        if m.identifier not in {o.identifier for o in ordered}:
            ordered.append(m)
    return ordered
