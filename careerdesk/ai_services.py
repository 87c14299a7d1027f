"""
AI Services Module for CareerDesk
Handles all LLM interactions: resume analysis and proposal writing, both
routed through the model fallback loop.
"""
import logging
from typing import Optional

from pydantic import ValidationError

from .fallback import run_with_fallback
from .gemini_client import GeminiClient
from .models import ANALYSIS_MODELS, PROPOSAL_MODELS, candidate_order
from .prompts import build_analysis_prompt, build_proposal_prompt
from .schemas import AnalysisResult
from .validators import parse_analysis_response, validate_proposal_text
from .errors import ResponseValidationError

logger = logging.getLogger(__name__)


def _to_analysis_result(text: str) -> AnalysisResult:
    data = parse_analysis_response(text)
    try:
        return AnalysisResult(**{k: v for k, v in data.items() if k in AnalysisResult.model_fields})
    except ValidationError as e:
        raise ResponseValidationError(f"Invalid response structure from Gemini API: {e}") from e


class AIService:
    """Resume analysis and proposal generation on top of GeminiClient"""

    def __init__(self, client: Optional[GeminiClient] = None):
        self.client = client or GeminiClient()

    async def analyze_resume(self, resume_text: str, job_description: str,
                             preferred_model: Optional[str] = None) -> AnalysisResult:
        prompt = build_analysis_prompt(resume_text, job_description)
        result = await run_with_fallback(
            candidate_order(preferred_model, ANALYSIS_MODELS),
            lambda model: prompt,
            self.client.generate_content,
            _to_analysis_result,
        )
        return result.value.model_copy(update={
            "modelUsed": result.model_used,
            "wasFallback": result.was_fallback,
        })

    async def generate_proposal(
        self,
        job_description: str,
        additional_details: str = "",
        preferred_model: Optional[str] = None,
        previous_proposal: Optional[str] = None,
        improvisation_notes: Optional[str] = None,
    ) -> str:
        prompt = build_proposal_prompt(
            job_description, additional_details, previous_proposal, improvisation_notes
        )
        result = await run_with_fallback(
            candidate_order(preferred_model, PROPOSAL_MODELS),
            lambda model: prompt,
            self.client.generate_content,
            validate_proposal_text,
        )
        if result.was_fallback:
            logger.info(f"Proposal generated by fallback model {result.model_used}")
        return result.value


def get_ai_service() -> AIService:
    """Build an AIService from environment configuration (raises ConfigurationError without a key)"""
    return AIService()
