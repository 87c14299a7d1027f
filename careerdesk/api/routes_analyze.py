import logging
from fastapi import APIRouter, Depends, HTTPException

from ..errors import FallbackError
from ..schemas import AnalyzeRequest, AnalysisResult
from ..sessions import SessionState
from .deps import enforce_rate_limit, get_service, get_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analysis"])


def _require_fields(body: AnalyzeRequest):
    if not (body.resumeText or "").strip() or not (body.jobDescription or "").strip():
        raise HTTPException(400, "Resume text and job description are required")


@router.post("/analyze-resume", response_model=AnalysisResult)
async def analyze_resume(body: AnalyzeRequest, session: SessionState = Depends(get_session)):
    _require_fields(body)
    ai_service = get_service()
    enforce_rate_limit(session, body.preferredModel)

    try:
        return await ai_service.analyze_resume(
            body.resumeText, body.jobDescription, body.preferredModel
        )
    except FallbackError as e:
        logger.error(f"Error in analyze-resume route: {e.message}")
        raise HTTPException(e.status_code or 500, e.message)


@router.post("/analyze", response_model=AnalysisResult)
async def analyze(body: AnalyzeRequest):
    """Older endpoint kept for existing clients: default model order, generic failure message."""
    _require_fields(body)
    try:
        return await get_service().analyze_resume(body.resumeText, body.jobDescription)
    except (HTTPException, FallbackError) as e:
        logger.error(f"API Error: {getattr(e, 'message', None) or getattr(e, 'detail', e)}")
        raise HTTPException(500, "Failed to analyze resume. Please try again.")
