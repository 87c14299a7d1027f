from fastapi import APIRouter, Depends

from ..models import GEMINI_MODELS
from ..schemas import ModelOut, ModelsResponse
from ..sessions import SessionState
from .deps import get_session

router = APIRouter(prefix="/api", tags=["models"])


@router.get("/models", response_model=ModelsResponse)
async def list_models(session: SessionState = Depends(get_session)):
    data = []
    for m in GEMINI_MODELS:
        usage = session.rate_limiter.usage(m.identifier)
        data.append(ModelOut(
            name=m.identifier,
            label=m.display_label,
            rateLimit=m.requests_per_minute,
            description=m.description,
            usageCount=usage.count,
            secondsUntilReset=usage.seconds_until_reset,
        ))
    return ModelsResponse(data=data)
