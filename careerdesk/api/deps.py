from typing import Optional
from fastapi import Header, HTTPException

from ..ai_services import AIService, get_ai_service
from ..errors import ConfigurationError
from ..models import DEFAULT_MODEL, find_model
from ..sessions import SESSIONS, SessionState


async def get_session(x_session_id: Optional[str] = Header(default=None)) -> SessionState:
    return SESSIONS.get(x_session_id)


def get_service() -> AIService:
    try:
        return get_ai_service()
    except ConfigurationError as e:
        raise HTTPException(500, str(e))


def enforce_rate_limit(session: SessionState, preferred_model: Optional[str]) -> str:
    """Refuse the request when this session already used up the first candidate's window, else count it."""
    # unknown ids are dropped from the candidate list, so the default model is what gets called
    chosen = find_model(preferred_model)
    model_id = chosen.identifier if chosen else DEFAULT_MODEL
    check = session.rate_limiter.check_rate_limit(model_id)
    if not check.can_proceed:
        raise HTTPException(
            429,
            f"Rate limit exceeded for {model_id}. Please wait {check.wait_seconds} seconds "
            "or select a different model.",
            headers={"Retry-After": str(check.wait_seconds)},
        )
    session.rate_limiter.record_usage(model_id)
    return model_id
