import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Header

from ..errors import FallbackError
from ..prompts import is_revision
from ..schemas import (
    NavigateRequest, ProposalHistoryOut, ProposalRequest, ProposalResponse, ProposalVersionOut
)
from ..sessions import SESSIONS, ProposalHistory, ProposalVersion, SessionState
from .deps import enforce_rate_limit, get_service, get_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["proposals"])


def _version_out(v: ProposalVersion) -> ProposalVersionOut:
    return ProposalVersionOut(id=v.id, content=v.content, createdAt=v.created_at,
                              revisionNotes=v.revision_notes)


def _history_out(history: ProposalHistory) -> ProposalHistoryOut:
    current = history.current
    return ProposalHistoryOut(
        versions=[_version_out(v) for v in history.versions],
        currentIndex=history.cursor,
        current=_version_out(current) if current else None,
    )


@router.post("/generate-proposal", response_model=ProposalResponse)
async def generate_proposal(body: ProposalRequest, session: SessionState = Depends(get_session)):
    job_description = (body.jobDescription or "").strip()
    if not job_description:
        raise HTTPException(400, "Job description is required")

    if body.isRevision and (not body.previousProposal or not body.improvisationNotes):
        raise HTTPException(400, "Previous proposal and improvisation notes are required for revisions")

    ai_service = get_service()
    enforce_rate_limit(session, body.preferredModel)

    try:
        proposal = await ai_service.generate_proposal(
            job_description,
            (body.additionalDetails or "").strip(),
            body.preferredModel,
            body.previousProposal,
            body.improvisationNotes,
        )
    except FallbackError as e:
        logger.error(f"Error generating proposal: {e.message}")
        raise HTTPException(e.status_code or 500, e.message)

    notes = body.improvisationNotes if is_revision(body.previousProposal, body.improvisationNotes) else None
    version = session.proposals.append(proposal, revision_notes=notes)
    return ProposalResponse(proposal=proposal, version=_version_out(version))


@router.get("/proposals", response_model=ProposalHistoryOut)
async def list_proposals(session: SessionState = Depends(get_session)):
    return _history_out(session.proposals)


@router.post("/proposals/navigate", response_model=ProposalHistoryOut)
async def navigate_proposals(body: NavigateRequest, session: SessionState = Depends(get_session)):
    try:
        session.proposals.navigate(body.direction)
    except ValueError as e:
        raise HTTPException(400, str(e))
    return _history_out(session.proposals)


@router.delete("/proposals", response_model=ProposalHistoryOut)
async def reset_proposals(x_session_id: Optional[str] = Header(default=None)):
    """Start over: the session gets a fresh history (and fresh rate windows)."""
    return _history_out(SESSIONS.reset(x_session_id).proposals)
