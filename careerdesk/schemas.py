from pydantic import BaseModel
from typing import Any, List, Optional, Union
from datetime import datetime


class AnalyzeRequest(BaseModel):
    resumeText: Optional[str] = None
    jobDescription: Optional[str] = None
    preferredModel: Optional[str] = None


class AnalysisResult(BaseModel):
    # items are passed through as the model wrote them; validators.py checks the shape
    matchScore: Union[int, float]
    missingSkills: List[Any]
    weakSkills: List[Any]
    suggestedImprovements: List[Any]  # usually {section, original, improved, reason}
    atsOptimizations: List[Any]
    overallFeedback: Any = ""
    modelUsed: Optional[str] = None
    wasFallback: Optional[bool] = None


class ProposalRequest(BaseModel):
    jobDescription: Optional[str] = None
    additionalDetails: Optional[str] = ""
    preferredModel: Optional[str] = None
    previousProposal: Optional[str] = None
    improvisationNotes: Optional[str] = None
    isRevision: Optional[bool] = False


class ProposalVersionOut(BaseModel):
    id: int
    content: str
    createdAt: datetime
    revisionNotes: Optional[str] = None


class ProposalResponse(BaseModel):
    proposal: str
    version: Optional[ProposalVersionOut] = None


class ProposalHistoryOut(BaseModel):
    versions: List[ProposalVersionOut]
    currentIndex: int
    current: Optional[ProposalVersionOut] = None


class NavigateRequest(BaseModel):
    direction: str  # prev|next


class ModelOut(BaseModel):
    name: str
    label: str
    rateLimit: int
    description: str
    usageCount: int = 0
    secondsUntilReset: int = 0


class ModelsResponse(BaseModel):
    object: str = "list"
    data: List[ModelOut]


class ExtractTextResponse(BaseModel):
    filename: str
    text: str
    characters: int
