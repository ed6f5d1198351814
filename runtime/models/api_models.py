"""
HTTP request/response models for the interviewer API.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field

from core.interview.models import AnalysisResult, Insight, InsightBatch


class HealthResponse(BaseModel):
    status: str
    timestamp: str


class MessageResponse(BaseModel):
    message: str


class PromptResponse(BaseModel):
    prompt: str


class StartInterviewRequest(BaseModel):
    topic: Optional[str] = "สินค้า"
    # Anything is accepted here; unusable values are coerced to the default.
    max_questions: Optional[Any] = 10


class StartInterviewResponse(BaseModel):
    session_id: str
    question: str


class AnswerRequest(BaseModel):
    session_id: str
    answer: str = ""
    question: str = ""


class AnswerResponse(BaseModel):
    """
    Result of one answered turn.

    next_question is None once the interview is complete.
    """
    analysis: AnalysisResult
    is_complete: bool
    next_question: Optional[str] = None


class InterviewSummary(BaseModel):
    session_id: str
    topic: str
    total_questions: int
    total_insights: int
    avg_confidence: int
    all_insights: List[Insight] = Field(default_factory=list)
    detailed_insights: List[InsightBatch] = Field(default_factory=list)


class SaveSessionResponse(BaseModel):
    message: str
    filename: str


class SavedSessionSummary(BaseModel):
    id: str
    topic: str
    created_at: str
    exported_at: Optional[str] = None
    total_questions: int
    total_insights: int
    filename: str


class SessionListResponse(BaseModel):
    sessions: List[SavedSessionSummary] = Field(default_factory=list)
