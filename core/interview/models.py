from typing import List, Optional

from pydantic import BaseModel, Field


class Insight(BaseModel):
    """One key point extracted from an answer, with its supporting quote."""
    key_point: Optional[str] = ""
    quote: Optional[str] = ""
    confidence: Optional[float] = 0.7


class AnalysisResult(BaseModel):
    """
    Per-answer analysis returned to the client.

    Produced either by the language model (JSON reply validated against this
    schema) or by the naive first-sentence fallback.
    """
    summary: str = ""
    insights: List[Insight] = Field(default_factory=list)


class InsightReport(BaseModel):
    """Narrative synthesis of a whole interview (GET /api/insight/{id})."""
    summary: str
    key_themes: List[str] = Field(default_factory=list)
    detailed_insights: str = ""
    representative_quotes: List[str] = Field(default_factory=list)


class InsightBatch(BaseModel):
    """A successful model analysis as recorded on the session (session.insights)."""
    question: str
    answer: str
    summary: Optional[str] = ""
    insights: List[Insight] = Field(default_factory=list)
    timestamp: str
