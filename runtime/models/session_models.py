"""
Session-related models for the interviewer runtime.

These describe:
- an InterviewSession (one interview run)
- AnswerRecord entries (question / answer / analysis per turn)
- InsightBatch entries (successful model analyses, kept for the summary)
- SessionStatus enum (CREATED, IN_PROGRESS, COMPLETE)
"""

import threading
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, PrivateAttr

from core.interview.models import AnalysisResult, InsightBatch


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SessionStatus(str, Enum):
    CREATED = "CREATED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETE = "COMPLETE"


class AnswerRecord(BaseModel):
    question: str
    answer: str
    analysis: AnalysisResult


class InterviewSession(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    topic: str
    max_questions: int
    current_turn: int = 1
    questions_asked: List[str] = Field(default_factory=list)
    answers: List[AnswerRecord] = Field(default_factory=list)
    insights: List[InsightBatch] = Field(default_factory=list)
    current_question: Optional[str] = None
    created_at: str = Field(default_factory=utc_now_iso)

    # Serializes answer handling for this session; never persisted.
    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    @property
    def lock(self) -> threading.Lock:
        return self._lock

    @property
    def status(self) -> SessionStatus:
        if not self.answers:
            return SessionStatus.CREATED
        if len(self.answers) >= self.max_questions:
            return SessionStatus.COMPLETE
        return SessionStatus.IN_PROGRESS
