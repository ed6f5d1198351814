"""HTTP routes for running and saved interviews.

Exposes endpoints like:

- POST /api/start                -> {session_id, question}
- POST /api/answer               -> {analysis, is_complete, next_question}
- GET  /api/summary/{id}         -> aggregated insights
- GET  /api/insight/{id}         -> narrative synthesis
- POST /api/save/{id}            -> writes the session to disk
- GET/DELETE /api/sessions[/id]  -> saved sessions
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException

from core.interview.models import InsightReport
from exceptions.exceptions import SessionNotFoundError

from ..agents.interview_agent import InterviewAgent
from ..models.api_models import (
    AnswerRequest,
    AnswerResponse,
    InterviewSummary,
    MessageResponse,
    SaveSessionResponse,
    SessionListResponse,
    StartInterviewRequest,
    StartInterviewResponse,
)


logger = logging.getLogger(__name__)

# Router for all interview endpoints
router = APIRouter()


# Module-level reference, to be initialized by the server.
_INTERVIEW_AGENT: Optional[InterviewAgent] = None


def init_routes(interview_agent: InterviewAgent) -> None:
    """Initialize module-level references used by the route handlers."""
    global _INTERVIEW_AGENT
    _INTERVIEW_AGENT = interview_agent


def _require_interview_agent() -> InterviewAgent:
    if _INTERVIEW_AGENT is None:
        raise HTTPException(
            status_code=500,
            detail="InterviewAgent is not configured on the server.",
        )
    return _INTERVIEW_AGENT


def _not_found(exc: SessionNotFoundError, route: str) -> HTTPException:
    logger.warning("[API] %s: session not found (session_id=%s)", route, exc.session_id)
    return HTTPException(status_code=404, detail="Session not found")


# --------------------------------------------------------
# In-progress interviews
# --------------------------------------------------------


@router.post("/start", response_model=StartInterviewResponse)
def start_interview(request: StartInterviewRequest) -> StartInterviewResponse:
    """Create a session and return its id together with the first question."""
    agent = _require_interview_agent()
    return agent.start_interview(topic=request.topic, max_questions=request.max_questions)


@router.post("/answer", response_model=AnswerResponse)
def submit_answer(request: AnswerRequest) -> AnswerResponse:
    """Record an answer and return its analysis plus the next question (if any).

    Unexpected errors are logged with the session context and re-raised.
    """
    agent = _require_interview_agent()
    try:
        return agent.submit_answer(
            session_id=request.session_id,
            question=request.question,
            answer=request.answer,
        )
    except SessionNotFoundError as e:
        raise _not_found(e, "answer")
    except Exception:
        logger.exception(
            "[API] Unexpected error for session_id=%s question=%r",
            request.session_id,
            request.question,
        )
        raise


@router.get("/summary/{session_id}", response_model=InterviewSummary)
def get_summary(session_id: str) -> InterviewSummary:
    agent = _require_interview_agent()
    try:
        return agent.summarize(session_id)
    except SessionNotFoundError as e:
        raise _not_found(e, "summary")


@router.get("/insight/{session_id}", response_model=InsightReport)
def get_insight(session_id: str) -> InsightReport:
    agent = _require_interview_agent()
    try:
        return agent.synthesize_insight(session_id)
    except SessionNotFoundError as e:
        raise _not_found(e, "insight")


# --------------------------------------------------------
# Saved interviews
# --------------------------------------------------------


@router.post("/save/{session_id}", response_model=SaveSessionResponse)
def save_session(session_id: str) -> SaveSessionResponse:
    agent = _require_interview_agent()
    try:
        return agent.save_session(session_id)
    except SessionNotFoundError as e:
        raise _not_found(e, "save")


@router.get("/sessions", response_model=SessionListResponse)
def list_sessions() -> SessionListResponse:
    agent = _require_interview_agent()
    return SessionListResponse(sessions=agent.list_saved_sessions())


@router.get("/sessions/{session_id}")
def get_saved_session(session_id: str) -> Dict[str, Any]:
    agent = _require_interview_agent()
    try:
        return agent.get_saved_session(session_id)
    except SessionNotFoundError as e:
        raise _not_found(e, "sessions/get")


@router.delete("/sessions/{session_id}", response_model=MessageResponse)
def delete_saved_session(session_id: str) -> MessageResponse:
    agent = _require_interview_agent()
    try:
        agent.delete_saved_session(session_id)
    except SessionNotFoundError as e:
        raise _not_found(e, "sessions/delete")
    return MessageResponse(message="Session deleted successfully")
