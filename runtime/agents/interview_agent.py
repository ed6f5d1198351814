"""InterviewAgent implementation.

Responsible for the interview lifecycle:
- start: create a session, pick the first question
- answer: analyze the answer, record it, decide completion, pick the next question
- summary / insight: aggregate what the interview produced
- save / list / get / delete: delegate saved sessions to SessionExportStore

Behavior:
- the language model is optional; without it the question generator and
  answer analyzer use their canned / naive fallbacks
- answers for one session are handled one at a time (session lock), so two
  concurrent requests cannot interleave on the same session
- every lifecycle step is reported to the log_store (if configured)
"""

import logging
import math
import re
from typing import Any, Dict, List, Optional

from core.interview.answer_analyzer import AnswerAnalyzer
from core.interview.insight_synthesizer import InsightSynthesizer
from core.interview.models import Insight, InsightReport
from core.interview.question_generator import QuestionGenerator
from exceptions.exceptions import SessionNotFoundError

from ..models.api_models import (
    AnswerResponse,
    InterviewSummary,
    SavedSessionSummary,
    SaveSessionResponse,
    StartInterviewResponse,
)
from ..models.session_models import AnswerRecord, InterviewSession
from ..store.config_store import ConfigStore
from ..store.export_store import SessionExportStore
from ..store.session_store import SessionStore

logger = logging.getLogger(__name__)


MIN_QUESTIONS = 3
MAX_QUESTIONS = 20
DEFAULT_MAX_QUESTIONS = 10
DEFAULT_TOPIC = "สินค้า"
BLANK_TOPIC = "หัวข้อการสัมภาษณ์"
MISSING_KEY_POINT = "ไม่มีประเด็น"
DEFAULT_CONFIDENCE = 0.7

_LEADING_INT = re.compile(r"^\s*([+-]?)(\d+)")


def coerce_max_questions(value: Any) -> int:
    """Parse a requested question count and clamp it to [3, 20].

    Strings are read up to the first non-digit ("5abc" -> 5, "1e3" -> 1).
    Non-numeric, zero and NaN values become the default of 10.
    """
    number: Any = 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = value
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            # Six significant digits already clamp to the maximum.
            digits = match.group(2).lstrip("0")[:6] or "0"
            number = -int(digits) if match.group(1) == "-" else int(digits)

    if number == 0 or (isinstance(number, float) and math.isnan(number)):
        number = DEFAULT_MAX_QUESTIONS
    return int(max(MIN_QUESTIONS, min(number, MAX_QUESTIONS)))


def normalize_topic(topic: Optional[str]) -> str:
    if topic is None:
        topic = DEFAULT_TOPIC
    return topic.strip() or BLANK_TOPIC


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class InterviewAgent:
    """Session controller for the in-depth interview.

    Parameters
    ----------
    session_store:
        Store holding in-progress sessions.
    export_store:
        Store for saved (exported) sessions.
    config_store:
        Source of the effective InterviewConfig, read on every request so
        that admin changes apply immediately.
    question_generator, answer_analyzer, insight_synthesizer:
        Interview logic components (each degrades gracefully without a model).
    log_store:
        Optional event sink exposing ``log_event(event_type, payload)``.
    """

    def __init__(
        self,
        session_store: SessionStore,
        export_store: SessionExportStore,
        config_store: ConfigStore,
        question_generator: QuestionGenerator,
        answer_analyzer: AnswerAnalyzer,
        insight_synthesizer: InsightSynthesizer,
        log_store=None,
    ) -> None:
        self.session_store = session_store
        self.export_store = export_store
        self.config_store = config_store
        self.question_generator = question_generator
        self.answer_analyzer = answer_analyzer
        self.insight_synthesizer = insight_synthesizer
        self.log_store = log_store

    # ------------------------------------------------------------------
    # In-progress interviews
    # ------------------------------------------------------------------

    def start_interview(self, topic: Optional[str], max_questions: Any) -> StartInterviewResponse:
        """Create a session and return its id with the first question."""
        config = self.config_store.load()
        session = InterviewSession(
            topic=normalize_topic(topic),
            max_questions=coerce_max_questions(max_questions),
        )

        question = self.question_generator.next_question(session, config)
        session.current_question = question
        self.session_store.save_session(session)

        logger.info(
            "[INTERVIEW] Started session_id=%s topic=%r max_questions=%d",
            session.id,
            session.topic,
            session.max_questions,
        )
        self._log_event(
            "session_started",
            {"session_id": session.id, "topic": session.topic, "max_questions": session.max_questions},
        )
        return StartInterviewResponse(session_id=session.id, question=question)

    def submit_answer(self, session_id: str, question: str, answer: str) -> AnswerResponse:
        """Record one answer and advance the interview.

        Flow:
        - analyze the answer (model or fallback)
        - append {question, answer, analysis}
        - complete when current_turn has reached max_questions
        - otherwise advance current_turn and pick the next question
        """
        session = self.require_session(session_id)
        config = self.config_store.load()

        with session.lock:
            analysis = self.answer_analyzer.analyze(session, question, answer, config)
            session.answers.append(AnswerRecord(question=question, answer=answer, analysis=analysis))

            next_question: Optional[str] = None
            is_complete = session.current_turn >= session.max_questions

            if not is_complete:
                session.current_turn += 1
                next_question = self.question_generator.next_question(session, config)
                session.current_question = next_question

            self.session_store.save_session(session)

        self._log_event(
            "answer_recorded",
            {
                "session_id": session.id,
                "turn": len(session.answers),
                "is_complete": is_complete,
                "insights": len(analysis.insights),
            },
        )
        if is_complete:
            logger.info("[INTERVIEW] Completed session_id=%s", session.id)

        return AnswerResponse(
            analysis=analysis,
            is_complete=is_complete,
            next_question=next_question,
        )

    def summarize(self, session_id: str) -> InterviewSummary:
        """Flatten every recorded insight and compute the mean confidence (percent)."""
        session = self.require_session(session_id)

        all_insights: List[Insight] = [
            Insight(
                key_point=item.key_point or MISSING_KEY_POINT,
                quote=item.quote or "",
                confidence=item.confidence or DEFAULT_CONFIDENCE,
            )
            for batch in session.insights
            for item in batch.insights
        ]

        avg_confidence = 0
        if all_insights:
            mean = sum(i.confidence for i in all_insights) / len(all_insights)
            avg_confidence = round_half_up(mean * 100)

        return InterviewSummary(
            session_id=session.id,
            topic=session.topic,
            total_questions=len(session.answers),
            total_insights=len(all_insights),
            avg_confidence=avg_confidence,
            all_insights=all_insights,
            detailed_insights=list(session.insights),
        )

    def synthesize_insight(self, session_id: str) -> InsightReport:
        session = self.require_session(session_id)
        return self.insight_synthesizer.synthesize(session, self.config_store.load())

    def require_session(self, session_id: str) -> InterviewSession:
        session = self.session_store.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    # ------------------------------------------------------------------
    # Saved interviews
    # ------------------------------------------------------------------

    def save_session(self, session_id: str) -> SaveSessionResponse:
        session = self.require_session(session_id)
        with session.lock:
            filename = self.export_store.save(session)

        self._log_event("session_saved", {"session_id": session.id, "filename": filename})
        return SaveSessionResponse(message="Session saved successfully", filename=filename)

    def list_saved_sessions(self) -> List[SavedSessionSummary]:
        return [SavedSessionSummary(**item) for item in self.export_store.list_sessions()]

    def get_saved_session(self, session_id: str) -> Dict[str, Any]:
        data = self.export_store.get(session_id)
        if data is None:
            raise SessionNotFoundError(session_id)
        return data

    def delete_saved_session(self, session_id: str) -> None:
        if not self.export_store.delete(session_id):
            raise SessionNotFoundError(session_id)
        self._log_event("session_deleted", {"session_id": session_id})

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _log_event(self, event_type: str, payload: dict) -> None:
        if self.log_store is not None:
            self.log_store.log_event(event_type=event_type, payload=payload)
