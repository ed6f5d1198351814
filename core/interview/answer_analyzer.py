"""
Per-answer insight extraction.

With a chat backend, the latest question/answer pair (plus the conversation
so far) is sent to the model in JSON mode and the reply is validated as an
AnalysisResult. Successful analyses are also recorded on the session as an
InsightBatch, which the interview summary aggregates.

Without a backend, or whenever the call or the parsing fails, a naive
first-sentence summary is returned instead (and nothing is recorded).
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError

from core.api.openai_client import extract_json_from_text
from exceptions.exceptions import ModelBackendError

from . import prompts
from .history import build_history
from .model_backend import ChatBackend
from .models import AnalysisResult, Insight, InsightBatch
from .template import fill_template

logger = logging.getLogger(__name__)


NO_ANSWER = "ไม่มีคำตอบ"
FALLBACK_CONFIDENCE = 0.7
SUMMARY_LIMIT = 150
QUOTE_LIMIT = 200
MIN_SENTENCE_LENGTH = 20

_SENTENCE_END = re.compile(r"[.!?。！？]\s*")


def _truncate(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


def extract_simple_summary(answer: Optional[str]) -> str:
    """First sentence of the answer if it is long enough, else the answer itself.

    Both cases are capped at 150 characters (147 + "...").
    """
    if not answer or not answer.strip():
        return NO_ANSWER

    first_sentence = _SENTENCE_END.split(answer)[0]
    if first_sentence and len(first_sentence) > MIN_SENTENCE_LENGTH:
        return _truncate(first_sentence, SUMMARY_LIMIT)

    return _truncate(answer, SUMMARY_LIMIT)


def fallback_analysis(answer: Optional[str]) -> AnalysisResult:
    answer = answer or ""
    summary = extract_simple_summary(answer)
    return AnalysisResult(
        summary=summary,
        insights=[
            Insight(
                key_point=summary,
                quote=_truncate(answer, QUOTE_LIMIT),
                confidence=FALLBACK_CONFIDENCE,
            )
        ],
    )


class AnswerAnalyzer:
    """Turns one answer into an AnalysisResult.

    Parameters
    ----------
    chat_backend:
        ChatBackend used for analysis, or None to always use the naive summary.
    """

    def __init__(self, chat_backend: Optional[ChatBackend] = None) -> None:
        self.chat_backend = chat_backend

    def analyze(self, session, question: str, answer: str, config) -> AnalysisResult:
        """Analyze one answer; records an InsightBatch on the session on success."""
        if self.chat_backend is None:
            return fallback_analysis(answer)

        history = build_history(session.answers)
        template = config.analysis_prompt or prompts.DEFAULT_ANALYSIS_PROMPT
        user_prompt = fill_template(
            template,
            {
                "topic": session.topic or "",
                "question": question or "",
                "answer": answer or "",
                "conversation_history": history,
                "history": history,
            },
        )

        try:
            raw = self.chat_backend.complete(
                system_prompt=prompts.ANALYSIS_SYSTEM_PROMPT,
                user_prompt=user_prompt,
                temperature=config.model_settings.temperature_analysis,
                json_mode=True,
                model=config.model_settings.model,
            )
        except ModelBackendError as exc:
            logger.warning("[ANALYZER] Model error (session_id=%s): %s", session.id, exc)
            return fallback_analysis(answer)
        except Exception:
            logger.exception("[ANALYZER] Unexpected error (session_id=%s)", session.id)
            return fallback_analysis(answer)

        try:
            data = json.loads(extract_json_from_text(raw))
            result = AnalysisResult.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as exc:
            logger.warning(
                "[ANALYZER] Could not parse model reply (session_id=%s): %s",
                session.id,
                exc,
            )
            return fallback_analysis(answer)

        self._record(session, question, answer, result)
        return result

    @staticmethod
    def _record(session, question: str, answer: str, result: AnalysisResult) -> None:
        session.insights.append(
            InsightBatch(
                question=question,
                answer=answer,
                summary=result.summary,
                insights=[insight.model_copy() for insight in result.insights],
                timestamp=datetime.now(timezone.utc).isoformat(),
            )
        )
