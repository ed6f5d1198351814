"""
Next-question selection for an interview session.

Flow of next_question(session, config):

1. If a chat backend is configured, call generate(session, config, attempt)
   up to max_attempts times. Each attempt is one model call whose result is
   either a usable question or None (rejected, duplicate, or failed).
2. A usable question is recorded in session.questions_asked and returned.
3. Otherwise a canned question is picked:
   - turn 1: the category opening questions for the topic
   - later turns: the configured example questions (or the default bank)
   - when the pool is exhausted: a generic "tell me more" follow-up

The generator never raises for model problems; it always returns a question.

Turn phases:
- FIRST_TURN (1) and EARLY_TURN (2-3) use the strict no-brand prompt, a low
  temperature and a short output cap, and reject questions that mention brands.
- LATER_TURN (>= 4) uses the configurable prompt.
"""

from __future__ import annotations

import logging
import random
import re
from enum import Enum
from typing import Callable, List, Optional, Tuple

from exceptions.exceptions import ModelBackendError

from . import prompts
from .history import build_history, format_asked_questions, last_answer
from .model_backend import ChatBackend
from .question_bank import (
    detect_topic_category,
    get_first_questions,
    question_templates,
    render_first_questions,
)
from .sanitizer import contains_brand, sanitize_topic
from .template import fill_template

logger = logging.getLogger(__name__)


GENERIC_FOLLOW_UP = "เล่าเพิ่มเติมให้ฟังหน่อยได้ไหมครับ?"
ALTERNATE_FOLLOW_UP = "มีอะไรอื่นที่อยากเล่าเพิ่มเติมไหมครับ?"

EARLY_TURN_LIMIT = 3
EARLY_TEMPERATURE = 0.3
EARLY_MAX_TOKENS = 50
LATER_MAX_TOKENS = 300
DEFAULT_MAX_ATTEMPTS = 3

_LEADING_NUMBERING = re.compile(r"^\d+[.)]\s*")
_LEADING_BULLET = re.compile(r"^[-*]\s*")
_SURROUNDING_QUOTES = re.compile(r"^[\"']|[\"']$")


class TurnPhase(str, Enum):
    FIRST_TURN = "FIRST_TURN"
    EARLY_TURN = "EARLY_TURN"
    LATER_TURN = "LATER_TURN"


def turn_phase(turn: int) -> TurnPhase:
    if turn <= 1:
        return TurnPhase.FIRST_TURN
    if turn <= EARLY_TURN_LIMIT:
        return TurnPhase.EARLY_TURN
    return TurnPhase.LATER_TURN


def clean_generated_question(text: Optional[str]) -> str:
    """Strip surrounding quotes, leading numbering and bullets from model output."""
    cleaned = (text or "").strip()
    cleaned = _SURROUNDING_QUOTES.sub("", cleaned)
    cleaned = _LEADING_NUMBERING.sub("", cleaned)
    cleaned = _LEADING_BULLET.sub("", cleaned)
    return cleaned.strip()


class QuestionGenerator:
    """Produces the next interview question for a session.

    Parameters
    ----------
    chat_backend:
        ChatBackend used for AI generation, or None to always use the
        canned questions.
    brand_check:
        Predicate rejecting AI questions during turns 1-3. Defaults to
        core.interview.sanitizer.contains_brand.
    max_attempts:
        Number of generate() attempts before falling back.
    rng:
        Random source for picking canned questions.
    """

    def __init__(
        self,
        chat_backend: Optional[ChatBackend] = None,
        brand_check: Callable[[str], bool] = contains_brand,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.chat_backend = chat_backend
        self.brand_check = brand_check
        self.max_attempts = max_attempts
        self.rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Public API used by InterviewAgent
    # ------------------------------------------------------------------

    def next_question(self, session, config) -> str:
        """Return the question for session.current_turn and record it as asked."""
        if self.chat_backend is not None:
            for attempt in range(1, self.max_attempts + 1):
                question = self.generate(session, config, attempt)
                if question is not None:
                    session.questions_asked.append(question)
                    return question
            logger.warning(
                "[QUESTION] No usable AI question after %d attempts (session_id=%s turn=%d)",
                self.max_attempts,
                session.id,
                session.current_turn,
            )

        logger.info("[QUESTION] Using fallback question (session_id=%s)", session.id)
        question = self._fallback_question(session, config)
        session.questions_asked.append(question)
        return question

    def generate(self, session, config, attempt: int = 1) -> Optional[str]:
        """One bounded generation attempt.

        Returns the cleaned question, or None when the backend is missing,
        the call fails, or the question is rejected (brand mention during
        turns 1-3, or an exact repeat of an asked question). Does not modify
        the session.
        """
        if self.chat_backend is None:
            return None

        turn = session.current_turn
        is_early = turn_phase(turn) is not TurnPhase.LATER_TURN

        system_prompt, user_prompt = self.build_prompt(session, config)
        model_settings = config.model_settings

        try:
            raw = self.chat_backend.complete(
                system_prompt=system_prompt,
                user_prompt=user_prompt,
                temperature=EARLY_TEMPERATURE if is_early else model_settings.temperature_question,
                max_tokens=EARLY_MAX_TOKENS if is_early else LATER_MAX_TOKENS,
                model=model_settings.model,
            )
        except ModelBackendError as exc:
            logger.warning(
                "[QUESTION] Model error on attempt %d (session_id=%s): %s",
                attempt,
                session.id,
                exc,
            )
            return None
        except Exception:
            logger.exception(
                "[QUESTION] Unexpected error on attempt %d (session_id=%s)",
                attempt,
                session.id,
            )
            return None

        question = clean_generated_question(raw)
        if not question:
            return None

        if is_early and self.brand_check(question):
            logger.warning(
                "[QUESTION] Rejected question containing brand (turn %d, attempt %d): %r",
                turn,
                attempt,
                question,
            )
            return None

        if question in session.questions_asked:
            logger.warning(
                "[QUESTION] Rejected duplicate question (turn %d, attempt %d): %r",
                turn,
                attempt,
                question,
            )
            return None

        return question

    def build_prompt(self, session, config) -> Tuple[str, str]:
        """Return (system_prompt, user_prompt) for the session's current turn."""
        turn = session.current_turn
        clean_topic = sanitize_topic(session.topic)
        history = build_history(session.answers)

        if turn_phase(turn) is TurnPhase.LATER_TURN:
            template = config.question_generation_prompt or prompts.DEFAULT_QUESTION_PROMPT
            system_prompt = prompts.LATER_QUESTION_SYSTEM_PROMPT
            examples = ""
        else:
            template = prompts.EARLY_QUESTION_PROMPT
            system_prompt = prompts.EARLY_QUESTION_SYSTEM_PROMPT
            category = detect_topic_category(clean_topic)
            examples = "\n- ".join(
                fill_template(q, {"topic": clean_topic}) for q in get_first_questions(category)[:2]
            )

        user_prompt = fill_template(
            template,
            {
                "topic": clean_topic,
                "conversation_history": history,
                "history": history,
                "previous_answer": last_answer(session.answers),
                "turn": str(turn),
                "examples": examples,
            },
        )
        user_prompt += format_asked_questions(session.questions_asked, prompts.ASKED_QUESTIONS_HEADER)
        return system_prompt, user_prompt

    # ------------------------------------------------------------------
    # Fallback
    # ------------------------------------------------------------------

    def _fallback_question(self, session, config) -> str:
        asked = set(session.questions_asked)

        if session.current_turn <= 1:
            pool: List[str] = render_first_questions(session.topic)
        else:
            pool = question_templates(config.example_questions, sanitize_topic(session.topic))

        available = [q for q in pool if q not in asked]
        if available:
            return self.rng.choice(available)

        if GENERIC_FOLLOW_UP not in asked:
            return GENERIC_FOLLOW_UP
        return ALTERNATE_FOLLOW_UP
