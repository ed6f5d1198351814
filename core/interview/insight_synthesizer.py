"""Whole-interview synthesis behind GET /api/insight/{session_id}."""

from __future__ import annotations

import json
import logging
from typing import Optional

from pydantic import ValidationError

from core.api.openai_client import extract_json_from_text
from exceptions.exceptions import ModelBackendError

from . import prompts
from .history import build_history
from .model_backend import ChatBackend
from .models import InsightReport
from .template import fill_template

logger = logging.getLogger(__name__)


def fallback_report(session) -> InsightReport:
    """Stitch a report together from the per-answer summaries."""
    answers = list(session.answers)
    summaries = [a.analysis.summary for a in answers if a.analysis and a.analysis.summary]

    return InsightReport(
        summary=(
            " ".join(summaries)
            if summaries
            else f"สรุป insights จากการสัมภาษณ์เกี่ยวกับ {session.topic}"
        ),
        key_themes=summaries[:5],
        detailed_insights=build_history(answers) if answers else "",
        representative_quotes=[a.answer for a in answers if a.answer][:3],
    )


class InsightSynthesizer:
    def __init__(self, chat_backend: Optional[ChatBackend] = None) -> None:
        self.chat_backend = chat_backend

    def synthesize(self, session, config) -> InsightReport:
        if self.chat_backend is None or not session.answers:
            return fallback_report(session)

        user_prompt = fill_template(
            prompts.INSIGHT_PROMPT,
            {"topic": session.topic, "conversation": build_history(session.answers)},
        )

        try:
            raw = self.chat_backend.complete(
                system_prompt=prompts.INSIGHT_SYSTEM_PROMPT,
                user_prompt=user_prompt,
                temperature=config.model_settings.temperature_insight,
                json_mode=True,
                model=config.model_settings.model,
            )
            return InsightReport.model_validate(json.loads(extract_json_from_text(raw)))
        except ModelBackendError as exc:
            logger.warning("[INSIGHT] Model error (session_id=%s): %s", session.id, exc)
        except (json.JSONDecodeError, ValidationError) as exc:
            logger.warning("[INSIGHT] Could not parse model reply (session_id=%s): %s", session.id, exc)
        except Exception:
            logger.exception("[INSIGHT] Unexpected error (session_id=%s)", session.id)

        return fallback_report(session)
