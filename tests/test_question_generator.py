"""
Unit tests for next-question selection (AI path, rejections, fallbacks).
"""

import random

import pytest

from core.interview import prompts
from core.interview.question_bank import FIRST_QUESTION_MAP, question_templates
from core.interview.question_generator import (
    ALTERNATE_FOLLOW_UP,
    EARLY_MAX_TOKENS,
    EARLY_TEMPERATURE,
    GENERIC_FOLLOW_UP,
    LATER_MAX_TOKENS,
    QuestionGenerator,
    TurnPhase,
    clean_generated_question,
    turn_phase,
)
from core.interview.sanitizer import sanitize_topic
from exceptions.exceptions import ModelBackendError
from runtime.models.config_models import InterviewConfig
from runtime.models.session_models import InterviewSession

from conftest import StubChatBackend


BRANDED_QUESTION = "คุณใช้ Sunlight ล้างจานไหมครับ?"
PLAIN_QUESTION = "หลังทำอาหารเสร็จ คุณจัดการภาชนะต่างๆ ยังไงครับ?"


@pytest.fixture
def session():
    return InterviewSession(topic="น้ำยาล้างจาน", max_questions=10)


def _generator(backend=None):
    return QuestionGenerator(chat_backend=backend, rng=random.Random(0))


class TestHelpers:
    """Test suite for output cleaning and turn phases."""

    def test_clean_generated_question(self):
        assert clean_generated_question('"1. ทำไมถึงเลือกใช้?"') == "ทำไมถึงเลือกใช้?"
        assert clean_generated_question("- คำถาม") == "คำถาม"
        assert clean_generated_question("  2) คำถาม  ") == "คำถาม"
        assert clean_generated_question(None) == ""

    def test_turn_phase(self):
        assert turn_phase(1) is TurnPhase.FIRST_TURN
        assert turn_phase(2) is TurnPhase.EARLY_TURN
        assert turn_phase(3) is TurnPhase.EARLY_TURN
        assert turn_phase(4) is TurnPhase.LATER_TURN


class TestFallbackQuestions:
    """Test suite for canned questions (no chat backend)."""

    def test_first_turn_uses_category_pool(self, session, config):
        question = _generator().next_question(session, config)

        assert question in FIRST_QUESTION_MAP["dishwashing"]
        assert session.questions_asked == [question]

    def test_later_turn_uses_configured_examples(self, session, config):
        session.current_turn = 2

        question = _generator().next_question(session, config)

        pool = question_templates(config.example_questions, sanitize_topic(session.topic))
        assert question in pool

    def test_exhausted_pool_uses_follow_ups(self, session):
        config = InterviewConfig(example_questions={"general": ["Q1"]})
        session.current_turn = 2
        session.questions_asked = ["Q1"]
        generator = _generator()

        assert generator.next_question(session, config) == GENERIC_FOLLOW_UP
        assert generator.next_question(session, config) == ALTERNATE_FOLLOW_UP

    def test_generate_without_backend_returns_none(self, session, config):
        assert _generator().generate(session, config) is None


class TestAIQuestions:
    """Test suite for model-generated questions."""

    def test_first_turn_call_parameters(self, session, config):
        backend = StubChatBackend(replies=[PLAIN_QUESTION])

        question = _generator(backend).next_question(session, config)

        assert question == PLAIN_QUESTION
        assert session.questions_asked == [PLAIN_QUESTION]
        call = backend.calls[0]
        assert call["temperature"] == EARLY_TEMPERATURE
        assert call["max_tokens"] == EARLY_MAX_TOKENS
        assert call["json_mode"] is False
        assert call["system_prompt"] == prompts.EARLY_QUESTION_SYSTEM_PROMPT
        assert FIRST_QUESTION_MAP["dishwashing"][0] in call["user_prompt"]

    def test_brand_question_rejected_in_early_turns(self, session, config):
        backend = StubChatBackend(replies=[BRANDED_QUESTION])

        question = _generator(backend).next_question(session, config)

        assert len(backend.calls) == 3
        assert question in FIRST_QUESTION_MAP["dishwashing"]

    def test_brand_question_allowed_in_later_turns(self, session, config):
        session.current_turn = 4
        backend = StubChatBackend(replies=[BRANDED_QUESTION])

        question = _generator(backend).next_question(session, config)

        assert question == BRANDED_QUESTION
        call = backend.calls[0]
        assert call["temperature"] == config.model_settings.temperature_question
        assert call["max_tokens"] == LATER_MAX_TOKENS
        assert call["system_prompt"] == prompts.LATER_QUESTION_SYSTEM_PROMPT

    def test_duplicate_question_falls_back_after_three_attempts(self, session, config):
        backend = StubChatBackend(replies=[PLAIN_QUESTION])
        generator = _generator(backend)

        first = generator.next_question(session, config)
        session.current_turn = 2
        second = generator.next_question(session, config)

        assert first == PLAIN_QUESTION
        assert len(backend.calls) == 4
        assert second != PLAIN_QUESTION
        assert second in question_templates(config.example_questions, sanitize_topic(session.topic))
        assert len(set(session.questions_asked)) == len(session.questions_asked)

    def test_asked_questions_are_listed_in_prompt(self, session, config):
        session.questions_asked = ["คำถามเดิม"]
        session.current_turn = 2
        backend = StubChatBackend(replies=[PLAIN_QUESTION])

        _generator(backend).next_question(session, config)

        user_prompt = backend.calls[0]["user_prompt"]
        assert prompts.ASKED_QUESTIONS_HEADER in user_prompt
        assert "1. คำถามเดิม" in user_prompt

    @pytest.mark.parametrize("error", [ModelBackendError("boom"), RuntimeError("unexpected")])
    def test_backend_errors_fall_back(self, session, config, error):
        backend = StubChatBackend(error=error)

        question = _generator(backend).next_question(session, config)

        assert len(backend.calls) == 3
        assert question in FIRST_QUESTION_MAP["dishwashing"]

    def test_configured_prompt_used_for_later_turns(self):
        session = InterviewSession(topic="แชมพู Dove", max_questions=10, current_turn=4)
        config = InterviewConfig(question_generation_prompt="หัวข้อ {topic} รอบ {turn}")

        _, user_prompt = _generator().build_prompt(session, config)

        assert user_prompt == "หัวข้อ แชมพู รอบ 4"
