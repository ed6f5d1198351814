"""
Shared fixtures for the interviewer test suite.

No test talks to OpenAI: components that need a model get a StubChatBackend.
"""

import random
from pathlib import Path

import pytest

from core.interview.answer_analyzer import AnswerAnalyzer
from core.interview.insight_synthesizer import InsightSynthesizer
from core.interview.question_generator import QuestionGenerator
from exceptions.exceptions import ModelBackendError
from runtime.agents.interview_agent import InterviewAgent
from runtime.store.config_store import ConfigStore
from runtime.store.export_store import SessionExportStore
from runtime.store.log_store import LogStore
from runtime.store.session_store import InMemorySessionStore

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "configs" / "default_config.json"


class StubChatBackend:
    """
    Records every call and replays canned replies.

    Replies are consumed in order; the last one repeats forever. If `error`
    is set, every call raises it instead.
    """

    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.calls = []

    def complete(
        self,
        *,
        system_prompt,
        user_prompt,
        temperature,
        max_tokens=None,
        json_mode=False,
        model=None,
    ):
        self.calls.append(
            {
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "json_mode": json_mode,
                "model": model,
            }
        )
        if self.error is not None:
            raise self.error
        if not self.replies:
            raise ModelBackendError("no reply configured")
        if len(self.replies) > 1:
            return self.replies.pop(0)
        return self.replies[0]


@pytest.fixture
def config_store(tmp_path):
    """ConfigStore over the shipped defaults with a fresh stored file."""
    return ConfigStore(
        config_path=str(tmp_path / "config.json"),
        defaults_path=str(DEFAULT_CONFIG_PATH),
    )


@pytest.fixture
def config(config_store):
    return config_store.load()


@pytest.fixture
def make_agent(tmp_path, config_store):
    """Factory for an InterviewAgent wired to tmp_path; backends default to None."""

    def _make(question_backend=None, analysis_backend=None, insight_backend=None):
        return InterviewAgent(
            session_store=InMemorySessionStore(ttl_seconds=3600, max_sessions=100),
            export_store=SessionExportStore(data_dir=str(tmp_path / "data")),
            config_store=config_store,
            question_generator=QuestionGenerator(
                chat_backend=question_backend,
                rng=random.Random(0),
            ),
            answer_analyzer=AnswerAnalyzer(chat_backend=analysis_backend),
            insight_synthesizer=InsightSynthesizer(chat_backend=insight_backend),
            log_store=LogStore(log_dir=str(tmp_path / "logs")),
        )

    return _make
