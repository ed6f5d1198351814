"""
Unit tests for the InterviewAgent session lifecycle.
"""

import json
import math
import threading
import time

import pytest

from core.interview.question_bank import FIRST_QUESTION_MAP
from exceptions.exceptions import SessionNotFoundError
from runtime.agents.interview_agent import (
    BLANK_TOPIC,
    DEFAULT_TOPIC,
    MISSING_KEY_POINT,
    coerce_max_questions,
    round_half_up,
)
from runtime.models.session_models import SessionStatus

from conftest import StubChatBackend


ANALYSIS_REPLY = json.dumps(
    {
        "summary": "สรุป",
        "insights": [
            {"key_point": "ประเด็น", "quote": "คำพูด", "confidence": 0.8},
            {"key_point": None, "quote": None, "confidence": None},
        ],
    },
    ensure_ascii=False,
)


def _analysis_reply(*confidences):
    return json.dumps(
        {
            "summary": "สรุป",
            "insights": [
                {"key_point": f"ประเด็น {i}", "quote": "คำพูด", "confidence": c}
                for i, c in enumerate(confidences)
            ],
        },
        ensure_ascii=False,
    )


class SlowBackend(StubChatBackend):
    """Stub whose replies take a while, so concurrent callers overlap."""

    def __init__(self, reply, delay):
        super().__init__(replies=[reply])
        self.delay = delay

    def complete(self, **kwargs):
        time.sleep(self.delay)
        return super().complete(**kwargs)


class TestCoercion:
    """Test suite for request value coercion."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (1, 3),
            (-4, 3),
            (3, 3),
            (5, 5),
            ("7", 7),
            (20, 20),
            (25, 20),
            ("abc", 10),
            (None, 10),
            (0, 10),
            (math.nan, 10),
            (math.inf, 20),
            (10 ** 400, 20),
            (-(10 ** 400), 3),
            ("1" * 5000, 20),
            ("5abc", 5),
            ("1e3", 3),
            (" 12 ", 12),
            (True, 10),
        ],
    )
    def test_coerce_max_questions(self, value, expected):
        assert coerce_max_questions(value) == expected

    def test_round_half_up(self):
        assert round_half_up(72.5) == 73
        assert round_half_up(72.4) == 72
        assert round_half_up(0) == 0


class TestInterviewLifecycle:
    """Test suite for start / answer / completion."""

    def test_start_returns_first_question(self, make_agent):
        agent = make_agent()

        response = agent.start_interview(topic="น้ำยาล้างจาน", max_questions=1)

        session = agent.require_session(response.session_id)
        assert response.question in FIRST_QUESTION_MAP["dishwashing"]
        assert session.max_questions == 3
        assert session.current_question == response.question
        assert session.status is SessionStatus.CREATED

    def test_topic_defaults(self, make_agent):
        agent = make_agent()

        default = agent.start_interview(topic=None, max_questions=5)
        blank = agent.start_interview(topic="   ", max_questions=5)

        assert agent.require_session(default.session_id).topic == DEFAULT_TOPIC
        assert agent.require_session(blank.session_id).topic == BLANK_TOPIC

    def test_completes_after_max_questions(self, make_agent):
        agent = make_agent()
        start = agent.start_interview(topic="น้ำยาล้างจาน", max_questions=3)
        asked = [start.question]
        question = start.question

        for turn in range(1, 4):
            response = agent.submit_answer(start.session_id, question, f"คำตอบข้อ {turn}")
            if turn < 3:
                assert response.is_complete is False
                assert response.next_question
                assert response.next_question not in asked
                asked.append(response.next_question)
                question = response.next_question
            else:
                assert response.is_complete is True
                assert response.next_question is None

        session = agent.require_session(start.session_id)
        assert len(session.answers) == 3
        assert session.status is SessionStatus.COMPLETE

    def test_unknown_session(self, make_agent):
        agent = make_agent()

        with pytest.raises(SessionNotFoundError):
            agent.submit_answer("missing", "q", "a")
        with pytest.raises(SessionNotFoundError):
            agent.summarize("missing")
        with pytest.raises(SessionNotFoundError):
            agent.synthesize_insight("missing")

    def test_events_are_logged(self, make_agent, tmp_path):
        agent = make_agent()
        start = agent.start_interview(topic="ชา", max_questions=3)
        agent.submit_answer(start.session_id, start.question, "ดื่มทุกวัน")

        lines = []
        for path in (tmp_path / "logs").glob("events_*.jsonl"):
            lines.extend(path.read_text(encoding="utf-8").splitlines())
        event_types = [json.loads(line)["event_type"] for line in lines]

        assert event_types == ["session_started", "answer_recorded"]


class TestConcurrentAnswers:
    """Test suite for answers racing on one session."""

    def test_parallel_answers_are_serialized(self, make_agent):
        agent = make_agent(analysis_backend=SlowBackend(_analysis_reply(0.8), delay=0.05))
        start = agent.start_interview(topic="น้ำยาล้างจาน", max_questions=3)
        responses = []
        responses_lock = threading.Lock()

        def answer(n):
            response = agent.submit_answer(start.session_id, start.question, f"คำตอบ {n}")
            with responses_lock:
                responses.append(response)

        threads = [threading.Thread(target=answer, args=(n,)) for n in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        session = agent.require_session(start.session_id)
        assert session.current_turn == session.max_questions
        assert len(set(session.questions_asked)) == len(session.questions_asked)
        assert len(session.questions_asked) == session.max_questions
        assert sum(1 for r in responses if not r.is_complete) == session.max_questions - 1
        assert len(session.answers) == 5


class TestSummary:
    """Test suite for summary aggregation."""

    def test_empty_summary(self, make_agent):
        agent = make_agent()
        start = agent.start_interview(topic="ชา", max_questions=3)
        agent.submit_answer(start.session_id, start.question, "ดื่มทุกวัน")

        summary = agent.summarize(start.session_id)

        assert summary.total_questions == 1
        assert summary.total_insights == 0
        assert summary.avg_confidence == 0
        assert summary.all_insights == []

    def test_insights_are_flattened_with_defaults(self, make_agent):
        agent = make_agent(analysis_backend=StubChatBackend(replies=[ANALYSIS_REPLY]))
        start = agent.start_interview(topic="ชา", max_questions=3)
        agent.submit_answer(start.session_id, start.question, "ดื่มทุกวัน")

        summary = agent.summarize(start.session_id)

        assert summary.total_insights == 2
        assert summary.avg_confidence == 75
        missing = summary.all_insights[1]
        assert missing.key_point == MISSING_KEY_POINT
        assert missing.quote == ""
        assert missing.confidence == 0.7
        assert len(summary.detailed_insights) == 1

    def test_average_spans_every_insight_batch(self, make_agent):
        replies = [
            _analysis_reply(0.9),
            _analysis_reply(0.6, 0.5),
            _analysis_reply(0.8),
        ]
        agent = make_agent(analysis_backend=StubChatBackend(replies=replies))
        start = agent.start_interview(topic="ชา", max_questions=3)
        question = start.question
        for turn in range(3):
            response = agent.submit_answer(start.session_id, question, f"คำตอบ {turn}")
            question = response.next_question

        summary = agent.summarize(start.session_id)

        # Mean over the four flattened insights is 0.70; per-batch means would give 0.75.
        assert len(summary.detailed_insights) == 3
        assert summary.total_insights == 4
        assert summary.avg_confidence == 70
        assert [i.confidence for i in summary.all_insights] == [0.9, 0.6, 0.5, 0.8]

    def test_insight_report_fallback(self, make_agent):
        agent = make_agent()
        start = agent.start_interview(topic="ชา", max_questions=3)

        report = agent.synthesize_insight(start.session_id)

        assert report.summary == "สรุป insights จากการสัมภาษณ์เกี่ยวกับ ชา"


class TestSavedSessions:
    """Test suite for save / list / get / delete."""

    def test_save_list_get_delete(self, make_agent, tmp_path):
        agent = make_agent()
        start = agent.start_interview(topic="ชา", max_questions=3)
        agent.submit_answer(start.session_id, start.question, "ดื่มทุกวัน")

        saved = agent.save_session(start.session_id)

        assert saved.filename == f"session-{start.session_id}.json"
        assert (tmp_path / "data" / "sessions" / saved.filename).is_file()

        listed = agent.list_saved_sessions()
        assert [s.id for s in listed] == [start.session_id]
        assert listed[0].total_questions == 1

        document = agent.get_saved_session(start.session_id)
        assert document["status"] == "completed"
        assert document["topic"] == "ชา"

        agent.delete_saved_session(start.session_id)
        with pytest.raises(SessionNotFoundError):
            agent.get_saved_session(start.session_id)
        with pytest.raises(SessionNotFoundError):
            agent.delete_saved_session(start.session_id)

    def test_save_unknown_session(self, make_agent):
        with pytest.raises(SessionNotFoundError):
            make_agent().save_session("missing")
