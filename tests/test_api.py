"""
HTTP tests for the interviewer API (FastAPI TestClient, no model configured).
"""

import pytest
from fastapi.testclient import TestClient

from core.interview.question_bank import FIRST_QUESTION_MAP
from runtime.api.server import create_app


@pytest.fixture
def agent(make_agent):
    return make_agent()


@pytest.fixture
def client(agent, config_store):
    return TestClient(create_app(interview_agent=agent, config_store=config_store))


def _start(client, topic="น้ำยาล้างจาน", max_questions=3):
    response = client.post("/api/start", json={"topic": topic, "max_questions": max_questions})
    assert response.status_code == 200
    return response.json()


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["timestamp"]


class TestInterviewFlow:
    """Test suite for the interview endpoints."""

    def test_full_interview_without_model(self, client):
        start = _start(client)
        assert start["question"] in FIRST_QUESTION_MAP["dishwashing"]

        question = start["question"]
        results = []
        for turn in range(3):
            response = client.post(
                "/api/answer",
                json={
                    "session_id": start["session_id"],
                    "question": question,
                    "answer": f"ผมล้างจานหลังอาหารเย็นทุกวันครับ รอบที่ {turn}",
                },
            )
            assert response.status_code == 200
            body = response.json()
            results.append(body)
            assert len(body["analysis"]["insights"]) == 1
            assert body["analysis"]["insights"][0]["confidence"] == 0.7
            question = body["next_question"]

        assert [r["is_complete"] for r in results] == [False, False, True]
        assert results[-1]["next_question"] is None
        assert results[0]["next_question"] != results[1]["next_question"]

        summary = client.get(f"/api/summary/{start['session_id']}").json()
        assert summary["total_questions"] == 3
        assert summary["topic"] == "น้ำยาล้างจาน"

        insight = client.get(f"/api/insight/{start['session_id']}")
        assert insight.status_code == 200
        assert len(insight.json()["representative_quotes"]) == 3

    def test_malformed_max_questions_is_coerced(self, client, agent):
        start = _start(client, topic="ชา", max_questions="abc")

        assert agent.require_session(start["session_id"]).max_questions == 10

    @pytest.mark.parametrize("max_questions, expected", [(10 ** 400, 20), ("5abc", 5)])
    def test_oversized_or_suffixed_max_questions(self, client, agent, max_questions, expected):
        start = _start(client, topic="ชา", max_questions=max_questions)

        assert agent.require_session(start["session_id"]).max_questions == expected

    def test_start_with_defaults(self, client):
        response = client.post("/api/start", json={})

        assert response.status_code == 200
        assert response.json()["question"]

    @pytest.mark.parametrize(
        "method, path",
        [
            ("get", "/api/summary/missing"),
            ("get", "/api/insight/missing"),
            ("post", "/api/save/missing"),
            ("get", "/api/sessions/missing"),
            ("delete", "/api/sessions/missing"),
        ],
    )
    def test_unknown_session_is_404(self, client, method, path):
        response = getattr(client, method)(path)

        assert response.status_code == 404
        assert response.json()["detail"] == "Session not found"

    def test_answer_unknown_session_is_404(self, client):
        response = client.post(
            "/api/answer",
            json={"session_id": "missing", "question": "q", "answer": "a"},
        )

        assert response.status_code == 404


class TestSavedSessions:
    """Test suite for /api/save and /api/sessions."""

    def test_save_list_get_delete(self, client):
        start = _start(client, topic="ชา")
        session_id = start["session_id"]

        saved = client.post(f"/api/save/{session_id}").json()
        assert saved["filename"] == f"session-{session_id}.json"

        sessions = client.get("/api/sessions").json()["sessions"]
        assert [s["id"] for s in sessions] == [session_id]

        document = client.get(f"/api/sessions/{session_id}").json()
        assert document["status"] == "completed"

        assert client.delete(f"/api/sessions/{session_id}").status_code == 200
        assert client.get(f"/api/sessions/{session_id}").status_code == 404


class TestConfigEndpoints:
    """Test suite for /api/config."""

    def test_get_update_reset(self, client):
        config = client.get("/api/config").json()
        assert config["model_settings"]["temperature_question"] == 0.8

        response = client.post("/api/config", json={"model_settings": {"temperature_question": 0.3}})
        assert response.status_code == 200
        assert client.get("/api/config").json()["model_settings"]["temperature_question"] == 0.3

        assert client.post("/api/config/reset").status_code == 200
        assert client.get("/api/config").json()["model_settings"]["temperature_question"] == 0.8

    def test_invalid_update_is_422(self, client):
        response = client.post("/api/config", json={"model_settings": {"temperature_question": "hot"}})

        assert response.status_code == 422

    def test_export_is_an_attachment(self, client):
        response = client.get("/api/config/export")

        assert response.status_code == 200
        assert response.headers["content-disposition"] == 'attachment; filename="interviewer_config.json"'
        assert response.json() == client.get("/api/config").json()

    def test_import(self, client):
        response = client.post("/api/config/import", json={"analysis_prompt": "วิเคราะห์ {answer}"})

        assert response.status_code == 200
        assert client.get("/api/config").json()["analysis_prompt"] == "วิเคราะห์ {answer}"

    def test_default_prompts(self, client, config_store):
        defaults = config_store.load_defaults()

        question_prompt = client.get("/api/config/default/question_prompt").json()
        analysis_prompt = client.get("/api/config/default/analysis_prompt").json()

        assert question_prompt["prompt"] == defaults["question_generation_prompt"]
        assert analysis_prompt["prompt"] == defaults["analysis_prompt"]
