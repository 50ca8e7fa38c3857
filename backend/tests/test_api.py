"""Tests for the HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient

from db import InteractionLogError
from dependencies import get_relay_service
from llm import LLMError, UpstreamAPIError
from main import app
from services import RelayService


@pytest.fixture
def relay(test_settings, mock_llm, mock_interaction_log):
    return RelayService(test_settings, mock_llm, mock_interaction_log)


@pytest.fixture
def client(relay):
    app.dependency_overrides[get_relay_service] = lambda: relay
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    """Tests for GET /health."""

    def test_health(self, client):
        """Test the fixed health payload."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "OK", "message": "Server is running"}
        assert response.headers["X-Request-ID"]


class TestQuery:
    """Tests for POST /api/query."""

    def test_missing_prompt(self, client, mock_llm):
        """Test a body without a prompt is a client error."""
        response = client.post("/api/query", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Prompt is required"}
        mock_llm.generate.assert_not_awaited()

    def test_empty_prompt(self, client):
        """Test an empty prompt is treated as missing."""
        response = client.post("/api/query", json={"prompt": ""})

        assert response.status_code == 400

    def test_blank_prompt(self, client, mock_llm):
        """Test a whitespace-only prompt is treated as missing."""
        response = client.post("/api/query", json={"prompt": "   "})

        assert response.status_code == 400
        assert response.json() == {"error": "Prompt is required"}
        mock_llm.generate.assert_not_awaited()

    def test_answer(self, client, mock_interaction_log, legacy_prompt):
        """Test a successful query returns the answer and logs it."""
        response = client.post("/api/query", json={"prompt": legacy_prompt})

        assert response.status_code == 200
        assert response.json() == {"answer": "It is a greeting."}
        record = mock_interaction_log.add_interaction.await_args.args[0]
        assert record.file.name == "a.txt"
        assert record.query == "what is this?"

    def test_structured_file(self, client, mock_llm, mock_interaction_log):
        """Test file metadata sent alongside the prompt is logged as-is."""
        response = client.post(
            "/api/query",
            json={
                "prompt": "Context:\nFile: r.pdf\nContent: text...\n\nQuery:\nsummarize",
                "query": "summarize",
                "file": {
                    "name": "r.pdf",
                    "type": "application/pdf",
                    "size": 2048,
                    "category": "text",
                    "content": "text",
                    "processedAt": "2026-01-01T00:00:00+00:00",
                },
            },
        )

        assert response.status_code == 200
        record = mock_interaction_log.add_interaction.await_args.args[0]
        assert record.query == "summarize"
        assert record.file.name == "r.pdf"
        assert record.file.size == 2048
        assert record.file.processed_at == "2026-01-01T00:00:00+00:00"
        mock_llm.generate.assert_awaited_once_with(
            "Context:\nFile: r.pdf\nContent: text...\n\nQuery:\nsummarize"
        )

    def test_upstream_status_passed_through(self, client, mock_llm):
        """Test a 429 from the model API reaches the caller unchanged."""
        mock_llm.generate.side_effect = UpstreamAPIError(429, '{"error": "quota"}')

        response = client.post("/api/query", json={"prompt": "hi"})

        assert response.status_code == 429
        assert response.json() == {
            "error": "Failed to get response from AI",
            "details": '{"error": "quota"}',
        }
        assert mock_llm.generate.await_count == 1

    def test_network_failure(self, client, mock_llm):
        """Test other failures become a 500 with the message."""
        mock_llm.generate.side_effect = LLMError("connection refused")

        response = client.post("/api/query", json={"prompt": "hi"})

        assert response.status_code == 500
        assert response.json() == {
            "error": "Internal server error",
            "message": "connection refused",
        }

    def test_log_failure_still_answers(self, client, mock_interaction_log):
        """Test the answer is returned when the log write fails."""
        mock_interaction_log.add_interaction.side_effect = InteractionLogError("down")

        response = client.post("/api/query", json={"prompt": "hi"})

        assert response.status_code == 200
        assert response.json() == {"answer": "It is a greeting."}

    def test_log_failure_strict(self, strict_settings, mock_llm, mock_interaction_log):
        """Test strict logging turns a write failure into a 500."""
        mock_interaction_log.add_interaction.side_effect = InteractionLogError("down")
        strict_relay = RelayService(strict_settings, mock_llm, mock_interaction_log)
        app.dependency_overrides[get_relay_service] = lambda: strict_relay

        try:
            response = TestClient(app).post("/api/query", json={"prompt": "hi"})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json()["message"] == "down"

    def test_invalid_body(self, client):
        """Test malformed bodies are rejected by validation."""
        response = client.post("/api/query", json={"prompt": "hi", "file": {"size": 1}})

        assert response.status_code == 422
        assert response.json()["error"] == "Request validation failed"


class TestCors:
    """Tests for the CORS configuration."""

    def test_preflight_allowed_origin(self, client):
        """Test the configured origin passes preflight with credentials."""
        response = client.options(
            "/api/query",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_preflight_other_origin(self, client):
        """Test other origins are refused."""
        response = client.options(
            "/api/query",
            headers={
                "Origin": "http://evil.example",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers
