"""Pytest configuration and fixtures for FileAsk tests."""

import os
import sys

# Set required env vars BEFORE any imports that might trigger Settings
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault(
    "FIREBASE_CREDENTIALS", '{"type":"service_account","project_id":"test"}'
)

from unittest.mock import AsyncMock

import pytest

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from config import Settings  # noqa: E402


@pytest.fixture
def test_settings():
    """Real settings object, isolated from any local .env file."""
    return Settings(
        gemini_api_key="test-gemini-key",
        firebase_credentials='{"type":"service_account","project_id":"test"}',
        environment="test",
        _env_file=None,
    )


@pytest.fixture
def strict_settings(test_settings):
    """Settings that fail requests when the interaction log write fails."""
    return test_settings.model_copy(update={"strict_interaction_log": True})


@pytest.fixture
def mock_llm():
    """Mock LLM service."""
    service = AsyncMock()
    service.generate.return_value = "It is a greeting."
    return service


@pytest.fixture
def mock_interaction_log():
    """Mock interaction log service."""
    service = AsyncMock()
    service.add_interaction.return_value = "interaction-id"
    service.health_check.return_value = {"status": "healthy", "latency_ms": 10}
    return service


@pytest.fixture
def legacy_prompt():
    """Prompt in the server-side context template."""
    return (
        "Context from uploaded files:\n"
        "File: a.txt (text)\n"
        "Content: hello...\n\n"
        "User Query: what is this?"
    )


@pytest.fixture
def sample_text():
    """Sample file text for testing."""
    return """FileAsk reads a local file and sends a preview of it to the relay.

The relay forwards the prompt to Gemini and records the exchange.
"""
