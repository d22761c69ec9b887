"""
Global fixtures for all unit tests.

Isolates the environment from real credentials so no test can reach the
Gemini API, and provides a fake Gemini client for the services.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from job_scout.common.config import Config
from job_scout.common.gemini_client import GeminiSearchClient, LLMResult


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """
    Replace credentials and output settings with test values.

    Config reads the environment at import time, so it is reloaded after
    patching and again on teardown.
    """
    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY", "GEMINI_MODEL", "SCOUT_MAX_COMPANIES",
                 "LOG_LEVEL", "LOG_FORMAT", "DEBUG_MODE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GEMINI_API_KEY", "test-gemini-mock-key")
    monkeypatch.setenv("SCOUT_OUTPUT_LOCALE", "ja")
    monkeypatch.setenv("SCOUT_JSON_REPAIR", "false")
    Config.reload()
    yield
    monkeypatch.undo()
    Config.reload()


@pytest.fixture
def llm_result_factory():
    """Factory to create LLMResult objects with the given reply text."""
    def _create_result(text="", queries=None, sources=None):
        return LLMResult(
            text=text,
            model="gemini-2.5-flash",
            duration_ms=1200,
            search_queries=queries or [],
            sources=sources or [],
        )
    return _create_result


@pytest.fixture
def fake_client(llm_result_factory):
    """
    GeminiSearchClient double whose ``generate`` is an AsyncMock.

    Set ``fake_client.generate.return_value`` or ``side_effect`` per test.
    """
    client = MagicMock(spec=GeminiSearchClient)
    client.model = "gemini-2.5-flash"
    client.generate = AsyncMock(return_value=llm_result_factory(""))
    return client
