"""
Unit tests for job_scout/common/gemini_client.py

Covers credential checks, request shape (Google Search tool enabled) and
extraction of reply text and grounding metadata. The genai client is
replaced by a double; no network calls are made.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from google.genai import types

from job_scout.common.config import Config
from job_scout.common.error_handling import MissingCredentialError
from job_scout.common.gemini_client import GeminiSearchClient, LLMResult


# ===== FIXTURES =====

def _grounded_response(text, queries=None, uris=None):
    chunks = [SimpleNamespace(web=SimpleNamespace(uri=u, title="t")) for u in (uris or [])]
    metadata = SimpleNamespace(web_search_queries=queries or [], grounding_chunks=chunks)
    return SimpleNamespace(text=text, candidates=[SimpleNamespace(grounding_metadata=metadata)])


@pytest.fixture
def genai_double():
    """Stand-in for google.genai.Client with an async generate_content."""
    double = MagicMock()
    double.aio.models.generate_content = AsyncMock(
        return_value=_grounded_response(
            '[{"name": "Acme"}]',
            queries=["fusion startups japan"],
            uris=["https://example.com/a", "https://example.com/b"],
        )
    )
    return double


# ===== CONSTRUCTION =====

class TestConstruction:
    """Tests for the explicit initialization contract."""

    def test_missing_key_raises_before_any_call(self):
        with pytest.raises(MissingCredentialError):
            GeminiSearchClient(api_key="")

    def test_from_config_requires_key(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY")
        Config.reload()
        with pytest.raises(MissingCredentialError):
            GeminiSearchClient.from_config()

    def test_from_config_uses_configured_model(self, monkeypatch):
        monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-pro")
        Config.reload()
        with patch("job_scout.common.gemini_client.genai.Client") as client_cls:
            client = GeminiSearchClient.from_config()
        assert client.model == "gemini-2.5-pro"
        assert client_cls.call_args.kwargs["api_key"] == "test-gemini-mock-key"

    def test_timeout_passed_in_milliseconds(self):
        with patch("job_scout.common.gemini_client.genai.Client") as client_cls:
            GeminiSearchClient(api_key="k", timeout=30)
        http_options = client_cls.call_args.kwargs["http_options"]
        assert http_options.timeout == 30_000


# ===== GENERATE =====

class TestGenerate:
    """Tests for GeminiSearchClient.generate."""

    @pytest.mark.asyncio
    async def test_enables_google_search_tool(self, genai_double):
        client = GeminiSearchClient(api_key="k", model="gemini-2.5-flash", client=genai_double)
        await client.generate("find companies")

        kwargs = genai_double.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        assert kwargs["contents"] == "find companies"
        config = kwargs["config"]
        assert isinstance(config, types.GenerateContentConfig)
        assert config.tools[0].google_search is not None
        assert config.response_mime_type is None

    @pytest.mark.asyncio
    async def test_returns_text_and_grounding(self, genai_double):
        client = GeminiSearchClient(api_key="k", client=genai_double)
        result = await client.generate("prompt")

        assert isinstance(result, LLMResult)
        assert result.text == '[{"name": "Acme"}]'
        assert result.search_queries == ["fusion startups japan"]
        assert result.sources == ["https://example.com/a", "https://example.com/b"]
        assert result.duration_ms >= 0

    @pytest.mark.asyncio
    async def test_missing_text_becomes_empty_string(self, genai_double):
        genai_double.aio.models.generate_content.return_value = SimpleNamespace(text=None, candidates=None)
        client = GeminiSearchClient(api_key="k", client=genai_double)
        result = await client.generate("prompt")

        assert result.text == ""
        assert result.search_queries == []
        assert result.sources == []

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self, genai_double):
        genai_double.aio.models.generate_content.side_effect = ConnectionError("network down")
        client = GeminiSearchClient(api_key="k", client=genai_double)

        with pytest.raises(ConnectionError, match="network down"):
            await client.generate("prompt")

    def test_result_to_dict(self):
        result = LLMResult(text="x", model="m", duration_ms=5)
        assert result.to_dict() == {
            "text": "x",
            "model": "m",
            "duration_ms": 5,
            "search_queries": [],
            "sources": [],
        }
