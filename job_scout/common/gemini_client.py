"""
Gemini Search Client - grounded generation via the Gemini API.

Wraps ``google-genai`` with the Google Search tool enabled so the model can
look up companies and job postings on the web before answering.

The client is constructed explicitly with its credential and model id; a
missing credential fails at construction time, before any network call.

Usage:
    client = GeminiSearchClient.from_config()
    result = await client.generate(prompt)
    print(result.text, result.search_queries)
"""

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from google import genai
from google.genai import types

from job_scout.common.config import Config
from job_scout.common.error_handling import MissingCredentialError

logger = logging.getLogger(__name__)


@dataclass
class LLMResult:
    """
    Result of a grounded Gemini invocation.

    Attributes:
        text: The model's reply text ("" when the reply carried no text)
        model: The model identifier used for the request
        duration_ms: Time taken for the invocation in milliseconds
        search_queries: Web search queries the model issued
        sources: Grounding source URLs cited by the model
    """

    text: str
    model: str
    duration_ms: int
    search_queries: List[str] = field(default_factory=list)
    sources: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


def _grounding_metadata(response: Any) -> tuple[List[str], List[str]]:
    """Pull search queries and source URIs from the first candidate."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return [], []

    metadata = getattr(candidates[0], "grounding_metadata", None)
    if metadata is None:
        return [], []

    queries = list(getattr(metadata, "web_search_queries", None) or [])
    sources = []
    for chunk in getattr(metadata, "grounding_chunks", None) or []:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None) if web else None
        if uri:
            sources.append(uri)
    return queries, sources


class GeminiSearchClient:
    """
    Gemini API client with Google Search grounding.

    Stateless between calls: every ``generate`` issues exactly one request.

    Attributes:
        model: Gemini model id
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        timeout: Optional[int] = None,
        client: Optional[genai.Client] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Gemini API key
            model: Model id (defaults to Config.GEMINI_MODEL)
            timeout: Request timeout in seconds (defaults to Config.GEMINI_TIMEOUT_SECONDS)
            client: Pre-built ``genai.Client`` (tests inject a fake here)

        Raises:
            MissingCredentialError: If ``api_key`` is empty
        """
        if not api_key:
            raise MissingCredentialError("Gemini API key is missing")

        self.model = model or Config.GEMINI_MODEL
        self.timeout = timeout or Config.GEMINI_TIMEOUT_SECONDS
        self._client = client or genai.Client(
            api_key=api_key,
            # HttpOptions timeout is in milliseconds
            http_options=types.HttpOptions(timeout=self.timeout * 1000),
        )

    @classmethod
    def from_config(cls) -> "GeminiSearchClient":
        """Build a client from environment configuration."""
        Config.validate()
        return cls(
            api_key=Config.GEMINI_API_KEY,
            model=Config.GEMINI_MODEL,
            timeout=Config.GEMINI_TIMEOUT_SECONDS,
        )

    def _build_config(self) -> types.GenerateContentConfig:
        # response_mime_type="application/json" is rejected together with
        # the google_search tool, so JSON is recovered from plain text.
        return types.GenerateContentConfig(
            tools=[types.Tool(google_search=types.GoogleSearch())],
        )

    async def generate(self, prompt: str) -> LLMResult:
        """
        Send one grounded generation request.

        Args:
            prompt: Fully rendered prompt

        Returns:
            LLMResult with the reply text and grounding metadata

        Raises:
            google.genai.errors.APIError: On a non-success API response
            Exception: Transport errors propagate unchanged
        """
        start = time.monotonic()
        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=self._build_config(),
        )
        duration_ms = int((time.monotonic() - start) * 1000)

        queries, sources = _grounding_metadata(response)
        text = getattr(response, "text", None) or ""

        logger.info(
            f"Gemini call complete: model={self.model}, duration={duration_ms}ms, "
            f"searches={len(queries)}, sources={len(sources)}, chars={len(text)}"
        )
        return LLMResult(
            text=text,
            model=self.model,
            duration_ms=duration_ms,
            search_queries=queries,
            sources=sources,
        )
