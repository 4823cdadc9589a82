"""Shared plumbing for verification provider adapters."""

import json
import logging
import re
from abc import abstractmethod
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import urlparse

import httpx
from pydantic import BaseModel, Field

from ...domain.errors import ProviderFailure, ResponseParseError
from ...domain.models.provider import ProviderResult, Source
from ...domain.ports.verifier import Verifier

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE = 0.7

STRUCTURED_PROMPT = """
You are a professional fact-checker. Analyze the statement for factual accuracy
using reliable, verifiable sources and careful reasoning.

Format your response exactly as follows:
VERDICT: [TRUE or FALSE]
CONFIDENCE: [A number between 0.0 and 1.0]
EXPLANATION: [Detailed reasoning behind your verdict]
HISTORICAL_CONTEXT: [Relevant background that helps understand the statement]
SOURCES: [One source per line in the format "name|url"]
"""

JSON_PROMPT = """
You are a rigorous fact checker analyzing a statement for factual accuracy.

Respond only with a JSON object with these fields:
- isTrue: a boolean indicating if the statement is factually accurate
- explanation: why the statement is true or false (150-300 words)
- historicalContext: background information that helps understand the context
- sources: an array of objects each containing "name" and "url"
- confidence: a number from 0 to 1 indicating your confidence in this assessment

Base your assessment solely on verifiable facts from reputable sources.
"""

_VERDICT = re.compile(r"VERDICT:\s*\**\s*(TRUE|FALSE)", re.IGNORECASE)
_CONFIDENCE = re.compile(r"CONFIDENCE:\s*\**\s*([01](?:\.\d+)?|\.\d+)", re.IGNORECASE)
_EXPLANATION = re.compile(r"EXPLANATION:\s*([\s\S]*?)(?=HISTORICAL_CONTEXT:|SOURCES:|$)", re.IGNORECASE)
_CONTEXT = re.compile(r"HISTORICAL_CONTEXT:\s*([\s\S]*?)(?=SOURCES:|$)", re.IGNORECASE)
_SOURCES = re.compile(r"SOURCES:\s*([\s\S]*)$", re.IGNORECASE)
_SOURCE_LINE = re.compile(r"(?:\"([^\"]+)\"|([^|]+))\s*\|\s*(https?://\S+)", re.IGNORECASE)
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


class VerifierConfig(BaseModel):
    """Configuration for an HTTP-backed verification provider."""

    api_key: str = Field(default="", description="Provider API key")
    model: str = Field(default="", description="Model to query")
    base_url: str = Field(default="", description="API base URL")
    timeout: float = Field(default=30.0, description="API timeout in seconds")
    temperature: float = Field(default=0.2, description="Temperature for responses")
    max_tokens: int = Field(default=1000, description="Maximum tokens per response")


def parse_sources(lines: Iterable[str]) -> List[Source]:
    """Parse ``name|url`` lines into sources, skipping anything else."""
    sources = []
    for line in lines:
        match = _SOURCE_LINE.search(line)
        if not match:
            continue
        name = (match.group(1) or match.group(2)).strip().lstrip("-*•0123456789. ").strip().strip('"')
        url = match.group(3).rstrip(".,;)")
        sources.append(Source(name=name or url, url=url))
    return sources


def source_from_url(url: str) -> Source:
    """Build a source named after the URL's registered domain."""
    host = urlparse(url).hostname or url
    parts = host.split(".")
    name = parts[-2] if len(parts) >= 2 else host
    return Source(name=name.capitalize(), url=url)


def parse_structured_response(
    provider_id: str,
    content: str,
    citations: Optional[List[str]] = None,
) -> ProviderResult:
    """Parse a VERDICT/CONFIDENCE/EXPLANATION/HISTORICAL_CONTEXT/SOURCES answer.

    Raises:
        ResponseParseError: If the answer carries no verdict
    """
    verdict = _VERDICT.search(content or "")
    if not verdict:
        raise ResponseParseError(provider_id, "no VERDICT found in response")

    confidence = _CONFIDENCE.search(content)
    explanation = _EXPLANATION.search(content)
    context = _CONTEXT.search(content)

    if citations:
        sources = [source_from_url(url) for url in citations]
    else:
        block = _SOURCES.search(content)
        sources = parse_sources(block.group(1).splitlines()) if block else []

    return ProviderResult(
        provider_id=provider_id,
        verdict=verdict.group(1).upper() == "TRUE",
        confidence=float(confidence.group(1)) if confidence else DEFAULT_CONFIDENCE,
        explanation=explanation.group(1).strip() if explanation else "No explanation provided",
        context=context.group(1).strip() if context else "",
        sources=sources,
    )


def parse_json_response(provider_id: str, content: str) -> ProviderResult:
    """Parse a JSON answer (optionally wrapped in prose or code fences).

    Raises:
        ResponseParseError: If no JSON object or no boolean verdict is found
    """
    match = _JSON_OBJECT.search(content or "")
    if not match:
        raise ResponseParseError(provider_id, "no JSON object found in response")
    try:
        payload: Dict[str, Any] = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ResponseParseError(provider_id, f"invalid JSON: {e}")

    verdict = payload.get("isTrue", payload.get("is_true"))
    if not isinstance(verdict, bool):
        raise ResponseParseError(provider_id, "response has no boolean isTrue field")

    sources = [
        Source(name=item.get("name") or item["url"], url=item["url"])
        for item in payload.get("sources") or []
        if isinstance(item, dict) and item.get("url")
    ]
    confidence = payload.get("confidence")

    return ProviderResult(
        provider_id=provider_id,
        verdict=verdict,
        confidence=DEFAULT_CONFIDENCE if confidence is None else confidence,
        explanation=str(payload.get("explanation") or "No explanation provided"),
        context=str(payload.get("historicalContext") or payload.get("historical_context") or ""),
        sources=sources,
    )


def user_prompt(statement: str) -> str:
    return f'Analyze this statement and determine if it is factually accurate: "{statement}"'


class BaseVerifierAdapter(Verifier):
    """Base class turning a provider API into a failure-safe verifier.

    Subclasses implement ``_query``; any exception it raises becomes a
    failed result.
    """

    requires_api_key = True

    def __init__(
        self,
        provider_id: str,
        config: Optional[VerifierConfig] = None,
        **overrides: Any,
    ):
        """Initialize the adapter.

        Args:
            provider_id: Identifier matching the provider descriptor
            config: Adapter configuration
            **overrides: Config fields to replace, e.g. ``api_key``
        """
        config = config or VerifierConfig()
        self._id = provider_id
        self._config = config.model_copy(update=overrides) if overrides else config
        self._client: Optional[httpx.AsyncClient] = None

    async def initialize(self) -> None:
        """Create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                headers=self._headers(),
            )

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    def _is_ready(self) -> bool:
        return self._client is not None

    async def check_fact(self, statement: str) -> ProviderResult:
        """Check a statement, reporting any failure as a failed result."""
        if not self.is_available:
            return ProviderResult.failed(self._id, "provider is not configured with credentials")

        try:
            if not self._is_ready():
                await self.initialize()
            return await self._query(statement)
        except ProviderFailure as e:
            logger.warning(f"⚠️ {e}")
            return ProviderResult.failed(self._id, str(e))
        except httpx.HTTPStatusError as e:
            logger.warning(f"⚠️ {self._id} API returned {e.response.status_code}")
            return ProviderResult.failed(self._id, f"HTTP {e.response.status_code}: {e}")
        except httpx.HTTPError as e:
            logger.warning(f"⚠️ {self._id} request failed: {e}")
            return ProviderResult.failed(self._id, f"request failed: {e}")
        except Exception as e:
            logger.error(f"❌ {self._id} verification failed: {e}", exc_info=True)
            return ProviderResult.failed(self._id, f"{type(e).__name__}: {e}")

    @abstractmethod
    async def _query(self, statement: str) -> ProviderResult:
        """Ask the provider and parse its answer."""

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def provider_id(self) -> str:
        return self._id

    @property
    def is_available(self) -> bool:
        return bool(self._config.api_key) or not self.requires_api_key
