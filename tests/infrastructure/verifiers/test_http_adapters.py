"""Tests for the httpx-based verifier adapters."""

import json
from unittest.mock import AsyncMock

import httpx
import pytest

from truth_consensus.infrastructure.verifiers.anthropic_adapter import AnthropicAdapter
from truth_consensus.infrastructure.verifiers.cohere_adapter import CohereAdapter
from truth_consensus.infrastructure.verifiers.gemini_adapter import GeminiAdapter

STRUCTURED_ANSWER = (
    "VERDICT: TRUE\nCONFIDENCE: 0.9\nEXPLANATION: Water boils at 100 C at one atmosphere.\n"
    "HISTORICAL_CONTEXT: The Celsius scale was defined around this point.\n"
    "SOURCES:\nNIST|https://www.nist.gov/temperature"
)


def create_response(status_code: int, json_data: dict = None) -> httpx.Response:
    """Create a Response object with a proper request."""
    request = httpx.Request("POST", "http://test-provider")
    return httpx.Response(status_code=status_code, json=json_data, request=request)


def mock_client(response: httpx.Response) -> AsyncMock:
    client = AsyncMock()
    client.post.return_value = response
    client.get.return_value = response
    return client


@pytest.mark.asyncio
async def test_anthropic_check_fact():
    """Test a successful Messages API answer."""
    adapter = AnthropicAdapter(api_key="test_key")
    adapter._client = mock_client(create_response(200, {"content": [{"type": "text", "text": STRUCTURED_ANSWER}]}))

    result = await adapter.check_fact("Water boils at 100 degrees Celsius.")

    assert result.succeeded
    assert result.provider_id == "claude"
    assert result.verdict is True
    assert result.confidence == 0.9
    assert result.sources[0].url == "https://www.nist.gov/temperature"

    payload = adapter._client.post.call_args.kwargs["json"]
    assert adapter._client.post.call_args.args[0] == "/v1/messages"
    assert "Water boils at 100 degrees Celsius." in payload["messages"][0]["content"]


def test_anthropic_headers():
    """Test the API key and version travel as headers."""
    headers = AnthropicAdapter(api_key="test_key")._headers()

    assert headers["x-api-key"] == "test_key"
    assert headers["anthropic-version"] == "2023-06-01"


@pytest.mark.asyncio
async def test_anthropic_http_error():
    """Test an HTTP error status becomes a failed result."""
    adapter = AnthropicAdapter(api_key="test_key")
    adapter._client = mock_client(create_response(529, {"error": "overloaded"}))

    result = await adapter.check_fact("Water boils at 100 degrees Celsius.")

    assert not result.succeeded
    assert result.error.startswith("HTTP 529")


@pytest.mark.asyncio
async def test_anthropic_transport_error():
    """Test a network error becomes a failed result."""
    adapter = AnthropicAdapter(api_key="test_key")
    adapter._client = AsyncMock()
    adapter._client.post.side_effect = httpx.ConnectError("connection refused")

    result = await adapter.check_fact("Water boils at 100 degrees Celsius.")

    assert not result.succeeded
    assert "connection refused" in result.error


@pytest.mark.asyncio
async def test_anthropic_empty_content():
    """Test an answer without text is a parse failure."""
    adapter = AnthropicAdapter(api_key="test_key")
    adapter._client = mock_client(create_response(200, {"content": []}))

    result = await adapter.check_fact("Water boils at 100 degrees Celsius.")

    assert not result.succeeded
    assert "no text content" in result.error


@pytest.mark.asyncio
async def test_gemini_check_fact():
    """Test Gemini's JSON answer is parsed."""
    answer = json.dumps({
        "isTrue": False,
        "explanation": "The Great Wall is not visible to the naked eye from orbit.",
        "historicalContext": "The myth predates spaceflight.",
        "sources": [{"name": "NASA", "url": "https://www.nasa.gov/great-wall"}],
        "confidence": 0.85,
    })
    adapter = GeminiAdapter(api_key="test_key")
    adapter._client = mock_client(
        create_response(200, {"candidates": [{"content": {"parts": [{"text": answer}]}}]})
    )

    result = await adapter.check_fact("The Great Wall is visible from space.")

    assert result.succeeded
    assert result.verdict is False
    assert result.confidence == 0.85
    assert adapter._client.post.call_args.kwargs["params"] == {"key": "test_key"}


@pytest.mark.asyncio
async def test_gemini_unexpected_shape():
    """Test a response without candidates fails cleanly."""
    adapter = GeminiAdapter(api_key="test_key")
    adapter._client = mock_client(create_response(200, {"candidates": []}))

    result = await adapter.check_fact("The Great Wall is visible from space.")

    assert not result.succeeded
    assert "unexpected response shape" in result.error


@pytest.mark.asyncio
async def test_cohere_check_fact():
    """Test Cohere's v2 chat answer is parsed."""
    adapter = CohereAdapter(api_key="test_key")
    adapter._client = mock_client(
        create_response(200, {"message": {"content": [{"type": "text", "text": STRUCTURED_ANSWER}]}})
    )

    result = await adapter.check_fact("Water boils at 100 degrees Celsius.")

    assert result.succeeded
    assert result.provider_id == "cohere"
    assert adapter._client.post.call_args.args[0] == "/v2/chat"


@pytest.mark.asyncio
async def test_adapter_without_key_is_unavailable():
    """Test no request is made without credentials."""
    adapter = CohereAdapter()
    adapter._client = mock_client(create_response(200, {}))

    result = await adapter.check_fact("Water boils at 100 degrees Celsius.")

    assert not adapter.is_available
    assert not result.succeeded
    adapter._client.post.assert_not_awaited()
