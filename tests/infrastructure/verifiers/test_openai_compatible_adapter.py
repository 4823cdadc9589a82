"""Tests for the OpenAI-compatible adapter."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from truth_consensus.infrastructure.verifiers.openai_compatible_adapter import (
    OPENAI_COMPATIBLE_ENDPOINTS,
    OpenAICompatibleAdapter,
)

ANSWER = (
    "VERDICT: TRUE\nCONFIDENCE: 0.88\nEXPLANATION: The Eiffel Tower opened in 1889.\n"
    "HISTORICAL_CONTEXT: Built for the Exposition Universelle.\n"
    "SOURCES:\nOfficial site|https://www.toureiffel.paris/en"
)


def completion(content: str, citations=None) -> MagicMock:
    """Create a chat completion response."""
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    response.citations = citations
    return response


@pytest.fixture
def mock_openai_client() -> AsyncMock:
    """Create a mock OpenAI client."""
    client = AsyncMock()
    client.chat = MagicMock()
    client.chat.completions = MagicMock()
    client.chat.completions.create = AsyncMock()
    return client


def adapter_for(provider_id: str, client: AsyncMock) -> OpenAICompatibleAdapter:
    adapter = OpenAICompatibleAdapter(provider_id, api_key="test_key")
    adapter._client = client
    return adapter


@pytest.mark.asyncio
async def test_check_fact(mock_openai_client: AsyncMock):
    """Test a structured answer from OpenAI."""
    mock_openai_client.chat.completions.create.return_value = completion(ANSWER)
    adapter = adapter_for("openai", mock_openai_client)

    result = await adapter.check_fact("The Eiffel Tower opened in 1889.")

    assert result.succeeded
    assert result.provider_id == "openai"
    assert result.verdict is True
    assert result.confidence == 0.88
    assert result.sources[0].name == "Official site"
    kwargs = mock_openai_client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o"
    assert kwargs["messages"][0]["role"] == "system"


@pytest.mark.asyncio
async def test_perplexity_citations(mock_openai_client: AsyncMock):
    """Test Perplexity citations become the sources."""
    mock_openai_client.chat.completions.create.return_value = completion(
        ANSWER, citations=["https://www.britannica.com/topic/Eiffel-Tower"]
    )
    adapter = adapter_for("perplexity", mock_openai_client)

    result = await adapter.check_fact("The Eiffel Tower opened in 1889.")

    assert [source.url for source in result.sources] == ["https://www.britannica.com/topic/Eiffel-Tower"]
    assert mock_openai_client.chat.completions.create.call_args.kwargs["model"] == "sonar"


@pytest.mark.asyncio
async def test_sdk_error_becomes_failed_result(mock_openai_client: AsyncMock):
    """Test SDK errors never escape check_fact."""
    mock_openai_client.chat.completions.create.side_effect = openai.APIConnectionError(
        request=httpx.Request("POST", "https://api.mistral.ai/v1/chat/completions")
    )
    adapter = adapter_for("mistral", mock_openai_client)

    result = await adapter.check_fact("The Eiffel Tower opened in 1889.")

    assert not result.succeeded
    assert result.error.startswith("mistral: request failed")


@pytest.mark.asyncio
async def test_unparsable_answer(mock_openai_client: AsyncMock):
    """Test an answer without a verdict is a failure."""
    mock_openai_client.chat.completions.create.return_value = completion("I'm not sure.")
    adapter = adapter_for("llama", mock_openai_client)

    result = await adapter.check_fact("The Eiffel Tower opened in 1889.")

    assert not result.succeeded
    assert "VERDICT" in result.error


@pytest.mark.asyncio
async def test_initialize_and_shutdown():
    """Test the SDK client lifecycle."""
    adapter = OpenAICompatibleAdapter("perplexity", api_key="test_key")

    await adapter.initialize()
    assert str(adapter._client.base_url).startswith("https://api.perplexity.ai")

    await adapter.shutdown()
    assert adapter._client is None


def test_known_endpoints():
    """Test every OpenAI-compatible provider has a default model."""
    assert set(OPENAI_COMPATIBLE_ENDPOINTS) == {"openai", "perplexity", "mistral", "llama"}
    for provider_id in OPENAI_COMPATIBLE_ENDPOINTS:
        assert OpenAICompatibleAdapter(provider_id)._config.model
