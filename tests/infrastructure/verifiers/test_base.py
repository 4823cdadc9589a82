"""Tests for shared adapter plumbing and response parsing."""

import pytest

from truth_consensus.domain.errors import ResponseParseError
from truth_consensus.domain.models.provider import ProviderResult
from truth_consensus.infrastructure.verifiers.base import (
    BaseVerifierAdapter,
    VerifierConfig,
    parse_json_response,
    parse_sources,
    parse_structured_response,
)

STRUCTURED_ANSWER = """VERDICT: FALSE
CONFIDENCE: 0.95
EXPLANATION: Satellite imagery and centuries of measurements show the Earth is an oblate spheroid.
HISTORICAL_CONTEXT: Ancient Greek scholars such as Eratosthenes estimated Earth's circumference.
SOURCES:
- NASA|https://www.nasa.gov/earth
- "Britannica"|https://www.britannica.com/place/Earth.
not a source line
"""


def test_parse_structured_response():
    """Test every field of the labelled text format."""
    result = parse_structured_response("claude", STRUCTURED_ANSWER)

    assert result.provider_id == "claude"
    assert result.succeeded
    assert result.verdict is False
    assert result.confidence == 0.95
    assert result.explanation.startswith("Satellite imagery")
    assert result.context.startswith("Ancient Greek")
    assert [(s.name, s.url) for s in result.sources] == [
        ("NASA", "https://www.nasa.gov/earth"),
        ("Britannica", "https://www.britannica.com/place/Earth"),
    ]


def test_structured_response_defaults():
    """Test missing optional fields fall back to defaults."""
    result = parse_structured_response("mistral", "VERDICT: **TRUE**")

    assert result.verdict is True
    assert result.confidence == 0.7
    assert result.explanation == "No explanation provided"
    assert result.sources == []


def test_structured_response_without_verdict():
    """Test an answer without a verdict is a parse failure."""
    with pytest.raises(ResponseParseError):
        parse_structured_response("openai", "I cannot determine this.")


def test_citations_replace_listed_sources():
    """Test search citations become sources named after their domain."""
    result = parse_structured_response(
        "perplexity",
        STRUCTURED_ANSWER,
        citations=["https://www.nature.com/articles/1", "https://en.wikipedia.org/wiki/Earth"],
    )

    assert [s.name for s in result.sources] == ["Nature", "Wikipedia"]


def test_parse_json_response():
    """Test a JSON answer wrapped in a code fence."""
    content = """```json
{"isTrue": true, "explanation": "Paris is the capital.", "historicalContext": "Since 987.",
 "sources": [{"name": "Britannica", "url": "https://www.britannica.com/place/Paris"}, {"name": "no url"}],
 "confidence": 0.92}
```"""

    result = parse_json_response("gemini", content)

    assert result.verdict is True
    assert result.confidence == 0.92
    assert result.context == "Since 987."
    assert len(result.sources) == 1


@pytest.mark.parametrize(
    "content",
    ["no json here", '{"explanation": "missing verdict"}', '{"isTrue": "yes"}', "{not json}"],
)
def test_invalid_json_response(content: str):
    """Test malformed JSON answers are parse failures."""
    with pytest.raises(ResponseParseError):
        parse_json_response("gemini", content)


def test_parse_sources_skips_noise():
    """Test only name|url lines become sources."""
    sources = parse_sources(["1. WHO|https://www.who.int/", "just text", "Broken|ftp://x"])

    assert [(s.name, s.url) for s in sources] == [("WHO", "https://www.who.int/")]


class _RaisingAdapter(BaseVerifierAdapter):
    def __init__(self, error: Exception, **overrides):
        super().__init__("raising", **overrides)
        self._error = error

    async def _query(self, statement: str) -> ProviderResult:
        raise self._error


@pytest.mark.asyncio
async def test_unexpected_errors_become_failed_results():
    """Test check_fact never raises."""
    adapter = _RaisingAdapter(KeyError("choices"), api_key="key")

    result = await adapter.check_fact("The sky is blue.")

    assert not result.succeeded
    assert result.provider_id == "raising"
    assert "KeyError" in result.error
    await adapter.shutdown()


@pytest.mark.asyncio
async def test_missing_credentials():
    """Test an adapter without a key reports itself unavailable."""
    adapter = _RaisingAdapter(RuntimeError("unreachable"))

    assert not adapter.is_available
    result = await adapter.check_fact("The sky is blue.")
    assert not result.succeeded
    assert "credentials" in result.error


def test_overrides_replace_config_fields():
    """Test keyword overrides are merged into the config."""
    adapter = _RaisingAdapter(RuntimeError(), config=VerifierConfig(model="m", timeout=5.0), api_key="k")

    assert adapter._config.model == "m"
    assert adapter._config.api_key == "k"
    assert adapter.is_available
