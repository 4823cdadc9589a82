"""Tests for the verifier factory."""

import pytest

from truth_consensus.infrastructure.verifiers.anthropic_adapter import AnthropicAdapter
from truth_consensus.infrastructure.verifiers.factory import VerifierFactory
from truth_consensus.infrastructure.verifiers.openai_compatible_adapter import OpenAICompatibleAdapter
from truth_consensus.infrastructure.verifiers.wikipedia_adapter import WikipediaAdapter


def test_default_providers_registered(verifier_factory: VerifierFactory):
    """Test every catalogued provider has a builder."""
    assert set(verifier_factory.registered_providers) == {
        "claude", "openai", "perplexity", "mistral", "llama",
        "gemini", "cohere", "google_fact_check", "wikipedia",
    }


def test_register_duplicate_provider(verifier_factory: VerifierFactory):
    """Test registering the same name twice."""
    with pytest.raises(ValueError):
        verifier_factory.register_provider("claude", AnthropicAdapter)


@pytest.mark.asyncio
async def test_create_unknown_provider(verifier_factory: VerifierFactory):
    """Test creating a provider that was never registered."""
    with pytest.raises(ValueError):
        await verifier_factory.create_provider("unknown")


@pytest.mark.asyncio
async def test_create_provider(verifier_factory: VerifierFactory):
    """Test creation passes configuration through."""
    provider = await verifier_factory.create_provider("perplexity", api_key="test_key")

    assert isinstance(provider, OpenAICompatibleAdapter)
    assert provider.provider_id == "perplexity"
    assert provider.is_available
    assert verifier_factory.get_provider("perplexity") is provider

    await verifier_factory.shutdown_all()
    assert verifier_factory.get_provider("perplexity") is None


@pytest.mark.asyncio
async def test_initialization_failure(verifier_factory: VerifierFactory):
    """Test a provider that cannot initialize."""

    class BrokenAdapter(WikipediaAdapter):
        async def initialize(self) -> None:
            raise ConnectionError("offline")

    verifier_factory.register_provider("broken", BrokenAdapter)

    with pytest.raises(RuntimeError):
        await verifier_factory.create_provider("broken")


@pytest.mark.asyncio
async def test_build_registry(verifier_factory: VerifierFactory):
    """Test credentials decide availability."""
    verifiers = await verifier_factory.build_registry({"claude": "key-1", "gemini": "key-2"})

    available = {name for name, verifier in verifiers.items() if verifier.is_available}
    assert available == {"claude", "gemini", "wikipedia"}
    assert len(verifiers) == 9
    assert verifier_factory.registered_providers["claude"]
    assert not verifier_factory.registered_providers["openai"]

    await verifier_factory.shutdown_all()
