"""Tests for the provider catalogue."""

from truth_consensus.domain.models.domain import Domain
from truth_consensus.infrastructure.verifiers.catalogue import PROVIDER_STRENGTHS, build_descriptors


def test_strengths_are_in_range():
    """Test every strength is a probability-like score."""
    for strengths in PROVIDER_STRENGTHS.values():
        assert all(0.0 <= value <= 1.0 for value in strengths.values())


def test_build_descriptors(make_verifier):
    """Test availability comes from the registered verifiers."""
    descriptors = build_descriptors({
        "claude": make_verifier("claude"),
        "openai": make_verifier("openai", available=False),
    })
    by_id = {descriptor.id: descriptor for descriptor in descriptors}

    assert list(by_id) == list(PROVIDER_STRENGTHS)
    assert by_id["claude"].is_available
    assert not by_id["openai"].is_available
    assert not by_id["gemini"].is_available
    assert by_id["perplexity"].strength_for(Domain.CURRENT_EVENTS) == 0.9
    assert by_id["llama"].strength_for(Domain.MEDICAL) == 0.7
    assert by_id["claude"].name == "Anthropic Claude"
