"""Tests for the service container."""

from unittest.mock import patch

import pytest

from truth_consensus.domain.models.provider import SubscriptionTier
from truth_consensus.infrastructure.dependencies import (
    ProviderCredentials,
    ServiceContainer,
    engine_config_from_env,
    tier_from_env,
)


def test_credentials_from_env():
    """Test keys are read per provider and blanks are dropped."""
    env = {"ANTHROPIC_API_KEY": "a-key", "OPENAI_API_KEY": "  ", "GOOGLE_FACT_CHECK_API_KEY": "g-key"}
    with patch.dict("os.environ", env, clear=True):
        credentials = ProviderCredentials.from_env()

    assert credentials.as_mapping() == {"claude": "a-key", "google_fact_check": "g-key"}


def test_tier_from_env():
    """Test the tier variable and its fallback."""
    with patch.dict("os.environ", {"TRUTH_CONSENSUS_TIER": "Premium"}):
        assert tier_from_env() == SubscriptionTier.PREMIUM
    with patch.dict("os.environ", {"TRUTH_CONSENSUS_TIER": "platinum"}):
        assert tier_from_env() == SubscriptionTier.STANDARD


def test_engine_config_from_env():
    """Test the deadline variable and its fallback."""
    with patch.dict("os.environ", {"TRUTH_CONSENSUS_DEADLINE": "12.5"}):
        assert engine_config_from_env().deadline_seconds == 12.5
    with patch.dict("os.environ", {"TRUTH_CONSENSUS_DEADLINE": "soon"}):
        assert engine_config_from_env().deadline_seconds == 30.0


@pytest.mark.asyncio
async def test_container_builds_engine():
    """Test the container wires verifiers, descriptors and engine."""
    container = ServiceContainer(credentials=ProviderCredentials(keys={"openai": "test_key"}))

    engine = await container.get_verification_engine()
    descriptors = await container.get_descriptors()

    assert engine is await container.get_verification_engine()
    assert "openai" in engine.provider_ids
    available = {d.id for d in descriptors if d.is_available}
    assert available == {"openai", "wikipedia"}

    await container.shutdown()
