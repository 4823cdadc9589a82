"""Test configuration and common fixtures."""

from typing import Callable, List, Optional
from unittest.mock import AsyncMock

import pytest

from truth_consensus.domain.models.provider import ProviderDescriptor, ProviderResult, Source
from truth_consensus.infrastructure.verifiers.catalogue import DISPLAY_NAMES, PROVIDER_STRENGTHS
from truth_consensus.infrastructure.verifiers.factory import VerifierFactory


@pytest.fixture
def make_result() -> Callable[..., ProviderResult]:
    """Provide a builder for successful provider results."""

    def _make(
        provider_id: str,
        verdict: bool = True,
        confidence: float = 0.8,
        explanation: str = "",
        context: str = "",
        sources: Optional[List[Source]] = None,
    ) -> ProviderResult:
        return ProviderResult(
            provider_id=provider_id,
            verdict=verdict,
            confidence=confidence,
            explanation=explanation or f"{provider_id} reasoning",
            context=context,
            sources=sources or [],
        )

    return _make


@pytest.fixture
def make_verifier() -> Callable[..., AsyncMock]:
    """Provide a builder for mock verifiers answering with a fixed result."""

    def _make(provider_id: str, result: Optional[ProviderResult] = None, available: bool = True) -> AsyncMock:
        verifier = AsyncMock()
        verifier.provider_id = provider_id
        verifier.is_available = available
        verifier.check_fact.return_value = result or ProviderResult(
            provider_id=provider_id,
            verdict=True,
            confidence=0.8,
            explanation=f"{provider_id} reasoning",
        )
        return verifier

    return _make


@pytest.fixture
def descriptors() -> List[ProviderDescriptor]:
    """Provide the catalogued providers, all available."""
    return [
        ProviderDescriptor(
            id=provider_id,
            per_domain_strength=strengths,
            is_available=True,
            display_name=DISPLAY_NAMES[provider_id],
        )
        for provider_id, strengths in PROVIDER_STRENGTHS.items()
    ]


@pytest.fixture
def verifier_factory() -> VerifierFactory:
    """Provide a factory instance for testing."""
    return VerifierFactory()
