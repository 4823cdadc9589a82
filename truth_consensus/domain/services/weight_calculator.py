"""Domain-aware provider selection and weighting."""

import logging
from typing import Iterable, List, Sequence, Tuple

from ..models.domain import Domain, ordered
from ..models.provider import ProviderDescriptor, SubscriptionTier, WeightVector

logger = logging.getLogger(__name__)


def raw_strength(provider: ProviderDescriptor, domains: Iterable[Domain]) -> float:
    """Product of a provider's strengths over all domains of a claim.

    A provider weak in any one relevant domain is penalized, so breadth
    across the claim's domains beats narrow excellence.
    """
    strength = 1.0
    for domain in ordered(domains):
        strength *= provider.strength_for(domain)
    return strength


def rank_providers(
    domains: Iterable[Domain],
    providers: Sequence[ProviderDescriptor],
) -> List[Tuple[ProviderDescriptor, float]]:
    """Available providers with their raw strength, strongest first.

    Ties keep the providers' declaration order.
    """
    domains = ordered(domains)
    scored = [
        (provider, raw_strength(provider, domains))
        for provider in providers
        if provider.is_available
    ]
    # sorted() is stable, so equal strengths keep declaration order
    return sorted(scored, key=lambda item: item[1], reverse=True)


def weigh(
    domains: Iterable[Domain],
    quota: int,
    providers: Sequence[ProviderDescriptor],
) -> WeightVector:
    """Select the top ``quota`` available providers and normalize their weights.

    Args:
        domains: Domains of the claim
        quota: Maximum number of providers to consult
        providers: Provider table in declaration order

    Returns:
        Weight vector over the selected providers; empty when nothing is
        available or the quota is not positive
    """
    if quota <= 0:
        return WeightVector()

    selected = rank_providers(domains, providers)[:quota]
    if not selected:
        logger.warning("⚠️ No available verification provider to weight")
        return WeightVector()

    total = sum(strength for _, strength in selected)
    if total > 0:
        weights = {provider.id: strength / total for provider, strength in selected}
    else:
        weights = {provider.id: 1.0 / len(selected) for provider, _ in selected}

    return WeightVector(weights=weights)


def quota_for_tier(tier: SubscriptionTier) -> int:
    """Number of providers a subscription tier may consult."""
    return tier.provider_quota
