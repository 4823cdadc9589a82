"""Static catalogue of known verification providers and their strengths."""

from typing import Dict, List, Mapping

from ...domain.models.domain import Domain
from ...domain.models.provider import ProviderDescriptor
from ...domain.ports.verifier import Verifier

D = Domain

# Per-domain strength of each provider. Domains left out fall back to the
# neutral default, so llama is weighted neutrally everywhere.
PROVIDER_STRENGTHS: Dict[str, Dict[Domain, float]] = {
    "claude": {
        D.MEDICAL: 0.8, D.SCIENTIFIC: 0.7, D.HISTORICAL: 0.9, D.TECHNICAL: 0.6,
        D.FINANCIAL: 0.7, D.POLITICAL: 0.8, D.CURRENT_EVENTS: 0.5, D.SPORTS: 0.6,
        D.ENTERTAINMENT: 0.7, D.GENERAL: 0.8,
    },
    "openai": {
        D.MEDICAL: 0.7, D.SCIENTIFIC: 0.8, D.HISTORICAL: 0.7, D.TECHNICAL: 0.9,
        D.FINANCIAL: 0.8, D.POLITICAL: 0.7, D.CURRENT_EVENTS: 0.6, D.SPORTS: 0.7,
        D.ENTERTAINMENT: 0.8, D.GENERAL: 0.9,
    },
    "perplexity": {
        D.MEDICAL: 0.7, D.SCIENTIFIC: 0.7, D.HISTORICAL: 0.6, D.TECHNICAL: 0.8,
        D.FINANCIAL: 0.7, D.POLITICAL: 0.6, D.CURRENT_EVENTS: 0.9, D.SPORTS: 0.8,
        D.ENTERTAINMENT: 0.8, D.GENERAL: 0.7,
    },
    "gemini": {
        D.MEDICAL: 0.8, D.SCIENTIFIC: 0.85, D.HISTORICAL: 0.75, D.TECHNICAL: 0.85,
        D.FINANCIAL: 0.7, D.POLITICAL: 0.75, D.CURRENT_EVENTS: 0.8, D.SPORTS: 0.7,
        D.ENTERTAINMENT: 0.75, D.GENERAL: 0.8,
    },
    "mistral": {
        D.MEDICAL: 0.75, D.SCIENTIFIC: 0.8, D.HISTORICAL: 0.85, D.TECHNICAL: 0.75,
        D.FINANCIAL: 0.7, D.POLITICAL: 0.75, D.CURRENT_EVENTS: 0.65, D.SPORTS: 0.65,
        D.ENTERTAINMENT: 0.7, D.GENERAL: 0.75,
    },
    "cohere": {
        D.MEDICAL: 0.85, D.SCIENTIFIC: 0.85, D.HISTORICAL: 0.8, D.TECHNICAL: 0.75,
        D.FINANCIAL: 0.8, D.POLITICAL: 0.9, D.CURRENT_EVENTS: 0.75, D.SPORTS: 0.7,
        D.ENTERTAINMENT: 0.7, D.GENERAL: 0.8,
    },
    "llama": {},
    # Professional fact-checkers are strongest where claims get reviewed most
    "google_fact_check": {
        D.MEDICAL: 0.75, D.SCIENTIFIC: 0.6, D.HISTORICAL: 0.6, D.TECHNICAL: 0.4,
        D.FINANCIAL: 0.6, D.POLITICAL: 0.9, D.CURRENT_EVENTS: 0.85, D.SPORTS: 0.5,
        D.ENTERTAINMENT: 0.6, D.GENERAL: 0.6,
    },
    "wikipedia": {
        D.MEDICAL: 0.6, D.SCIENTIFIC: 0.75, D.HISTORICAL: 0.85, D.TECHNICAL: 0.65,
        D.FINANCIAL: 0.55, D.POLITICAL: 0.6, D.CURRENT_EVENTS: 0.4, D.SPORTS: 0.7,
        D.ENTERTAINMENT: 0.75, D.GENERAL: 0.75,
    },
}

DISPLAY_NAMES: Dict[str, str] = {
    "claude": "Anthropic Claude",
    "openai": "OpenAI GPT",
    "perplexity": "Perplexity",
    "gemini": "Google Gemini",
    "mistral": "Mistral AI",
    "cohere": "Cohere",
    "llama": "Meta Llama",
    "google_fact_check": "Google Fact Check",
    "wikipedia": "Wikipedia",
}


def build_descriptors(verifiers: Mapping[str, Verifier]) -> List[ProviderDescriptor]:
    """Describe every catalogued provider.

    A provider is available only when a verifier is registered for it and
    that verifier reports itself usable (e.g. it has credentials).
    """
    descriptors = []
    for provider_id, strengths in PROVIDER_STRENGTHS.items():
        verifier = verifiers.get(provider_id)
        descriptors.append(
            ProviderDescriptor(
                id=provider_id,
                per_domain_strength=strengths,
                is_available=verifier is not None and verifier.is_available,
                display_name=DISPLAY_NAMES.get(provider_id),
            )
        )
    return descriptors
