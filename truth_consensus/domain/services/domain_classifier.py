"""Lexical classification of statements into knowledge domains."""

from typing import Dict, FrozenSet, Iterable, List, Tuple

from ..models.domain import Domain, ordered
from ..models.provider import WeightVector

DOMAIN_KEYWORDS: Dict[Domain, Tuple[str, ...]] = {
    Domain.MEDICAL: (
        "disease", "patient", "doctor", "treatment", "diagnosis", "symptoms",
        "hospital", "medicine", "vaccine", "virus", "bacteria", "infection",
        "surgery", "health", "medical", "cancer", "cure", "therapy", "drug",
    ),
    Domain.SCIENTIFIC: (
        "research", "study", "experiment", "theory", "hypothesis", "scientists",
        "physics", "chemistry", "biology", "laboratory", "discovery", "evidence",
        "analysis", "particle", "quantum", "molecular", "data", "observation",
    ),
    Domain.HISTORICAL: (
        "history", "century", "ancient", "dynasty", "war", "period", "king",
        "queen", "empire", "civilization", "archaeology", "artifact", "medieval",
        "revolution", "historical", "era", "prehistoric", "date",
    ),
    Domain.TECHNICAL: (
        "technology", "software", "hardware", "algorithm", "code", "system",
        "computer", "programming", "digital", "device", "application", "internet",
        "robot", "artificial intelligence", "machine learning", "network", "interface",
    ),
    Domain.FINANCIAL: (
        "market", "economy", "stocks", "investment", "financial", "economic",
        "money", "bank", "inflation", "recession", "currency", "trading",
        "finance", "debt", "interest", "price", "cost", "profit", "budget", "fiscal",
    ),
    Domain.POLITICAL: (
        "government", "policy", "election", "party", "president", "vote",
        "democracy", "congress", "parliament", "law", "legislation", "senator",
        "representative", "politician", "campaign", "ballot", "constitutional",
    ),
    Domain.CURRENT_EVENTS: (
        "news", "recently", "today", "yesterday", "this week", "this month",
        "this year", "ongoing", "developing", "breaking", "current", "latest",
    ),
    Domain.SPORTS: (
        "game", "player", "team", "score", "championship", "tournament",
        "athlete", "coach", "stadium", "match", "sports", "football",
        "basketball", "baseball", "soccer", "tennis", "olympics", "medal",
        "record", "league",
    ),
    Domain.ENTERTAINMENT: (
        "movie", "film", "actor", "actress", "director", "celebrity", "music",
        "song", "album", "artist", "tv", "television", "show", "series", "award",
        "performance", "concert", "theater", "streaming", "popular", "star",
    ),
    Domain.GENERAL: (
        "fact", "information", "knowledge", "common", "general", "world",
        "global", "culture", "society", "education", "learning",
        "understanding", "basics",
    ),
}


def classify(statement: str) -> FrozenSet[Domain]:
    """Assign every domain with at least one keyword in the statement.

    Matching is a case-insensitive substring test, so a statement can
    belong to several domains. Falls back to general knowledge when
    nothing matches.
    """
    lowered = statement.lower()
    found = {
        domain
        for domain, keywords in DOMAIN_KEYWORDS.items()
        if any(keyword in lowered for keyword in keywords)
    }
    return frozenset(found or {Domain.GENERAL})


def display_names(domains: Iterable[Domain]) -> List[str]:
    """User-friendly names for domains, in declaration order."""
    return [domain.display_name for domain in ordered(domains)]


def explain_weights(domains: Iterable[Domain], weights: WeightVector) -> str:
    """Describe the detected domains and the resulting provider weighting."""
    explanation = (
        f"This statement was classified in the following domains: "
        f"{', '.join(display_names(domains))}."
    )
    if not len(weights):
        return explanation + " No verification provider was available for these domains."
    shares = ", ".join(
        f"{provider_id} {weight:.0%}" for provider_id, weight in weights.weights.items()
    )
    return explanation + f" Providers were weighted by their strength in these domains: {shares}."
