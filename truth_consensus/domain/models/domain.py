"""Topical domains used to select and weight providers."""

from enum import Enum
from typing import Dict, Iterable, List


class Domain(str, Enum):
    """Knowledge domain a claim belongs to."""

    MEDICAL = "medical"
    SCIENTIFIC = "scientific"
    HISTORICAL = "historical"
    TECHNICAL = "technical"
    FINANCIAL = "financial"
    POLITICAL = "political"
    CURRENT_EVENTS = "current_events"
    SPORTS = "sports"
    ENTERTAINMENT = "entertainment"
    GENERAL = "general"

    @property
    def display_name(self) -> str:
        """Human-readable name of the domain."""
        return DOMAIN_DISPLAY_NAMES[self]


DOMAIN_DISPLAY_NAMES: Dict[Domain, str] = {
    Domain.MEDICAL: "Health & Medicine",
    Domain.SCIENTIFIC: "Science",
    Domain.HISTORICAL: "History & Culture",
    Domain.TECHNICAL: "Technology",
    Domain.FINANCIAL: "Economics & Finance",
    Domain.POLITICAL: "Politics",
    Domain.CURRENT_EVENTS: "Current Events",
    Domain.SPORTS: "Sports",
    Domain.ENTERTAINMENT: "Entertainment & Media",
    Domain.GENERAL: "General Knowledge",
}

_DECLARATION_ORDER = {domain: index for index, domain in enumerate(Domain)}


def ordered(domains: Iterable[Domain]) -> List[Domain]:
    """Return domains deduplicated and in declaration order."""
    return sorted(set(domains), key=_DECLARATION_ORDER.__getitem__)
