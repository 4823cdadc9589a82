"""Publisher-based trust annotation for cited sources."""

from typing import Iterable, List, Tuple
from urllib.parse import urlparse

from ..models.provider import Source

# (domain fragment, category) for highly trusted publishers
HIGHLY_TRUSTED: Tuple[Tuple[str, str], ...] = (
    ("nature.com", "Scientific Journal"),
    ("science.org", "Scientific Journal"),
    ("nih.gov", "Government"),
    ("who.int", "Health Organization"),
    ("bbc.com", "Major News Agency"),
    ("reuters.com", "Major News Agency"),
    ("ap.org", "Major News Agency"),
    ("economist.com", "News Publication"),
    (".edu", "Academic"),
    (".gov", "Government"),
)

MODERATELY_TRUSTED: Tuple[str, ...] = (
    "nytimes.com",
    "wsj.com",
    "washingtonpost.com",
    "theguardian.com",
    "bloomberg.com",
    "time.com",
    "nationalgeographic.com",
)


def _hostname(url: str) -> str:
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def _matches(host: str, fragment: str) -> bool:
    # ".gov" also matches country second-level domains such as "gov.uk"
    if fragment.startswith("."):
        return host.endswith(fragment) or f"{fragment}." in f".{host}."
    return host == fragment or host.endswith(f".{fragment}")


def annotate(source: Source) -> Source:
    """Attach a trust score and publisher category to a source."""
    host = _hostname(source.url)
    trust_score, category = 0.5, "General"

    if host:
        for fragment, fragment_category in HIGHLY_TRUSTED:
            if _matches(host, fragment):
                trust_score, category = 0.9, fragment_category
                break
        else:
            if any(_matches(host, domain) for domain in MODERATELY_TRUSTED):
                trust_score, category = 0.7, "News Publication"

    return source.model_copy(update={"trust_score": trust_score, "category": category})


def annotate_all(sources: Iterable[Source]) -> List[Source]:
    """Annotate several sources, keeping their order."""
    return [annotate(source) for source in sources]
