"""Google Fact Check Tools implementation of the verifier interface.

Rather than reasoning about the statement, this verifier looks up reviews
already published by professional fact-checking organizations.
"""

from typing import Any, Optional

from ...domain.errors import ProviderFailure
from ...domain.models.provider import ProviderResult, Source
from .base import BaseVerifierAdapter, VerifierConfig

# Negative markers are checked first: "incorrect" contains "correct"
FALSE_RATINGS = ("false", "incorrect", "inaccurate", "untrue", "misleading", "pants on fire")
TRUE_RATINGS = ("true", "correct", "accurate", "verified")
CLEAR_RATINGS = ("true", "false", "correct", "incorrect")
HIGH_CREDIBILITY_PUBLISHERS = ("snopes", "politifact", "factcheck.org", "reuters", "ap news")

BASE_CONFIDENCE = 0.7
MAX_CONFIDENCE = 0.95


def interpret_rating(rating: str) -> Optional[bool]:
    """Map a textual fact-check rating to a verdict, or None when mixed."""
    rating = rating.lower()
    if any(marker in rating for marker in FALSE_RATINGS):
        return False
    if any(marker in rating for marker in TRUE_RATINGS):
        return True
    return None


def rating_confidence(publisher: str, rating: str) -> float:
    """Confidence in a review based on its publisher and how clear its rating is."""
    publisher = publisher.lower()
    rating = rating.lower()
    confidence = BASE_CONFIDENCE
    if any(name in publisher for name in HIGH_CREDIBILITY_PUBLISHERS):
        confidence += 0.2
    if any(clear in rating for clear in CLEAR_RATINGS):
        confidence += 0.1
    return min(confidence, MAX_CONFIDENCE)


class GoogleFactCheckAdapter(BaseVerifierAdapter):
    """Verifier backed by the Google Fact Check Tools ``claims:search`` API."""

    def __init__(self, config: Optional[VerifierConfig] = None, **overrides: Any):
        super().__init__(
            "google_fact_check",
            config or VerifierConfig(base_url="https://factchecktools.googleapis.com"),
            **overrides,
        )

    async def _query(self, statement: str) -> ProviderResult:
        response = await self._client.get(
            "/v1alpha1/claims:search",
            params={"query": statement, "key": self._config.api_key},
        )
        response.raise_for_status()

        claims = response.json().get("claims") or []
        if not claims:
            raise ProviderFailure(self._id, "no published fact-checks found for this claim")

        claim = claims[0]
        reviews = claim.get("claimReview") or []
        if not reviews:
            raise ProviderFailure(self._id, "matched claim carries no review")

        review = reviews[0]
        rating = review.get("textualRating") or ""
        verdict = interpret_rating(rating)
        if verdict is None:
            raise ProviderFailure(self._id, f"rating '{rating}' is neither true nor false")

        publisher = (review.get("publisher") or {}).get("name") or ""
        url = review.get("url") or ""

        return ProviderResult(
            provider_id=self._id,
            verdict=verdict,
            confidence=rating_confidence(publisher, rating),
            explanation=f'Professional fact-check found: "{rating}" - {claim.get("text") or statement}',
            context=(
                f"Fact-checked by {publisher or 'a professional organization'} "
                f"on {review.get('reviewDate') or 'an unknown date'}"
            ),
            sources=[Source(name=publisher or "Fact-checking organization", url=url)] if url else [],
        )
