"""Domain models for verification providers and their results."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from .domain import Domain

DEFAULT_DOMAIN_STRENGTH = 0.7


class SubscriptionTier(str, Enum):
    """Caller plan that decides how many providers are consulted."""

    BASIC = "basic"
    STANDARD = "standard"
    PREMIUM = "premium"

    @property
    def provider_quota(self) -> int:
        """Number of providers this tier is entitled to."""
        return {
            SubscriptionTier.BASIC: 2,
            SubscriptionTier.STANDARD: 4,
            SubscriptionTier.PREMIUM: 6,
        }[self]


class Source(BaseModel):
    """A reference cited by a provider."""

    name: str = Field(..., description="Name of the source")
    url: str = Field(..., description="URL of the source, used for deduplication")
    category: Optional[str] = Field(None, description="Kind of publisher, e.g. 'Academic'")
    trust_score: Optional[float] = Field(None, description="Trust in the publisher (0-1)")

    class Config:
        """Pydantic model configuration."""
        frozen = True


class ProviderDescriptor(BaseModel):
    """Static description of a provider: who it is and what it is good at."""

    id: str = Field(..., description="Unique provider identifier")
    per_domain_strength: Dict[Domain, float] = Field(
        default_factory=dict,
        description="Strength score (0-1) per knowledge domain",
    )
    is_available: bool = Field(default=False, description="Whether the provider can be used right now")
    display_name: Optional[str] = Field(None, description="Name shown in explanations")

    class Config:
        """Pydantic model configuration."""
        frozen = True

    def strength_for(self, domain: Domain) -> float:
        """Strength in one domain, falling back to a neutral default."""
        return self.per_domain_strength.get(domain, DEFAULT_DOMAIN_STRENGTH)

    @property
    def name(self) -> str:
        return self.display_name or self.id


class ProviderResult(BaseModel):
    """Outcome of one provider invocation, successful or not."""

    provider_id: str = Field(..., description="Provider that produced the result")
    verdict: bool = Field(default=False, description="Whether the provider judged the claim true")
    confidence: float = Field(default=0.0, description="Provider confidence (0-1)")
    explanation: str = Field(default="", description="Provider reasoning")
    context: str = Field(default="", description="Historical or background context")
    sources: List[Source] = Field(default_factory=list, description="Sources the provider cited")
    succeeded: bool = Field(default=True, description="False when the provider failed")
    error: Optional[str] = Field(None, description="Failure description")
    latency_seconds: Optional[float] = Field(None, description="Wall time spent on the call")

    class Config:
        """Pydantic model configuration."""
        frozen = True

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, value) -> float:
        if value is None:
            return 0.0
        return min(1.0, max(0.0, float(value)))

    @classmethod
    def failed(cls, provider_id: str, error: str, latency_seconds: Optional[float] = None) -> "ProviderResult":
        """Build a failed result for a provider."""
        return cls(
            provider_id=provider_id,
            succeeded=False,
            error=error,
            latency_seconds=latency_seconds,
        )


class WeightVector(BaseModel):
    """Per-provider trust distribution for one claim.

    Only selected providers appear, ordered from highest to lowest weight.
    Weights sum to 1.0, or the vector is empty when nothing was selected.
    """

    weights: Dict[str, float] = Field(default_factory=dict)

    class Config:
        """Pydantic model configuration."""
        frozen = True

    def get(self, provider_id: str) -> float:
        return self.weights.get(provider_id, 0.0)

    @property
    def provider_ids(self) -> List[str]:
        return list(self.weights)

    @property
    def total(self) -> float:
        return sum(self.weights.values())

    def __len__(self) -> int:
        return len(self.weights)

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self.weights
