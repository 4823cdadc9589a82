"""Domain models for fused verdicts and the signals derived from them."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .claim import Claim
from .domain import Domain
from .provider import Source, WeightVector


class VerificationLevel(str, Enum):
    """How much scrutiny a claim deserves given where it came from."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class FusionOutcome(BaseModel):
    """Merged view of all surviving provider results."""

    consensus_strength: float = Field(..., description="Share of survivors agreeing with the majority (0-1)")
    merged_explanation: str = Field(..., description="Per-provider reasoning plus a conclusion")
    merged_context: str = Field(..., description="Most detailed context among survivors")
    ranked_sources: List[Source] = Field(default_factory=list, description="Deduplicated sources")

    class Config:
        """Pydantic model configuration."""
        frozen = True


class RiskSignals(BaseModel):
    """Manipulation and disagreement signals for one claim."""

    manipulation_score: float = Field(..., description="Rhetorical manipulation estimate (0-1)")
    contradiction_index: float = Field(..., description="Disagreement among providers (0-1)")
    matched_markers: List[str] = Field(default_factory=list, description="Manipulation markers found")
    reliability_scores: Dict[str, float] = Field(
        default_factory=dict,
        description="Secondary per-provider reliability estimate",
    )
    analysis: str = Field(default="", description="Short misinformation assessment")

    class Config:
        """Pydantic model configuration."""
        frozen = True


class ContextAssessment(BaseModel):
    """Credibility and risk derived from caller-supplied claim metadata."""

    speaker_credibility: float = 0.5
    source_credibility: float = 0.5
    speaker_title: Optional[str] = None
    source_type: Optional[str] = None
    source_bias: Optional[str] = None
    risk_factors: List[str] = Field(default_factory=list)
    recommended_verification_level: VerificationLevel = VerificationLevel.MEDIUM

    class Config:
        """Pydantic model configuration."""
        frozen = True


class ProviderBreakdown(BaseModel):
    """One provider's contribution to the final verdict."""

    provider_id: str
    verdict: bool
    normalized_confidence: float
    weight: float = 0.0
    reliability_score: Optional[float] = None

    class Config:
        """Pydantic model configuration."""
        frozen = True


class VerdictReport(BaseModel):
    """Final fused verdict returned to the caller."""

    is_true: bool = Field(..., description="Weighted-vote verdict")
    confidence: float = Field(..., description="Mean confidence of surviving providers")
    explanation: str = Field(..., description="Merged explanation")
    context: str = Field(..., description="Merged historical context")
    sources: List[Source] = Field(default_factory=list)
    per_provider_breakdown: List[ProviderBreakdown] = Field(default_factory=list)
    consensus_strength: float = 0.0
    manipulation_score: float = 0.0
    contradiction_index: float = 0.0
    domains: List[Domain] = Field(default_factory=list)
    weights: WeightVector = Field(default_factory=WeightVector)

    claim: Optional[Claim] = None
    failed_providers: List[str] = Field(default_factory=list)
    weight_explanation: str = ""
    risk_analysis: str = ""
    context_assessment: Optional[ContextAssessment] = None

    class Config:
        """Pydantic model configuration."""
        frozen = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert the report to a plain dictionary for callers."""
        return self.model_dump(mode="json")
