"""Combines weighted votes, fusion and risk signals into the final report."""

import logging
from typing import Iterable, Optional, Sequence

from ..models.claim import Claim
from ..models.domain import Domain, ordered
from ..models.provider import ProviderResult, WeightVector
from ..models.verdict import (
    ContextAssessment,
    FusionOutcome,
    ProviderBreakdown,
    RiskSignals,
    VerdictReport,
)
from .consensus_fusion import by_weight

logger = logging.getLogger(__name__)


def weighted_vote(weights: WeightVector, results: Sequence[ProviderResult]) -> bool:
    """Weighted truth vote over succeeded providers.

    Failed providers are absent from both sums; their weight is not handed
    to the survivors. A ratio of exactly 0.5 resolves to True.
    """
    succeeded = [result for result in results if result.succeeded]
    total = sum(weights.get(result.provider_id) for result in succeeded)
    if total <= 0:
        return False
    true_weight = sum(weights.get(result.provider_id) for result in succeeded if result.verdict)
    return true_weight / total >= 0.5


def mean_confidence(results: Sequence[ProviderResult]) -> float:
    """Arithmetic mean of the succeeded providers' confidence."""
    confidences = [result.confidence for result in results if result.succeeded]
    if not confidences:
        return 0.0
    return sum(confidences) / len(confidences)


def _explanation(fusion: FusionOutcome, claim: Optional[Claim]) -> str:
    if claim is None or not claim.was_question:
        return fusion.merged_explanation
    return (
        f"Original question: \"{claim.raw_input.strip()}\"\n"
        f"Converted statement: \"{claim.normalized_statement}\"\n\n"
        f"{fusion.merged_explanation}"
    )


def compose(
    weights: WeightVector,
    results: Sequence[ProviderResult],
    fusion: FusionOutcome,
    risk: RiskSignals,
    claim: Optional[Claim] = None,
    domains: Iterable[Domain] = (),
    weight_explanation: str = "",
    context_assessment: Optional[ContextAssessment] = None,
) -> VerdictReport:
    """Build the verdict report.

    Confidence is reported as the providers stated it; risk signals are
    exposed separately rather than discounted into it.
    """
    survivors = by_weight([result for result in results if result.succeeded], weights)
    failed = [result.provider_id for result in results if not result.succeeded]

    breakdown = [
        ProviderBreakdown(
            provider_id=result.provider_id,
            verdict=result.verdict,
            normalized_confidence=result.confidence,
            weight=weights.get(result.provider_id),
            reliability_score=risk.reliability_scores.get(result.provider_id),
        )
        for result in survivors
    ]

    is_true = weighted_vote(weights, survivors)
    confidence = mean_confidence(survivors)
    if not survivors:
        logger.warning("⚠️ All providers failed; returning a zero-confidence report")
    else:
        logger.info(
            f"⚖️ Verdict {'TRUE' if is_true else 'FALSE'} with confidence {confidence:.2f} "
            f"from {len(survivors)} providers ({len(failed)} failed)"
        )

    return VerdictReport(
        is_true=is_true,
        confidence=confidence,
        explanation=_explanation(fusion, claim),
        context=fusion.merged_context,
        sources=fusion.ranked_sources,
        per_provider_breakdown=breakdown,
        consensus_strength=fusion.consensus_strength,
        manipulation_score=risk.manipulation_score,
        contradiction_index=risk.contradiction_index,
        domains=ordered(domains),
        weights=weights,
        claim=claim,
        failed_providers=failed,
        weight_explanation=weight_explanation,
        risk_analysis=risk.analysis,
        context_assessment=context_assessment,
    )
