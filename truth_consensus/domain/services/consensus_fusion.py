"""Merges surviving provider results into one explanation, context and source list."""

import logging
from typing import Dict, List, Mapping, Optional, Sequence

from ..models.config import EngineConfig
from ..models.provider import ProviderResult, Source, WeightVector
from ..models.verdict import FusionOutcome, RiskSignals
from . import source_trust

logger = logging.getLogger(__name__)

NO_PROVIDER_EXPLANATION = (
    "No verification provider could be consulted for this statement, so no verdict "
    "could be established."
)
NO_CONTEXT = "No historical context available."

_CONCLUSIONS: Dict[tuple, str] = {
    (True, False): (
        "Conclusion: the providers broadly agree that the statement is {verdict}, and its "
        "wording shows no notable signs of manipulation."
    ),
    (True, True): (
        "Conclusion: the providers broadly agree that the statement is {verdict}, but its "
        "wording carries warning signs, so read it with care."
    ),
    (False, False): (
        "Conclusion: the providers are divided on this statement; the evidence is mixed "
        "or the topic is contested."
    ),
    (False, True): (
        "Conclusion: the providers are divided and the statement carries manipulation or "
        "contradiction warning signs; treat it with strong caution."
    ),
}


def _succeeded(results: Sequence[ProviderResult]) -> List[ProviderResult]:
    return [result for result in results if result.succeeded]


def by_weight(results: Sequence[ProviderResult], weights: WeightVector) -> List[ProviderResult]:
    """Order results by descending weight, ties by provider id.

    The order only depends on the results' content, never on arrival order.
    """
    return sorted(results, key=lambda result: (-weights.get(result.provider_id), result.provider_id))


def consensus_strength(results: Sequence[ProviderResult]) -> float:
    """Share of succeeded results that agree with the unweighted majority."""
    succeeded = _succeeded(results)
    if not succeeded:
        return 0.0
    true_count = sum(1 for result in succeeded if result.verdict)
    return max(true_count, len(succeeded) - true_count) / len(succeeded)


def majority_verdict(results: Sequence[ProviderResult]) -> bool:
    """Unweighted majority verdict among succeeded results (True on a tie)."""
    succeeded = _succeeded(results)
    true_count = sum(1 for result in succeeded if result.verdict)
    return true_count >= len(succeeded) - true_count


def is_high_risk(risk: Optional[RiskSignals], config: EngineConfig) -> bool:
    if risk is None:
        return False
    return (
        risk.manipulation_score >= config.high_manipulation_threshold
        or risk.contradiction_index > config.high_contradiction_threshold
    )


def conclusion(
    results: Sequence[ProviderResult],
    risk: Optional[RiskSignals] = None,
    config: Optional[EngineConfig] = None,
) -> str:
    """One-line conclusion picked from consensus strength and risk level."""
    config = config or EngineConfig()
    strong = consensus_strength(results) > config.strong_consensus_threshold
    template = _CONCLUSIONS[(strong, is_high_risk(risk, config))]
    return template.format(verdict="TRUE" if majority_verdict(results) else "FALSE")


def merge_context(results: Sequence[ProviderResult], min_length: int = 20) -> str:
    """Longest non-trivial context among the results."""
    contexts = [
        result.context.strip()
        for result in results
        if result.context and len(result.context.strip()) > min_length
    ]
    if not contexts:
        return NO_CONTEXT
    # max() keeps the first of equally long contexts
    return max(contexts, key=len)


def rank_sources(ordered_results: Sequence[ProviderResult], limit: int = 5) -> List[Source]:
    """Deduplicate sources by URL, first-seen in provider order, capped at ``limit``."""
    seen = set()
    ranked = []
    for result in ordered_results:
        for source in result.sources:
            url = source.url.strip()
            if not url or url in seen:
                continue
            seen.add(url)
            ranked.append(source)
            if len(ranked) >= limit:
                return ranked
    return ranked


def fuse(
    statement: str,
    results: Sequence[ProviderResult],
    weights: Optional[WeightVector] = None,
    risk: Optional[RiskSignals] = None,
    config: Optional[EngineConfig] = None,
    names: Optional[Mapping[str, str]] = None,
) -> FusionOutcome:
    """Fuse the surviving provider results.

    Args:
        statement: Statement that was verified
        results: Fan-out results; failed ones are ignored
        weights: Weight vector used to order providers for presentation
        risk: Risk signals selecting the conclusion wording
        config: Engine configuration
        names: Display names by provider id; ids are shown when missing

    Returns:
        Fusion outcome
    """
    config = config or EngineConfig()
    weights = weights if weights is not None else WeightVector()
    names = names or {}
    survivors = by_weight(_succeeded(results), weights)

    if not survivors:
        logger.warning("⚠️ No surviving provider results to fuse")
        return FusionOutcome(
            consensus_strength=0.0,
            merged_explanation=NO_PROVIDER_EXPLANATION,
            merged_context=NO_CONTEXT,
            ranked_sources=[],
        )

    paragraphs = [
        f"{names.get(result.provider_id, result.provider_id)}: "
        f"{result.explanation.strip() or 'No explanation provided.'}"
        for result in survivors
    ]
    merged_explanation = "\n\n".join(
        [f"Analysis of \"{statement}\" from {len(survivors)} verification providers:"]
        + paragraphs
        + [conclusion(survivors, risk, config)]
    )

    strength = consensus_strength(survivors)
    logger.info(f"🤝 Consensus strength {strength:.2f} across {len(survivors)} providers")

    return FusionOutcome(
        consensus_strength=strength,
        merged_explanation=merged_explanation,
        merged_context=merge_context(survivors, config.min_context_length),
        ranked_sources=source_trust.annotate_all(rank_sources(survivors, config.max_sources)),
    )
