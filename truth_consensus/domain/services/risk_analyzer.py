"""Manipulation and contradiction risk scoring."""

import logging
import re
from typing import Dict, List, Sequence, Tuple

from ..models.provider import ProviderResult
from ..models.verdict import RiskSignals

logger = logging.getLogger(__name__)

MANIPULATION_MARKERS: Tuple[str, ...] = (
    # absolutes and generalizations
    "always", "never", "everyone", "everybody", "nobody", "no one",
    "completely", "totally", "absolutely", "definitely", "undeniable",
    "undeniably", "guaranteed", "proven", "100%",
    # appeals to hidden truth
    "secret", "cover-up", "they don't want you to know", "wake up",
    "mainstream media won't", "do your own research",
    # borrowed authority
    "experts agree", "experts say", "studies show", "scientists admit",
    "everyone knows",
    # emotional charge
    "shocking", "alarming", "outrageous", "terrifying", "unbelievable",
    "horrific", "catastrophic",
)

RELIABILITY_BASE = 0.7
RELIABILITY_AGREEMENT_BONUS = 0.2
RELIABILITY_SOURCE_BONUS_PER_SOURCE = 0.025
RELIABILITY_SOURCE_BONUS_CAP = 0.1


def _marker_pattern(marker: str) -> re.Pattern:
    escaped = re.escape(marker).replace("'", "['’]?")
    return re.compile(rf"(?<!\w){escaped}(?!\w)", re.IGNORECASE)


_MARKER_PATTERNS: List[Tuple[str, re.Pattern]] = [
    (marker, _marker_pattern(marker)) for marker in MANIPULATION_MARKERS
]


def find_markers(statement: str) -> List[str]:
    """Distinct manipulation markers present in the statement."""
    return [marker for marker, pattern in _MARKER_PATTERNS if pattern.search(statement)]


def manipulation_score(statement: str, saturation: int = 5) -> float:
    """Score rhetorical manipulation as the share of ``saturation`` markers found."""
    return min(1.0, len(find_markers(statement)) / saturation)


def contradiction_index(results: Sequence[ProviderResult]) -> float:
    """Disagreement among succeeded providers.

    0 when everyone agrees (or nobody answered), 1 at an even split.
    """
    succeeded = [result for result in results if result.succeeded]
    if not succeeded:
        return 0.0
    true_count = sum(1 for result in succeeded if result.verdict)
    false_count = len(succeeded) - true_count
    return 2 * min(true_count, false_count) / len(succeeded)


def reliability_scores(results: Sequence[ProviderResult]) -> Dict[str, float]:
    """Secondary reliability estimate per succeeded provider.

    Base 0.7, up to +0.2 for agreement with the other survivors and up to
    +0.1 for the number of cited sources. A lone survivor gets no
    agreement bonus.
    """
    succeeded = [result for result in results if result.succeeded]
    scores = {}
    for result in succeeded:
        others = [other for other in succeeded if other.provider_id != result.provider_id]
        agreement = (
            sum(1 for other in others if other.verdict == result.verdict) / len(others)
            if others
            else 0.0
        )
        source_bonus = min(
            RELIABILITY_SOURCE_BONUS_CAP,
            RELIABILITY_SOURCE_BONUS_PER_SOURCE * len(result.sources),
        )
        scores[result.provider_id] = round(
            RELIABILITY_BASE + RELIABILITY_AGREEMENT_BONUS * agreement + source_bonus, 6
        )
    return scores


def describe_risk(
    manipulation: float,
    contradiction: float,
    results: Sequence[ProviderResult],
) -> str:
    """One-sentence misinformation assessment."""
    succeeded = [result for result in results if result.succeeded]
    if manipulation > 0.7:
        return (
            "The statement contains several linguistic markers often associated with "
            "misinformation, such as absolute or emotionally charged claims, and should be "
            "approached with caution."
        )
    if contradiction > 0.5:
        return (
            "Verification providers disagree substantially about this statement, which "
            "suggests the topic is complex or contested."
        )
    if succeeded and all(not result.verdict for result in succeeded):
        return (
            "Every responding provider independently judged this statement false, which "
            "raises the likelihood that it is misinformation."
        )
    if succeeded and all(result.verdict for result in succeeded):
        return (
            "Every responding provider independently verified this statement; it shows no "
            "sign of being misinformation."
        )
    if not succeeded:
        return "No provider answered, so only the wording of the statement could be assessed."
    return (
        "The statement shows some indicators of potential misinformation but the "
        "assessment remains inconclusive; consult the listed sources directly."
    )


def analyze(
    raw_statement: str,
    results: Sequence[ProviderResult],
    saturation: int = 5,
) -> RiskSignals:
    """Score the raw input for manipulation and the providers for disagreement.

    Args:
        raw_statement: Original user input; its framing is part of the signal
        results: Fan-out results, failed ones included
        saturation: Marker count at which the manipulation score reaches 1.0

    Returns:
        Risk signals for the claim
    """
    markers = find_markers(raw_statement)
    manipulation = min(1.0, len(markers) / saturation)
    contradiction = contradiction_index(results)
    if markers:
        logger.info(f"🚩 Manipulation markers found: {', '.join(markers)}")

    return RiskSignals(
        manipulation_score=manipulation,
        contradiction_index=contradiction,
        matched_markers=markers,
        reliability_scores=reliability_scores(results),
        analysis=describe_risk(manipulation, contradiction, results),
    )
