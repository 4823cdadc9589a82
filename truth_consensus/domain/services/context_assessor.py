"""Credibility and risk assessment from caller-supplied claim metadata."""

from typing import List, Optional, Tuple

from ..models.claim import ClaimContext
from ..models.verdict import ContextAssessment, VerificationLevel

NEUTRAL_CREDIBILITY = 0.5

_SOURCE_TYPES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("social_media", ("twitter", "facebook", "instagram", "tiktok")),
    ("news_interview", ("interview", "cnn", "fox", "bbc")),
    ("speech", ("speech", "rally", "conference")),
    ("document", ("document", "report", "filing")),
)

_SOURCE_CREDIBILITY: Tuple[Tuple[float, Tuple[str, ...]], ...] = (
    (0.9, ("reuters", "ap news", "bbc")),
    (0.7, ("cnn", "nbc", "abc")),
    (0.6, ("interview", "press conference")),
    (0.3, ("social media", "twitter", "facebook")),
)

_SOURCE_BIAS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("left", ("msnbc", "cnn", "huffpost")),
    ("right", ("fox news", "newsmax", "daily wire")),
    ("center", ("reuters", "ap news", "bbc")),
)

_SPEAKER_TITLES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Politician", ("president", "senator", "congressman")),
    ("Business Executive", ("ceo", "founder")),
)


def _first_match(name: str, table, default):
    lowered = name.lower()
    for value, needles in table:
        if any(needle in lowered for needle in needles):
            return value
    return default


def source_type(name: str) -> str:
    return _first_match(name, _SOURCE_TYPES, "unknown")


def source_credibility(name: str) -> float:
    return _first_match(name, _SOURCE_CREDIBILITY, NEUTRAL_CREDIBILITY)


def source_bias(name: str) -> str:
    return _first_match(name, _SOURCE_BIAS, "unknown")


def speaker_title(name: str) -> Optional[str]:
    return _first_match(name, _SPEAKER_TITLES, None)


def _contains(value: Optional[str], *needles: str) -> bool:
    return bool(value) and any(needle in value.lower() for needle in needles)


def recommend_level(average_credibility: float, risk_count: int) -> VerificationLevel:
    """Scrutiny level from average credibility and the number of risk factors."""
    if average_credibility > 0.8 and risk_count == 0:
        return VerificationLevel.LOW
    if average_credibility < 0.3 or risk_count >= 3:
        return VerificationLevel.CRITICAL
    if average_credibility < 0.5 or risk_count >= 2:
        return VerificationLevel.HIGH
    return VerificationLevel.MEDIUM


def assess(context: ClaimContext) -> ContextAssessment:
    """Assess who said a claim, where, and under which circumstances.

    Speakers have no stored track record here, so their credibility stays
    neutral; only their title is detected.
    """
    risk_factors: List[str] = []
    credibility = NEUTRAL_CREDIBILITY
    kind = bias = None

    if context.source:
        credibility = source_credibility(context.source)
        kind = source_type(context.source)
        bias = source_bias(context.source)
        if kind == "social_media":
            risk_factors.append("Unverified social media source")
        if bias in ("left", "right"):
            risk_factors.append(f"Source has known {bias}-leaning bias")

    if _contains(context.political_context, "election"):
        risk_factors.append("Statement made during election period - higher misinformation risk")
    if _contains(context.audience, "rally", "partisan"):
        risk_factors.append("Statement made to partisan audience - potential bias amplification")
    if _contains(context.location, "social media", "twitter", "facebook"):
        risk_factors.append("Social media context - rapid spread potential")

    average = (NEUTRAL_CREDIBILITY + credibility) / 2

    return ContextAssessment(
        speaker_credibility=NEUTRAL_CREDIBILITY,
        source_credibility=credibility,
        speaker_title=speaker_title(context.speaker) if context.speaker else None,
        source_type=kind,
        source_bias=bias,
        risk_factors=risk_factors,
        recommended_verification_level=recommend_level(average, len(risk_factors)),
    )
