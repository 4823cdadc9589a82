"""Turns raw user input into a declarative, checkable claim."""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..models.claim import Claim

logger = logging.getLogger(__name__)

AUXILIARIES = (
    "is", "are", "was", "were", "do", "does", "did", "has", "have", "had",
    "can", "could", "will", "would", "should", "may", "might",
)
INTERROGATIVES = ("who", "what", "where", "when", "why", "how", "which")

_QUESTION_START = re.compile(
    r"^(?:%s)(?=\s)" % "|".join(INTERROGATIVES + AUXILIARIES),
    re.IGNORECASE,
)
_LEADING_FILLERS = re.compile(r"^(?:(?:um|uh|er|like|so)\b[\s,]*)+", re.IGNORECASE)
_INNER_FILLERS = re.compile(r"\s+(?:um|uh|er)\b,?(?=\s)", re.IGNORECASE)

# Words that open a noun phrase and belong to the subject of a yes/no question
_DETERMINERS = {
    "the", "a", "an", "this", "that", "these", "those", "my", "your", "his",
    "her", "its", "our", "their", "some", "all", "every", "most", "many",
}


@dataclass(frozen=True)
class _RewriteRule:
    """A question pattern and how to restate it declaratively."""

    name: str
    pattern: re.Pattern
    rewrite: Callable[[re.Match], Optional[str]]


def strip_fillers(text: str) -> str:
    """Remove speech-recognition filler words at the start of the input."""
    return _LEADING_FILLERS.sub("", text.strip()).strip()


def clean_input(text: str) -> str:
    """Clean a question for rewriting.

    - Remove leading and inner filler words
    - Drop trailing question marks
    - Normalize whitespace
    """
    text = strip_fillers(text)
    text = re.sub(r"\?+$", "", text)
    text = _INNER_FILLERS.sub("", text)
    return " ".join(text.split())


def is_question(text: str) -> bool:
    """Check whether the input is phrased as a question."""
    text = strip_fillers(text)
    if text.endswith("?"):
        return True
    return bool(_QUESTION_START.match(text))


def _split_subject(words: List[str]) -> int:
    """Return the number of leading words that form the subject."""
    index = 0
    if words[0].lower() in _DETERMINERS:
        index = 1
        if index < len(words) and words[index][:1].isupper():
            while index < len(words) and words[index][:1].isupper():
                index += 1
        else:
            index += 1
    elif words[0][:1].isupper():
        while index < len(words) and words[index][:1].isupper():
            index += 1
    else:
        index = 1
    return index


def _invert_yes_no(match: re.Match) -> Optional[str]:
    auxiliary = match.group(1).lower()
    words = match.group(2).split()
    split = _split_subject(words)
    if split >= len(words):
        return None
    subject = " ".join(words[:split])
    predicate = " ".join(words[split:])
    return f"{subject} {auxiliary} {predicate}"


_RULES: List[_RewriteRule] = [
    _RewriteRule(
        "truth_query",
        re.compile(r"^is\s+it\s+(?:true|correct|accurate)\s+(?:that\s+)?(.+)", re.IGNORECASE),
        lambda m: m.group(1),
    ),
    _RewriteRule(
        "yes_no",
        re.compile(r"^(%s)\s+(.+)" % "|".join(AUXILIARIES), re.IGNORECASE),
        _invert_yes_no,
    ),
    _RewriteRule(
        "what",
        re.compile(r"^what\s+(is|are)\s+(.+)", re.IGNORECASE),
        lambda m: f"{m.group(2)} {m.group(1).lower()} a specific thing or concept",
    ),
    _RewriteRule(
        "who",
        re.compile(r"^who\s+(is|was)\s+(.+)", re.IGNORECASE),
        lambda m: f"{m.group(2)} {m.group(1).lower()} a specific person",
    ),
    _RewriteRule(
        "where",
        re.compile(r"^where\s+(is|are)\s+(.+)", re.IGNORECASE),
        lambda m: f"{m.group(2)} {m.group(1).lower()} located in a specific place",
    ),
    _RewriteRule(
        "when",
        re.compile(r"^when\s+(did|was)\s+(.+)", re.IGNORECASE),
        lambda m: f"{m.group(2)} occurred at a specific time",
    ),
    _RewriteRule(
        "why",
        re.compile(r"^why\s+(.+)", re.IGNORECASE),
        lambda m: f"There is a specific reason why {m.group(1)}",
    ),
    _RewriteRule(
        "how",
        re.compile(r"^how\s+(.+)", re.IGNORECASE),
        lambda m: f"There is a specific method or process for {m.group(1)}",
    ),
    _RewriteRule(
        "which",
        re.compile(r"^which\s+(.+)", re.IGNORECASE),
        lambda m: f"There is a specific {m.group(1)} that can be identified",
    ),
]


def _as_sentence(text: str) -> str:
    text = text.strip()
    if not text:
        return text
    text = text[0].upper() + text[1:]
    if text[-1] not in ".!":
        text += "."
    return text


def normalize(raw_input: str) -> Claim:
    """Normalize raw input into a Claim.

    Declarative input passes through unchanged (outer whitespace trimmed).
    Questions are rewritten by the first matching rule, with a generic
    fallback when none applies.

    Args:
        raw_input: Input as typed or transcribed by the user

    Returns:
        Immutable claim
    """
    stripped = raw_input.strip()
    if not is_question(stripped):
        return Claim(raw_input=raw_input, normalized_statement=stripped)

    cleaned = clean_input(stripped)
    for rule in _RULES:
        match = rule.pattern.match(cleaned)
        if not match:
            continue
        statement = rule.rewrite(match)
        if not statement:
            continue
        logger.debug(f"🔁 Question rewritten by '{rule.name}' rule: {statement}")
        topic = match.group(match.lastindex).lower()
        return Claim(
            raw_input=raw_input,
            normalized_statement=_as_sentence(statement),
            was_question=True,
            implicit_claims=[
                f"The question assumes that '{cleaned.lower()}' is a meaningful inquiry.",
                f"There exists factual information regarding {topic}.",
            ],
        )

    logger.debug(f"🔁 No rewrite rule matched, using fallback for: {cleaned}")
    return Claim(
        raw_input=raw_input,
        normalized_statement=f"The answer to '{cleaned}' is factually verifiable.",
        was_question=True,
        implicit_claims=[
            f"The question '{cleaned}' has a factual answer.",
            "There exists consensus information on this topic.",
        ],
    )
