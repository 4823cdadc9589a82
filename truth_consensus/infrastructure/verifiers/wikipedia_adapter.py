"""Wikipedia implementation of the verifier interface."""

import asyncio
import logging
import re
from typing import Any, Dict, List, Optional, Set

import wikipediaapi
from cachetools import TTLCache
from pydantic import BaseModel, Field

from ...domain.errors import ProviderFailure
from ...domain.models.provider import ProviderResult, Source
from .base import BaseVerifierAdapter

logger = logging.getLogger(__name__)

NEGATION_PATTERNS = (
    "not",
    "never",
    "no",
    "false",
    "incorrect",
    "wrong",
    "isn't",
    "wasn't",
    "aren't",
    "weren't",
    "doesn't",
    "didn't",
    "cannot",
    "can't",
    "won't",
    "wouldn't",
)

_STOPWORDS = {
    "the", "and", "that", "this", "with", "from", "have", "has", "was", "were",
    "are", "is", "been", "will", "would", "could", "should", "there", "their",
    "about", "into", "than", "then", "they", "them", "what", "which", "who",
    "did", "does", "do",
}
_CAPITALIZED_RUN = re.compile(r"\b[A-Z][\w'-]*(?:\s+(?:of\s+|the\s+)?[A-Z][\w'-]*)*")
_SENTENCE_END = re.compile(r"(?<=[.!?])\s+")


def _mentions(words: Set[str], term: str) -> bool:
    return any(word == term or (len(term) > 3 and word.startswith(term)) for word in words)


class WikipediaVerifierConfig(BaseModel):
    """Configuration for Wikipedia adapter."""

    user_agent: str = Field(
        default="TruthConsensus/1.0",
        description="User agent for Wikipedia API"
    )
    language: str = Field(default="en", description="Wikipedia language edition")
    cache_ttl: int = Field(default=3600, description="Cache TTL in seconds")
    cache_maxsize: int = Field(default=1000, description="Maximum cache size")
    max_articles: int = Field(default=5, description="Maximum articles consulted per statement")
    min_confidence: float = Field(default=0.5, description="Minimum relevance threshold")


class WikipediaAdapter(BaseVerifierAdapter):
    """Wikipedia implementation of the verifier interface.

    Looks up articles for the subjects a statement mentions, scores how
    well each summary covers the statement, and judges it false when an
    article negates it or true when a sentence backs it. Articles that
    only share the topic leave the provider without an answer. Needs no
    credentials.
    """

    requires_api_key = False

    def __init__(self, config: Optional[WikipediaVerifierConfig] = None, **overrides: Any):
        """Initialize the adapter.

        Args:
            config: Adapter configuration
            **overrides: Config fields to replace, e.g. ``language``
        """
        super().__init__("wikipedia")
        config = config or WikipediaVerifierConfig()
        self._wiki_config = config.model_copy(update=overrides) if overrides else config
        self._wiki = None
        self._cache = TTLCache(
            maxsize=self._wiki_config.cache_maxsize,
            ttl=self._wiki_config.cache_ttl
        )

    async def initialize(self) -> None:
        """Initialize the Wikipedia API client."""
        try:
            self._wiki = wikipediaapi.Wikipedia(
                user_agent=self._wiki_config.user_agent,
                language=self._wiki_config.language,
            )
        except Exception as e:
            self._wiki = None
            raise ConnectionError(f"Failed to initialize Wikipedia provider: {e}")

    def _is_ready(self) -> bool:
        return self._wiki is not None

    async def _query(self, statement: str) -> ProviderResult:
        evidence: List[Dict[str, Any]] = []
        contradictions: List[str] = []

        for title in self._candidate_titles(statement):
            article = await self._fetch_article(title)
            if article is None or any(e["title"] == article["title"] for e in evidence):
                continue

            relevance = self._analyze_relevance(article["summary"], statement)
            if relevance > self._wiki_config.min_confidence:
                evidence.append({
                    **article,
                    "relevance": relevance,
                    "supports": self._find_support(article["summary"], statement),
                })
                if self._find_contradictions(article["summary"], statement):
                    contradictions.append(article["title"])

        if not evidence:
            raise ProviderFailure(self._id, "no relevant Wikipedia articles found")

        if contradictions:
            confidence = sum(e["relevance"] for e in evidence) / len(evidence)
            confidence *= 1 - 0.5 * len(contradictions) / len(evidence)
            best = max(evidence, key=lambda e: e["relevance"])
        else:
            # Topical articles alone do not back the statement
            supporting = [e for e in evidence if e["supports"]]
            if not supporting:
                raise ProviderFailure(
                    self._id,
                    "no conclusive evidence: related articles neither support nor contradict the statement",
                )
            confidence = sum(e["relevance"] for e in supporting) / len(supporting)
            best = max(supporting, key=lambda e: e["relevance"])

        explanation = f'Wikipedia article "{best["title"]}" states: {best["summary"][:600]}'
        if contradictions:
            explanation += f" The articles {', '.join(contradictions)} appear to contradict the statement."

        return ProviderResult(
            provider_id=self._id,
            verdict=not contradictions,
            confidence=confidence,
            explanation=explanation,
            context=best["summary"][:1000],
            sources=[Source(name=f"Wikipedia: {e['title']}", url=e["url"]) for e in evidence],
        )

    def _candidate_titles(self, statement: str) -> List[str]:
        """Article titles worth looking up for a statement.

        Capitalized runs (named subjects) come first, then the longer
        content words.
        """
        candidates = []
        for run in _CAPITALIZED_RUN.findall(statement):
            run = re.sub(r"^(?:The|A|An)\s+", "", run.strip())
            if run and run.lower() not in _STOPWORDS:
                candidates.append(run)

        for word in re.findall(r"[A-Za-z][\w'-]+", statement):
            if len(word) > 3 and word.lower() not in _STOPWORDS:
                candidates.append(word.capitalize())

        unique = list(dict.fromkeys(candidates))
        return unique[:self._wiki_config.max_articles]

    async def _fetch_article(self, title: str) -> Optional[Dict[str, str]]:
        cache_key = f"article:{self._wiki_config.language}:{title}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        # wikipediaapi is synchronous
        article = await asyncio.to_thread(self._load_page, title)
        self._cache[cache_key] = article
        return article

    def _load_page(self, title: str) -> Optional[Dict[str, str]]:
        page = self._wiki.page(title)
        if not page.exists():
            return None
        return {"title": page.title, "summary": page.summary, "url": page.fullurl}

    def _analyze_relevance(self, text: str, statement: str) -> float:
        """Analyze relevance of text to statement.

        Share of the statement's terms found in the text, boosted when the
        statement appears verbatim.
        """
        text = text.lower()
        statement = statement.lower().rstrip(".")

        statement_terms = set(re.findall(r"\w+", statement)) - _STOPWORDS
        if not statement_terms:
            return 0.0

        text_terms = set(re.findall(r"\w+", text))
        score = len(statement_terms & text_terms) / len(statement_terms)

        if statement in text:
            score = min(1.0, score * 1.5)

        return score

    def _find_support(self, text: str, statement: str) -> bool:
        """Check whether one sentence of the text backs the statement.

        Every named subject or number of the statement must appear in the
        same sentence, together with at least half of its other content
        words. Words match on prefix, so "purr" matches "purring".
        """
        key_terms, other_terms = set(), set()
        for token in re.findall(r"\w+", statement):
            term = token.lower()
            if term in _STOPWORDS or len(term) < 3:
                continue
            if token[0].isupper() or token.isdigit():
                key_terms.add(term)
            else:
                other_terms.add(term)

        if not key_terms:
            key_terms, other_terms = other_terms, set()
        if not key_terms:
            return False

        for sentence in _SENTENCE_END.split(text):
            words = set(re.findall(r"\w+", sentence.lower()))
            if not all(_mentions(words, term) for term in key_terms):
                continue
            if sum(1 for term in other_terms if _mentions(words, term)) >= len(other_terms) // 2:
                return True

        return False

    def _find_contradictions(self, text: str, statement: str) -> bool:
        """Find potential contradictions between text and statement.

        Looks for the statement negated directly, or quoted as a
        contrasting view.
        """
        text = text.lower()
        statement = statement.lower().rstrip(".")

        for pattern in NEGATION_PATTERNS:
            if f"{pattern} {statement}" in text or f"{statement} {pattern}" in text:
                return True

        if "contrary to" in text or "opposed to" in text or "unlike" in text:
            if statement in text:
                return True

        return False

    async def shutdown(self) -> None:
        """Shutdown the provider and clean up resources."""
        self._wiki = None
