"""Anthropic Claude implementation of the verifier interface."""

from typing import Any, Dict, Optional

from ...domain.errors import ResponseParseError
from ...domain.models.provider import ProviderResult
from .base import (
    BaseVerifierAdapter,
    STRUCTURED_PROMPT,
    VerifierConfig,
    parse_structured_response,
    user_prompt,
)

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicAdapter(BaseVerifierAdapter):
    """Verifier backed by the Anthropic Messages API."""

    def __init__(self, config: Optional[VerifierConfig] = None, **overrides: Any):
        super().__init__(
            "claude",
            config or VerifierConfig(
                base_url="https://api.anthropic.com",
                model="claude-3-5-sonnet-latest",
            ),
            **overrides,
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self._config.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "Content-Type": "application/json",
        }

    async def _query(self, statement: str) -> ProviderResult:
        response = await self._client.post(
            "/v1/messages",
            json={
                "model": self._config.model,
                "system": STRUCTURED_PROMPT,
                "messages": [{"role": "user", "content": user_prompt(statement)}],
                "temperature": self._config.temperature,
                "max_tokens": self._config.max_tokens,
            },
        )
        response.raise_for_status()

        blocks = response.json().get("content") or []
        text = next((block.get("text") for block in blocks if block.get("type") == "text"), None)
        if not text:
            raise ResponseParseError(self._id, "response contained no text content")

        return parse_structured_response(self._id, text)
