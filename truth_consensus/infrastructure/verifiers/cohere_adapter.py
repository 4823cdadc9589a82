"""Cohere implementation of the verifier interface."""

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


class CohereAdapter(BaseVerifierAdapter):
    """Verifier backed by Cohere's v2 chat API."""

    def __init__(self, config: Optional[VerifierConfig] = None, **overrides: Any):
        super().__init__(
            "cohere",
            config or VerifierConfig(
                base_url="https://api.cohere.com",
                model="command-r-plus",
            ),
            **overrides,
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }

    async def _query(self, statement: str) -> ProviderResult:
        response = await self._client.post(
            "/v2/chat",
            json={
                "model": self._config.model,
                "messages": [
                    {"role": "system", "content": STRUCTURED_PROMPT},
                    {"role": "user", "content": user_prompt(statement)},
                ],
                "temperature": self._config.temperature,
                "max_tokens": self._config.max_tokens,
            },
        )
        response.raise_for_status()

        try:
            text = response.json()["message"]["content"][0]["text"]
        except (KeyError, IndexError, TypeError):
            raise ResponseParseError(self._id, "unexpected response shape")

        return parse_structured_response(self._id, text)
