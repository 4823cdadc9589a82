"""Google Gemini implementation of the verifier interface."""

from typing import Any, Optional

from ...domain.errors import ResponseParseError
from ...domain.models.provider import ProviderResult
from .base import (
    BaseVerifierAdapter,
    JSON_PROMPT,
    VerifierConfig,
    parse_json_response,
    user_prompt,
)


class GeminiAdapter(BaseVerifierAdapter):
    """Verifier backed by the Gemini ``generateContent`` endpoint.

    Gemini is asked for a JSON answer rather than the labelled text format.
    """

    def __init__(self, config: Optional[VerifierConfig] = None, **overrides: Any):
        super().__init__(
            "gemini",
            config or VerifierConfig(
                base_url="https://generativelanguage.googleapis.com",
                model="gemini-1.5-pro",
            ),
            **overrides,
        )

    async def _query(self, statement: str) -> ProviderResult:
        response = await self._client.post(
            f"/v1beta/models/{self._config.model}:generateContent",
            params={"key": self._config.api_key},
            json={
                "contents": [
                    {
                        "role": "user",
                        "parts": [{"text": f"{JSON_PROMPT}\n\n{user_prompt(statement)}"}],
                    }
                ],
                "generationConfig": {
                    "temperature": self._config.temperature,
                    "maxOutputTokens": self._config.max_tokens,
                },
            },
        )
        response.raise_for_status()

        try:
            text = response.json()["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            raise ResponseParseError(self._id, "unexpected response shape")

        return parse_json_response(self._id, text)
