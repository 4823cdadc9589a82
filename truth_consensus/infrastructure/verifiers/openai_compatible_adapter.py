"""Adapter for providers that speak the OpenAI chat completions API.

OpenAI itself, Perplexity, Mistral and Meta's Llama API all accept the same
request shape, so one adapter built on the ``openai`` SDK serves them all.
"""

from typing import Any, Dict, List, Optional

import openai
from openai import AsyncOpenAI

from ...domain.errors import ProviderFailure
from ...domain.models.provider import ProviderResult
from .base import (
    BaseVerifierAdapter,
    STRUCTURED_PROMPT,
    VerifierConfig,
    parse_structured_response,
    user_prompt,
)

# provider id -> (base url, default model); a None base url means the SDK default
OPENAI_COMPATIBLE_ENDPOINTS: Dict[str, tuple] = {
    "openai": (None, "gpt-4o"),
    "perplexity": ("https://api.perplexity.ai", "sonar"),
    "mistral": ("https://api.mistral.ai/v1", "mistral-large-latest"),
    "llama": ("https://api.llama.com/compat/v1", "Llama-3.3-70B-Instruct"),
}


def default_config(provider_id: str, api_key: str = "") -> VerifierConfig:
    """Build the stock configuration for a known OpenAI-compatible provider."""
    base_url, model = OPENAI_COMPATIBLE_ENDPOINTS[provider_id]
    return VerifierConfig(api_key=api_key, base_url=base_url or "", model=model)


class OpenAICompatibleAdapter(BaseVerifierAdapter):
    """Verifier backed by an OpenAI-compatible chat completions endpoint."""

    def __init__(
        self,
        provider_id: str,
        config: Optional[VerifierConfig] = None,
        **overrides: Any,
    ):
        super().__init__(provider_id, config or default_config(provider_id), **overrides)
        self._client: Optional[AsyncOpenAI] = None

    async def initialize(self) -> None:
        """Create the SDK client."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._config.api_key,
                base_url=self._config.base_url or None,
                timeout=self._config.timeout,
            )

    async def _query(self, statement: str) -> ProviderResult:
        try:
            response = await self._client.chat.completions.create(
                model=self._config.model,
                messages=[
                    {"role": "system", "content": STRUCTURED_PROMPT},
                    {"role": "user", "content": user_prompt(statement)},
                ],
                temperature=self._config.temperature,
                max_tokens=self._config.max_tokens,
            )
        except openai.APIStatusError as e:
            raise ProviderFailure(self._id, f"HTTP {e.status_code}: {e.message}")
        except openai.OpenAIError as e:
            raise ProviderFailure(self._id, f"request failed: {e}")

        if not response.choices:
            raise ProviderFailure(self._id, "response contained no choices")

        content = response.choices[0].message.content or ""
        # Perplexity returns its search citations alongside the completion
        citations: Optional[List[str]] = getattr(response, "citations", None)
        return parse_structured_response(self._id, content, citations)

    async def shutdown(self) -> None:
        """Close the SDK client."""
        if self._client is not None:
            await self._client.close()
            self._client = None
