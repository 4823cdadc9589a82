"""Factory for creating and managing verification providers."""

import logging
from functools import partial
from typing import Any, Callable, Dict, Mapping, Optional

from ...domain.ports.verifier import Verifier
from .anthropic_adapter import AnthropicAdapter
from .cohere_adapter import CohereAdapter
from .gemini_adapter import GeminiAdapter
from .google_fact_check_adapter import GoogleFactCheckAdapter
from .openai_compatible_adapter import OPENAI_COMPATIBLE_ENDPOINTS, OpenAICompatibleAdapter
from .wikipedia_adapter import WikipediaAdapter

logger = logging.getLogger(__name__)

VerifierBuilder = Callable[..., Verifier]


class VerifierFactory:
    """Factory for creating and managing verification providers.

    This factory maintains a registry of known verifiers and handles
    their lifecycle (initialization, shutdown).
    """

    def __init__(self):
        """Initialize the factory."""
        self._provider_registry: Dict[str, VerifierBuilder] = {}
        self._active_providers: Dict[str, Verifier] = {}

        # Register default providers
        self.register_provider("claude", AnthropicAdapter)
        for provider_id in OPENAI_COMPATIBLE_ENDPOINTS:
            self.register_provider(provider_id, partial(OpenAICompatibleAdapter, provider_id))
        self.register_provider("gemini", GeminiAdapter)
        self.register_provider("cohere", CohereAdapter)
        self.register_provider("google_fact_check", GoogleFactCheckAdapter)
        self.register_provider("wikipedia", WikipediaAdapter)

    def register_provider(self, name: str, builder: VerifierBuilder) -> None:
        """Register a new verifier class or builder.

        Args:
            name: Unique identifier for the provider
            builder: Callable returning a verifier, usually the adapter class

        Raises:
            ValueError: If the name is already registered
        """
        if name in self._provider_registry:
            raise ValueError(f"Provider {name} already registered")
        self._provider_registry[name] = builder

    async def create_provider(self, name: str, **config: Any) -> Verifier:
        """Create and initialize a new verifier instance.

        Args:
            name: Name of the provider to create
            **config: Provider-specific configuration, e.g. ``api_key``

        Returns:
            Initialized verifier instance

        Raises:
            ValueError: If provider not found
            RuntimeError: If initialization fails
        """
        if name not in self._provider_registry:
            raise ValueError(f"Provider {name} not registered")

        provider = self._provider_registry[name](**config)

        try:
            await provider.initialize()
        except Exception as e:
            raise RuntimeError(f"Failed to initialize provider {name}: {e}")

        self._active_providers[name] = provider
        return provider

    async def build_registry(self, credentials: Mapping[str, str]) -> Dict[str, Verifier]:
        """Create every registered verifier.

        Providers that need a key get theirs from ``credentials``; a provider
        without one is still created but reports itself unavailable. A
        provider that fails to initialize is left out and logged.

        Args:
            credentials: API key per provider id

        Returns:
            Verifiers keyed by provider id
        """
        verifiers = {}
        for name in self._provider_registry:
            config = {"api_key": credentials[name]} if credentials.get(name) else {}
            try:
                verifiers[name] = await self.create_provider(name, **config)
            except RuntimeError as e:
                logger.error(f"❌ {e}")

        available = [name for name, verifier in verifiers.items() if verifier.is_available]
        logger.info(f"✅ Verification providers ready: {', '.join(available) or 'none'}")
        return verifiers

    def get_provider(self, name: str) -> Optional[Verifier]:
        """Get an active provider instance by name.

        Args:
            name: Name of the provider

        Returns:
            Provider instance if active, None otherwise
        """
        return self._active_providers.get(name)

    async def shutdown_provider(self, name: str) -> None:
        """Shutdown a specific provider.

        Args:
            name: Name of the provider to shutdown
        """
        provider = self._active_providers.pop(name, None)
        if provider:
            await provider.shutdown()

    async def shutdown_all(self) -> None:
        """Shutdown all active providers."""
        for name in list(self._active_providers):
            await self.shutdown_provider(name)

    @property
    def registered_providers(self) -> Dict[str, bool]:
        """Registered provider names mapped to whether they are usable."""
        return {
            name: bool(self.get_provider(name)) and self.get_provider(name).is_available
            for name in self._provider_registry
        }
