"""Dependency injection configuration for hexagonal architecture."""

import logging
import os
from functools import lru_cache
from typing import Dict, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from ..domain.models.claim import ClaimContext
from ..domain.models.config import EngineConfig
from ..domain.models.provider import ProviderDescriptor, SubscriptionTier
from ..domain.models.verdict import VerdictReport
from ..domain.services.verification_engine import VerificationEngine
from .verifiers.catalogue import build_descriptors
from .verifiers.factory import VerifierFactory

# Load .env from the current directory or a parent
load_dotenv()

logger = logging.getLogger(__name__)

# provider id -> environment variable holding its key
CREDENTIAL_ENV_VARS: Dict[str, str] = {
    "claude": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
    "perplexity": "PERPLEXITY_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "mistral": "MISTRAL_API_KEY",
    "llama": "LLAMA_API_KEY",
    "cohere": "COHERE_API_KEY",
    "google_fact_check": "GOOGLE_FACT_CHECK_API_KEY",
}


class ProviderCredentials(BaseModel):
    """API keys for the verification providers, empty when not configured."""

    keys: Dict[str, str] = Field(default_factory=dict, description="API key per provider id")

    class Config:
        """Pydantic model configuration."""
        frozen = True

    @classmethod
    def from_env(cls) -> "ProviderCredentials":
        """Read every known provider key from the environment."""
        keys = {}
        for provider_id, env_var in CREDENTIAL_ENV_VARS.items():
            value = os.getenv(env_var, "").strip()
            if value:
                keys[provider_id] = value
            else:
                logger.warning(f"⚠️ {env_var} not found in environment variables")
        return cls(keys=keys)

    def as_mapping(self) -> Dict[str, str]:
        return dict(self.keys)


def engine_config_from_env() -> EngineConfig:
    """Engine configuration, with the deadline taken from the environment if set."""
    deadline = os.getenv("TRUTH_CONSENSUS_DEADLINE")
    if not deadline:
        return EngineConfig()
    try:
        return EngineConfig(deadline_seconds=float(deadline))
    except ValueError:
        logger.warning(f"⚠️ Ignoring invalid TRUTH_CONSENSUS_DEADLINE={deadline!r}")
        return EngineConfig()


def tier_from_env() -> SubscriptionTier:
    """Subscription tier from ``TRUTH_CONSENSUS_TIER``, standard by default."""
    value = os.getenv("TRUTH_CONSENSUS_TIER", SubscriptionTier.STANDARD.value).strip().lower()
    try:
        return SubscriptionTier(value)
    except ValueError:
        logger.warning(f"⚠️ Unknown TRUTH_CONSENSUS_TIER={value!r}, using standard")
        return SubscriptionTier.STANDARD


class ServiceContainer:
    """Service container for dependency injection."""

    def __init__(
        self,
        credentials: Optional[ProviderCredentials] = None,
        engine_config: Optional[EngineConfig] = None,
        factory: Optional[VerifierFactory] = None,
    ):
        """Initialize service container.

        Args:
            credentials: Provider API keys, read from the environment if omitted
            engine_config: Engine configuration, read from the environment if omitted
            factory: Verifier factory, a default one if omitted
        """
        self._credentials = credentials if credentials is not None else ProviderCredentials.from_env()
        self._engine_config = engine_config if engine_config is not None else engine_config_from_env()
        self._factory = factory or VerifierFactory()
        self._engine: Optional[VerificationEngine] = None
        self._descriptors: List[ProviderDescriptor] = []

    async def _ensure_engine(self) -> VerificationEngine:
        """Ensure the engine is created with its verifiers."""
        if self._engine is None:
            logger.info("🔧 Setting up verification providers...")
            verifiers = await self._factory.build_registry(self._credentials.as_mapping())
            self._descriptors = build_descriptors(verifiers)
            self._engine = VerificationEngine(verifiers, self._engine_config)
            logger.info("✅ Service container setup completed")
        return self._engine

    async def get_verification_engine(self) -> VerificationEngine:
        """Get the verification engine with its providers."""
        return await self._ensure_engine()

    async def get_descriptors(self) -> List[ProviderDescriptor]:
        """Get the provider descriptors, availability included."""
        await self._ensure_engine()
        return list(self._descriptors)

    async def verify(
        self,
        raw_input: str,
        tier: SubscriptionTier = SubscriptionTier.STANDARD,
        context: Optional[ClaimContext] = None,
    ) -> VerdictReport:
        """Verify a claim with as many providers as the tier allows."""
        engine = await self._ensure_engine()
        return await engine.verify(raw_input, tier.provider_quota, self._descriptors, context)

    async def shutdown(self) -> None:
        """Shut down every created verifier."""
        await self._factory.shutdown_all()
        self._engine = None
        self._descriptors = []


# Global service container instance
@lru_cache()
def get_service_container() -> ServiceContainer:
    """Get global service container instance.

    Returns:
        Service container instance
    """
    return ServiceContainer()


async def get_verification_engine() -> VerificationEngine:
    """Get the engine from the global container."""
    return await get_service_container().get_verification_engine()
