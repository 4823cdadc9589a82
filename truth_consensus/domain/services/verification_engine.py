"""Service that verifies one claim against several independent providers."""

import logging
from typing import FrozenSet, Mapping, Optional, Sequence

from ..errors import InvalidClaimError
from ..models.claim import Claim, ClaimContext
from ..models.config import EngineConfig
from ..models.domain import Domain
from ..models.provider import ProviderDescriptor, ProviderResult, WeightVector
from ..models.verdict import VerdictReport
from ..ports.verifier import Verifier
from . import consensus_fusion, context_assessor, domain_classifier, risk_analyzer
from .claim_normalizer import normalize
from .fan_out import FanOutOrchestrator
from .verdict_compositor import compose
from .weight_calculator import weigh

logger = logging.getLogger(__name__)


class VerificationEngine:
    """Normalizes, weights, fans out, fuses and composes a verdict.

    The engine keeps no per-request state: the verifier registry is the
    only thing shared between calls and it is never modified here.
    """

    def __init__(
        self,
        verifiers: Mapping[str, Verifier],
        config: Optional[EngineConfig] = None,
    ):
        """Initialize the engine.

        Args:
            verifiers: Verifier instances keyed by provider id
            config: Engine configuration
        """
        self._verifiers = dict(verifiers)
        self._config = config or EngineConfig()
        self._orchestrator = FanOutOrchestrator(self._config.deadline_seconds)
        logger.info(f"🔧 VerificationEngine initialized with {len(self._verifiers)} verifiers")

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def provider_ids(self) -> Sequence[str]:
        return list(self._verifiers)

    async def verify(
        self,
        raw_input: str,
        provider_quota: int,
        available_providers: Sequence[ProviderDescriptor],
        context: Optional[ClaimContext] = None,
    ) -> VerdictReport:
        """Verify a claim.

        Args:
            raw_input: Statement or question from the user
            provider_quota: Maximum number of providers to consult
            available_providers: Provider table with live availability
            context: Optional speaker/source metadata

        Returns:
            Verdict report; provider failures degrade the report, they never raise

        Raises:
            InvalidClaimError: If the input is empty or blank
        """
        if raw_input is None or not raw_input.strip():
            raise InvalidClaimError("Claim text must not be empty")

        logger.info(f"🔍 Starting verification for: {raw_input[:100]}")
        claim = normalize(raw_input)
        domains = domain_classifier.classify(claim.normalized_statement)
        weights = weigh(domains, provider_quota, available_providers)

        try:
            results = await self._orchestrator.run_all(
                claim.normalized_statement,
                {provider_id: self._verifiers.get(provider_id) for provider_id in weights.provider_ids},
            )
        except Exception as e:
            logger.error(f"❌ Fan-out failed: {e}", exc_info=True)
            results = [ProviderResult.failed(provider_id, str(e)) for provider_id in weights.provider_ids]

        names = {provider.id: provider.name for provider in available_providers}
        try:
            return self._report(claim, domains, weights, results, names, context)
        except Exception as e:
            logger.error(f"❌ Fusing provider results failed: {e}", exc_info=True)
            degraded = [
                ProviderResult.failed(provider_id, f"result could not be fused: {e}")
                for provider_id in weights.provider_ids
            ]
            return self._report(claim, domains, weights, degraded, names, None)

    def _report(
        self,
        claim: Claim,
        domains: FrozenSet[Domain],
        weights: WeightVector,
        results: Sequence[ProviderResult],
        names: Mapping[str, str],
        context: Optional[ClaimContext],
    ) -> VerdictReport:
        """Fuse provider results into a report."""
        risk = risk_analyzer.analyze(claim.raw_input, results, self._config.manipulation_saturation)
        fusion = consensus_fusion.fuse(
            claim.normalized_statement,
            results,
            weights=weights,
            risk=risk,
            config=self._config,
            names=names,
        )
        report = compose(
            weights,
            results,
            fusion,
            risk,
            claim=claim,
            domains=domains,
            weight_explanation=domain_classifier.explain_weights(domains, weights),
            context_assessment=context_assessor.assess(context) if context else None,
        )
        logger.info(
            f"✅ Verification complete: {'TRUE' if report.is_true else 'FALSE'}, "
            f"confidence={report.confidence:.2f}, consensus={report.consensus_strength:.2f}, "
            f"manipulation={report.manipulation_score:.2f}, contradiction={report.contradiction_index:.2f}"
        )
        return report

    async def shutdown(self) -> None:
        """Shut down every registered verifier."""
        for provider_id, verifier in self._verifiers.items():
            try:
                await verifier.shutdown()
            except Exception as e:
                logger.warning(f"⚠️ Failed to shut down verifier '{provider_id}': {e}")
