"""Concurrent, failure-isolated invocation of the selected verifiers."""

import asyncio
import logging
import time
from typing import Dict, List, Mapping, Optional

from ..models.provider import ProviderResult
from ..ports.verifier import Verifier

logger = logging.getLogger(__name__)


class FanOutOrchestrator:
    """Runs every selected verifier at once and collects what comes back.

    A verifier that raises, reports failure or misses the global deadline
    yields a failed result; it never aborts the other verifiers.
    """

    def __init__(self, deadline_seconds: float = 30.0):
        """Initialize the orchestrator.

        Args:
            deadline_seconds: Upper bound on the whole fan-out
        """
        self._deadline = deadline_seconds

    @property
    def deadline_seconds(self) -> float:
        return self._deadline

    async def run_all(
        self,
        statement: str,
        weighted_verifiers: Mapping[str, Optional[Verifier]],
    ) -> List[ProviderResult]:
        """Invoke every selected verifier concurrently.

        Args:
            statement: Normalized statement to check
            weighted_verifiers: Selected provider ids mapped to their verifier,
                or None when no verifier is registered for the id

        Returns:
            One result per selected provider, in selection order
        """
        results: Dict[str, ProviderResult] = {}
        tasks: Dict[asyncio.Task, str] = {}

        for provider_id, verifier in weighted_verifiers.items():
            if verifier is None:
                logger.warning(f"⚠️ No verifier registered for provider '{provider_id}'")
                results[provider_id] = ProviderResult.failed(provider_id, "no verifier registered")
                continue
            task = asyncio.create_task(self._invoke(provider_id, verifier, statement))
            tasks[task] = provider_id

        if tasks:
            logger.info(f"🚀 Fanning out to {len(tasks)} providers: {', '.join(tasks.values())}")
            done, pending = await asyncio.wait(tasks.keys(), timeout=self._deadline)

            for task in pending:
                provider_id = tasks[task]
                task.cancel()
                logger.warning(f"⏱️ Provider '{provider_id}' abandoned after {self._deadline}s deadline")
                results[provider_id] = ProviderResult.failed(
                    provider_id,
                    f"deadline of {self._deadline}s exceeded",
                    latency_seconds=self._deadline,
                )

            for task in done:
                results[tasks[task]] = self._collect(task, tasks[task])

        succeeded = sum(1 for result in results.values() if result.succeeded)
        logger.info(f"📊 Fan-out complete: {succeeded}/{len(results)} providers succeeded")
        return [results[provider_id] for provider_id in weighted_verifiers]

    @staticmethod
    def _collect(task: asyncio.Task, provider_id: str) -> ProviderResult:
        """Result of a finished task, or a failed result for that provider alone."""
        # A verifier raising CancelledError itself leaves its task cancelled
        if task.cancelled():
            logger.warning(f"❌ Provider '{provider_id}' was cancelled")
            return ProviderResult.failed(provider_id, "verification was cancelled")

        error = task.exception()
        if error is not None:
            logger.warning(f"❌ Provider '{provider_id}' raised {type(error).__name__}: {error}")
            return ProviderResult.failed(provider_id, f"{type(error).__name__}: {error}")
        return task.result()

    async def _invoke(self, provider_id: str, verifier: Verifier, statement: str) -> ProviderResult:
        """Call one verifier, turning any exception into a failed result."""
        started = time.perf_counter()
        try:
            result = await verifier.check_fact(statement)
            if not isinstance(result, ProviderResult):
                raise TypeError(f"verifier returned {type(result).__name__} instead of a ProviderResult")

            elapsed = time.perf_counter() - started
            updates = {}
            if result.provider_id != provider_id:
                updates["provider_id"] = provider_id
            if result.latency_seconds is None:
                updates["latency_seconds"] = elapsed
            if updates:
                result = result.model_copy(update=updates)
        except Exception as e:
            elapsed = time.perf_counter() - started
            logger.warning(f"❌ Provider '{provider_id}' raised {type(e).__name__}: {e}")
            return ProviderResult.failed(provider_id, f"{type(e).__name__}: {e}", latency_seconds=elapsed)

        if result.succeeded:
            logger.info(
                f"✅ Provider '{provider_id}' answered {'TRUE' if result.verdict else 'FALSE'} "
                f"(confidence={result.confidence:.2f}, {elapsed:.2f}s)"
            )
        else:
            logger.warning(f"⚠️ Provider '{provider_id}' failed: {result.error}")
        return result
