"""Main script for running the consensus truth checker."""

import asyncio
import logging
import os

from .domain.errors import InvalidClaimError
from .domain.models.verdict import VerdictReport
from .infrastructure.dependencies import ServiceContainer, tier_from_env


def print_report(report: VerdictReport) -> None:
    """Print a verdict report for a terminal reader."""
    print("\nResults:")
    print(f"Verdict: {'TRUE' if report.is_true else 'FALSE'}")
    print(f"Confidence: {report.confidence:.2%}")
    print(f"Consensus: {report.consensus_strength:.2%}")
    print(f"Manipulation score: {report.manipulation_score:.2f}")
    print(f"Contradiction index: {report.contradiction_index:.2f}")
    print(f"Domains: {', '.join(domain.display_name for domain in report.domains)}")

    print("\nProviders:")
    for entry in report.per_provider_breakdown:
        verdict = "true" if entry.verdict else "false"
        print(f"- {entry.provider_id}: {verdict} ({entry.normalized_confidence:.0%}, weight {entry.weight:.0%})")
    for provider_id in report.failed_providers:
        print(f"- {provider_id}: failed")

    print(f"\nExplanation:\n{report.explanation}")
    print(f"\nContext: {report.context}")

    if report.sources:
        print("\nSources:")
        for i, source in enumerate(report.sources, 1):
            print(f"{i}. {source.name} <{source.url}>")


async def main():
    """Run the truth checker."""
    print("Truth Consensus - multi-provider fact checking")
    print("----------------------------------------------")

    tier = tier_from_env()
    container = ServiceContainer()
    descriptors = await container.get_descriptors()
    available = [d.name for d in descriptors if d.is_available]
    print(f"Tier: {tier.value} ({tier.provider_quota} providers)")
    print(f"Available providers: {', '.join(available) or 'none'}")

    try:
        while True:
            # Get statement from user
            statement = input("\nEnter a statement or question to check (or 'quit' to exit): ")
            if statement.lower() in ('quit', 'exit', 'q'):
                break

            print("\nChecking facts...")
            try:
                report = await container.verify(statement, tier)
            except InvalidClaimError as e:
                print(f"\n{e}")
                continue

            print_report(report)

    finally:
        # Clean up
        await container.shutdown()


if __name__ == "__main__":
    logging.basicConfig(
        level=os.getenv("TRUTH_CONSENSUS_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(main())
