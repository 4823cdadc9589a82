"""Protocol for verification providers."""

from typing import Protocol

from ..models.provider import ProviderResult


class Verifier(Protocol):
    """Protocol defining the interface every verification provider exposes."""

    async def initialize(self) -> None:
        """Prepare clients and connections."""
        ...

    async def check_fact(self, statement: str) -> ProviderResult:
        """Judge a declarative statement.

        Must not raise: any failure is reported as a result with
        ``succeeded=False``.
        """
        ...

    async def shutdown(self) -> None:
        """Clean up resources."""
        ...

    @property
    def provider_id(self) -> str:
        """Identifier matching the provider's descriptor."""
        ...

    @property
    def is_available(self) -> bool:
        """Whether the provider has what it needs (e.g. credentials) to run."""
        ...
