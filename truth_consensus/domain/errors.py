"""Domain exceptions for claim verification."""


class InvalidClaimError(ValueError):
    """Raised when the input cannot be treated as a claim (empty or blank)."""


class ProviderFailure(Exception):
    """A single verification provider could not produce an answer."""

    def __init__(self, provider_id: str, message: str):
        self.provider_id = provider_id
        super().__init__(f"{provider_id}: {message}")


class ResponseParseError(ProviderFailure):
    """A provider answered, but the answer could not be parsed into a verdict."""
