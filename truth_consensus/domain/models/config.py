"""Engine configuration."""

from pydantic import BaseModel, Field


class EngineConfig(BaseModel):
    """Tunable parameters of the verification engine.

    Passed in at construction time and never mutated afterwards.
    """

    deadline_seconds: float = Field(default=30.0, description="Global deadline for the provider fan-out")
    max_sources: int = Field(default=5, description="Maximum number of sources in a report")
    strong_consensus_threshold: float = Field(
        default=0.7,
        description="Consensus strictly above this counts as strong",
    )
    high_manipulation_threshold: float = Field(
        default=0.5,
        description="Manipulation score at or above this counts as high risk",
    )
    high_contradiction_threshold: float = Field(
        default=0.5,
        description="Contradiction index strictly above this counts as high risk",
    )
    manipulation_saturation: int = Field(
        default=5,
        description="Number of manipulation markers that saturates the score at 1.0",
    )
    min_context_length: int = Field(
        default=20,
        description="Contexts of this length or shorter are treated as trivial",
    )

    class Config:
        """Pydantic model configuration."""
        frozen = True
