"""Domain models for claims and the metadata callers attach to them."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class Claim(BaseModel):
    """A user input normalized into a declarative, checkable statement."""

    raw_input: str = Field(..., description="Input exactly as the caller supplied it")
    normalized_statement: str = Field(..., description="Declarative statement that gets verified")
    was_question: bool = Field(default=False, description="Whether the input was phrased as a question")
    implicit_claims: List[str] = Field(
        default_factory=list,
        description="Claims the question takes for granted",
    )

    class Config:
        """Pydantic model configuration."""
        frozen = True  # Immutable model
        json_schema_extra = {
            "example": {
                "raw_input": "Is the Earth flat?",
                "normalized_statement": "The Earth is flat.",
                "was_question": True,
                "implicit_claims": [
                    "The question assumes that 'is the earth flat' is a meaningful inquiry.",
                    "There exists factual information regarding the earth flat.",
                ],
            }
        }


class ClaimContext(BaseModel):
    """Optional information about who said a claim, where and when."""

    speaker: Optional[str] = Field(None, description="Person the claim is attributed to")
    source: Optional[str] = Field(None, description="Outlet or medium the claim appeared in")
    spoken_at: Optional[datetime] = Field(None, description="When the claim was made")
    location: Optional[str] = Field(None, description="Venue or platform")
    audience: Optional[str] = Field(None, description="Audience the claim was addressed to")
    political_context: Optional[str] = Field(None, description="Surrounding political situation")
    original_context: Optional[str] = Field(None, description="Surrounding text of the claim")

    class Config:
        """Pydantic model configuration."""
        frozen = True
