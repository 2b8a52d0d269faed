"""
Poll-related Pydantic schemas.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class PollTypeEnum(str, Enum):
    """Kind of answer a poll collects."""

    BOOLEAN = "boolean"  # Yes/No
    SLIDER = "slider"  # Bounded range, usually 1-100
    NUMERIC = "numeric"  # Free numeric input
    CHOICE = "choice"  # Multiple choice


NUMERIC_POLL_TYPES = frozenset({PollTypeEnum.NUMERIC, PollTypeEnum.SLIDER})


class PollOption(BaseModel):
    """A single option of a choice poll."""

    id: str
    text: str


class Poll(BaseModel):
    """Poll definition as seen by the aggregation engine."""

    id: str
    # Kept as a plain string so that unknown types from the store still load
    type: str
    question: str = ""
    description: Optional[str] = None
    category: Optional[str] = None
    creator_id: Optional[str] = None
    created_at: Optional[datetime] = None
    upvotes: int = 0
    response_count: int = 0
    is_active: bool = True
    options: Optional[list[PollOption]] = None
    min_value: Optional[float] = Field(None, description="Lower bound for slider/numeric polls")
    max_value: Optional[float] = Field(None, description="Upper bound for slider/numeric polls")
    demographic_filters: list[str] = Field(
        default_factory=list, description="Demographic axes collected for this poll"
    )

    model_config = {"from_attributes": True}

    @model_validator(mode="after")
    def check_range(self) -> "Poll":
        """Reject an inverted configured range."""
        if self.min_value is not None and self.max_value is not None and self.min_value > self.max_value:
            raise ValueError("min_value must not exceed max_value")
        return self

    @property
    def poll_type(self) -> Optional[PollTypeEnum]:
        """The typed poll kind, or None for a type this engine does not know."""
        try:
            return PollTypeEnum(self.type)
        except ValueError:
            return None

    def option_labels(self) -> dict[str, str]:
        """Map of option id to display text."""
        return {option.id: option.text for option in self.options or []}
