"""
Aggregated statistics schemas.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field, model_validator

Label = Union[str, int, float]


class Distribution(BaseModel):
    """Parallel bucket labels and counts, in presentation order."""

    labels: list[Label] = Field(default_factory=list)
    values: list[int] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_lengths(self) -> "Distribution":
        if len(self.labels) != len(self.values):
            raise ValueError("labels and values must have the same length")
        return self


class PollStats(BaseModel):
    """
    Statistical summary of a poll's responses.

    Derived and disposable: recomputed on every aggregation call.
    """

    count: int = Field(0, ge=0)
    distribution: Distribution = Field(default_factory=Distribution)
    mean: Optional[float] = None
    median: Optional[float] = None
    mode: Optional[Label] = None

    @classmethod
    def empty(cls, count: int = 0) -> "PollStats":
        """Stats with no distribution ("insufficient data")."""
        return cls(count=count, distribution=Distribution())
