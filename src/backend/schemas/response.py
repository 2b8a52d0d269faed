"""
Poll response schemas.

A response record carries the answer plus the demographic snapshot taken
when it was submitted. The user id is not part of the record.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class PollResponseRecord(BaseModel):
    """One stored answer to a poll."""

    # Raw as stored; coercion happens during aggregation
    value: Any
    # Snapshot fields stay free-form so one odd row cannot break a poll
    age_range: Optional[str] = None
    gender: Optional[str] = None
    region: Optional[str] = None
    occupation: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ResponseCreate(BaseModel):
    """Schema for submitting an answer."""

    user_id: str = Field(..., min_length=1)
    value: Any


class ResponseSubmitted(BaseModel):
    """Response after successfully submitting an answer."""

    success: bool
    message: str
    poll_id: str
