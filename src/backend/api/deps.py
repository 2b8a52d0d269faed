"""
Shared dependencies for API endpoints.
"""

from typing import Optional

from fastapi import Depends, Query

from repositories.provider import ResponseStoreProtocol, get_response_store
from schemas.demographics import (
    AgeRangeEnum,
    DemographicFilters,
    GenderEnum,
    OccupationEnum,
    RegionEnum,
)
from services.insight_service import PollInsightService


def get_insight_service(
    store: ResponseStoreProtocol = Depends(get_response_store),
) -> PollInsightService:
    """Insight service bound to the configured response store."""
    return PollInsightService(store)


def get_demographic_filters(
    age_range: Optional[AgeRangeEnum] = Query(None, description="Only responses from this age bracket"),
    gender: Optional[GenderEnum] = Query(None),
    region: Optional[RegionEnum] = Query(None),
    occupation: Optional[OccupationEnum] = Query(None),
) -> Optional[DemographicFilters]:
    """Build a demographic filter from query parameters (None when unset)."""
    filters = DemographicFilters(
        age_range=age_range,
        gender=gender,
        region=region,
        occupation=occupation,
    )
    return None if filters.is_empty() else filters
