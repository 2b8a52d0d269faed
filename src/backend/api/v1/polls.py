"""
Poll statistics and insight endpoints.

- Stats are public and may be sliced by demographics
- Global insights are shown before answering
- Personalized insights are shown after answering
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from api.deps import get_demographic_filters, get_insight_service
from core.exceptions import DuplicateResponseError, PollNotFoundError
from schemas.demographics import DemographicFilters
from schemas.insight import GlobalInsight, PersonalizedInsight, PersonalizedInsightRequest
from schemas.response import ResponseCreate, ResponseSubmitted
from schemas.stats import PollStats
from services.insight_service import PollInsightService

router = APIRouter()


def _poll_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Poll not found",
    )


@router.get("/{poll_id}/stats", response_model=PollStats)
async def get_poll_stats(
    poll_id: str,
    filters: Optional[DemographicFilters] = Depends(get_demographic_filters),
    service: PollInsightService = Depends(get_insight_service),
) -> PollStats:
    """
    Get aggregated statistics for a poll.

    Demographic query parameters narrow the responses before aggregation.
    A ``count`` of 0 means there is not enough data yet.
    """
    try:
        return await service.get_poll_stats(poll_id, filters)
    except PollNotFoundError:
        raise _poll_not_found()


@router.get("/{poll_id}/insights", response_model=list[GlobalInsight])
async def get_global_insights(
    poll_id: str,
    service: PollInsightService = Depends(get_insight_service),
) -> list[GlobalInsight]:
    """Get up to three statements about how the community answered."""
    try:
        return await service.get_global_insights(poll_id)
    except PollNotFoundError:
        raise _poll_not_found()


@router.post("/{poll_id}/insights/personalized", response_model=list[PersonalizedInsight])
async def get_personalized_insights(
    poll_id: str,
    request: PersonalizedInsightRequest,
    service: PollInsightService = Depends(get_insight_service),
) -> list[PersonalizedInsight]:
    """Compare the caller's answer with everyone else's."""
    try:
        return await service.get_personalized_insights(poll_id, request.value, request.user_id)
    except PollNotFoundError:
        raise _poll_not_found()


@router.post(
    "/{poll_id}/responses",
    response_model=ResponseSubmitted,
    status_code=status.HTTP_201_CREATED,
)
async def submit_response(
    poll_id: str,
    request: ResponseCreate,
    service: PollInsightService = Depends(get_insight_service),
) -> ResponseSubmitted:
    """Submit an answer. Each user may answer a poll once."""
    try:
        await service.submit_response(poll_id, request.user_id, request.value)
    except PollNotFoundError:
        raise _poll_not_found()
    except DuplicateResponseError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )

    return ResponseSubmitted(success=True, message="Response recorded", poll_id=poll_id)
