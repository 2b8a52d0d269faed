"""
Poll insight service.

Fetches poll configuration and responses from the response store and runs
them through aggregation and insight generation.
"""

import asyncio
from typing import Any, Optional

import structlog

from core.exceptions import PollNotFoundError
from repositories.provider import ResponseStoreProtocol
from schemas.demographics import DemographicFilters, DemographicProfile
from schemas.insight import GlobalInsight, PersonalizedInsight
from schemas.poll import Poll
from schemas.response import PollResponseRecord
from schemas.stats import PollStats
from services.global_insights import generate_global_insights
from services.personalized_insights import SubgroupShareEstimator, generate_personalized_insights
from services.stats_service import compute_stats

logger = structlog.get_logger(__name__)


class PollInsightService:
    """Service for poll statistics and insights."""

    def __init__(
        self,
        store: ResponseStoreProtocol,
        estimator: Optional[SubgroupShareEstimator] = None,
    ):
        """
        Initialize insight service.

        Args:
            store: Response store accessor
            estimator: Subgroup share strategy for demographic comparisons
        """
        self.store = store
        self.estimator = estimator

    async def _require_poll(self, poll_id: str) -> Poll:
        poll = await self.store.get_poll(poll_id)
        if poll is None:
            raise PollNotFoundError(poll_id)
        return poll

    async def get_poll_stats(
        self, poll_id: str, filters: Optional[DemographicFilters] = None
    ) -> PollStats:
        """
        Compute stats for a poll, optionally for one demographic slice.

        Raises:
            PollNotFoundError: If the poll does not exist
        """
        poll = await self._require_poll(poll_id)
        responses = await self.store.get_responses(poll_id, filters)
        return compute_stats(poll, responses)

    async def get_global_insights(self, poll_id: str) -> list[GlobalInsight]:
        poll = await self._require_poll(poll_id)
        responses = await self.store.get_responses(poll_id)
        return generate_global_insights(poll, compute_stats(poll, responses))

    async def get_personalized_insights(
        self,
        poll_id: str,
        user_value: Any,
        user_id: Optional[str] = None,
    ) -> list[PersonalizedInsight]:
        """
        Compare a user's answer to the whole population of a poll.

        The user's demographics are looked up when ``user_id`` is given.
        """
        poll = await self._require_poll(poll_id)
        if user_value is None:
            return []

        demographics: Optional[DemographicProfile] = None
        if user_id is not None:
            responses, demographics = await asyncio.gather(
                self.store.get_responses(poll_id),
                self.store.get_user_demographics(user_id),
            )
        else:
            responses = await self.store.get_responses(poll_id)

        return generate_personalized_insights(
            poll,
            compute_stats(poll, responses),
            user_value,
            demographics,
            estimator=self.estimator,
        )

    async def submit_response(self, poll_id: str, user_id: str, value: Any) -> PollResponseRecord:
        """
        Store a user's answer.

        Raises:
            PollNotFoundError: If the poll does not exist
            DuplicateResponseError: If the user already answered
        """
        await self._require_poll(poll_id)
        record = await self.store.create_response(poll_id, user_id, value)
        logger.info("response_submitted", poll_id=poll_id)
        return record
