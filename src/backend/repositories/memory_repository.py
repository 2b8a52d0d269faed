"""
In-memory response store.

Used for local development and tests. Enforces one response per
(poll, user) the way the production store does with a unique constraint,
and snapshots the user's demographics onto each response at submit time.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Optional

import structlog

from core.exceptions import DuplicateResponseError, PollNotFoundError
from schemas.demographics import DemographicFilters, DemographicProfile
from schemas.poll import Poll
from schemas.response import PollResponseRecord
from services.stats_service import apply_demographic_filters

logger = structlog.get_logger(__name__)


class InMemoryResponseStore:
    """
    Dict-backed implementation of ``ResponseStoreProtocol``.

    Privacy Design:
    - Stored records never carry the user id
    - The (poll, user) pairs are tracked separately for uniqueness only
    """

    def __init__(self) -> None:
        self._polls: dict[str, Poll] = {}
        self._responses: dict[str, list[PollResponseRecord]] = {}
        self._respondents: set[tuple[str, str]] = set()
        self._demographics: dict[str, DemographicProfile] = {}
        self._lock = asyncio.Lock()

    # ========================================================================
    # Read Operations
    # ========================================================================

    async def get_poll(self, poll_id: str) -> Optional[Poll]:
        return self._polls.get(poll_id)

    async def get_responses(
        self, poll_id: str, filters: Optional[DemographicFilters] = None
    ) -> list[PollResponseRecord]:
        """Responses for a poll, optionally narrowed by demographics."""
        return apply_demographic_filters(self._responses.get(poll_id, []), filters)

    async def get_user_demographics(self, user_id: str) -> Optional[DemographicProfile]:
        return self._demographics.get(user_id)

    async def has_responded(self, poll_id: str, user_id: str) -> bool:
        return (poll_id, user_id) in self._respondents

    # ========================================================================
    # Write Operations
    # ========================================================================

    async def save_poll(self, poll: Poll) -> Poll:
        self._polls[poll.id] = poll
        self._responses.setdefault(poll.id, [])
        return poll

    async def save_user_demographics(self, user_id: str, profile: DemographicProfile) -> None:
        self._demographics[user_id] = profile

    async def create_response(self, poll_id: str, user_id: str, value: Any) -> PollResponseRecord:
        """
        Store a user's answer.

        Raises:
            PollNotFoundError: If the poll does not exist
            DuplicateResponseError: If the user already answered this poll
        """
        async with self._lock:
            poll = self._polls.get(poll_id)
            if poll is None:
                raise PollNotFoundError(poll_id)
            if (poll_id, user_id) in self._respondents:
                logger.warning("duplicate_response", poll_id=poll_id)
                raise DuplicateResponseError(poll_id, user_id)

            profile = self._demographics.get(user_id) or DemographicProfile()
            record = PollResponseRecord(
                value=value,
                age_range=profile.age_range,
                gender=profile.gender,
                region=profile.region,
                occupation=profile.occupation,
                created_at=datetime.now(timezone.utc),
            )
            self._responses[poll_id].append(record)
            self._respondents.add((poll_id, user_id))
            self._polls[poll_id] = poll.model_copy(
                update={"response_count": poll.response_count + 1}
            )

        logger.info("response_stored", poll_id=poll_id)
        return record
