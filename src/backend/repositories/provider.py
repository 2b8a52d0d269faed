"""
Repository provider for dependency injection.

The aggregation engine only needs three reads from the response store plus
one write for submissions. Any backend implementing
``ResponseStoreProtocol`` can be plugged in; the in-memory store is the
default.

Usage:
    from repositories.provider import get_response_store

    # In FastAPI dependencies:
    async def some_endpoint(
        store: ResponseStoreProtocol = Depends(get_response_store),
    ):
        poll = await store.get_poll(poll_id)
"""

from functools import lru_cache
from typing import Any, Optional, Protocol, runtime_checkable

import structlog

from schemas.demographics import DemographicFilters, DemographicProfile
from schemas.poll import Poll
from schemas.response import PollResponseRecord

logger = structlog.get_logger(__name__)


# =============================================================================
# Repository Protocols (Interfaces)
# =============================================================================


@runtime_checkable
class ResponseStoreProtocol(Protocol):
    """Protocol defining response store operations."""

    async def get_poll(self, poll_id: str) -> Optional[Poll]: ...
    async def get_responses(
        self, poll_id: str, filters: Optional[DemographicFilters] = None
    ) -> list[PollResponseRecord]: ...
    async def get_user_demographics(self, user_id: str) -> Optional[DemographicProfile]: ...
    async def create_response(self, poll_id: str, user_id: str, value: Any) -> PollResponseRecord: ...


# =============================================================================
# Provider Functions
# =============================================================================


@lru_cache
def get_response_store() -> ResponseStoreProtocol:
    """Get the process-wide response store."""
    from repositories.memory_repository import InMemoryResponseStore

    logger.info("response_store_initialized", backend="in_memory")
    return InMemoryResponseStore()
