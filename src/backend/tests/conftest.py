"""
Pytest fixtures for Pollsight backend tests.
"""

import os
from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment variables before importing app
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "false")

from repositories.memory_repository import InMemoryResponseStore  # noqa: E402
from schemas.demographics import DemographicProfile  # noqa: E402
from schemas.poll import Poll, PollOption  # noqa: E402
from schemas.response import PollResponseRecord  # noqa: E402


class FixedEstimator:
    """Subgroup estimator returning a constant share."""

    def __init__(self, share: int = 42):
        self.share = share
        self.calls: list[tuple[str, str, int]] = []

    def estimate_subgroup_share(self, dimension: str, group: str, user_percentage: int) -> int:
        self.calls.append((dimension, group, user_percentage))
        return self.share


@pytest.fixture
def fixed_estimator() -> FixedEstimator:
    return FixedEstimator()


@pytest.fixture
def boolean_poll() -> Poll:
    return Poll(id="poll-bool", type="boolean", question="Do you prefer dark mode?")


@pytest.fixture
def choice_poll() -> Poll:
    return Poll(
        id="poll-choice",
        type="choice",
        question="Cats or dogs?",
        options=[
            PollOption(id="o1", text="Cats"),
            PollOption(id="o2", text="Dogs"),
            PollOption(id="o3", text="Fish"),
        ],
    )


@pytest.fixture
def numeric_poll() -> Poll:
    return Poll(id="poll-num", type="numeric", question="How many hours do you sleep?", min_value=0, max_value=100)


@pytest.fixture
def complete_profile() -> DemographicProfile:
    return DemographicProfile(age_range="25-34", gender="female", region="Europe", occupation="Technology")


@pytest.fixture
async def store(boolean_poll: Poll, choice_poll: Poll, numeric_poll: Poll) -> InMemoryResponseStore:
    """In-memory store seeded with three polls and a few profiles."""
    repo = InMemoryResponseStore()
    for poll in (boolean_poll, choice_poll, numeric_poll):
        await repo.save_poll(poll)

    await repo.save_user_demographics(
        "user-complete",
        DemographicProfile(age_range="25-34", gender="female", region="Europe"),
    )
    await repo.save_user_demographics("user-partial", DemographicProfile(age_range="65+"))
    return repo


@pytest.fixture
def seed(store: InMemoryResponseStore):
    """Append records directly to the store, bypassing per-user uniqueness."""

    def _seed(poll_id: str, values: list[Any], **snapshot: Any) -> None:
        store._responses.setdefault(poll_id, []).extend(
            PollResponseRecord(value=value, **snapshot) for value in values
        )

    return _seed


@pytest.fixture
async def client(store: InMemoryResponseStore) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client bound to the seeded in-memory store."""
    from main import app
    from repositories.provider import get_response_store

    app.dependency_overrides[get_response_store] = lambda: store
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def sample_poll_row() -> dict[str, Any]:
    """A poll row as the remote store returns it."""
    return {
        "id": "row-poll-1",
        "creator_id": "creator-9",
        "question": "What is your favourite pet?",
        "description": "",
        "type": "choice",
        "created_at": "2024-03-01T12:00:00+00:00",
        "upvotes": 4,
        "response_count": 12,
        "is_active": True,
        "poll_options": [{"id": "o1", "text": "Cats"}, {"id": "o2", "text": "Dogs"}],
        "min_value": None,
        "max_value": None,
        "demographic_filters": ["age_range", "gender"],
        "category": None,
    }
