"""
Tests for poll statistics and insight endpoints.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.integration
class TestPollStatsEndpoint:
    """Test GET /polls/{poll_id}/stats."""

    async def test_stats(self, client: AsyncClient, seed) -> None:
        seed("poll-num", [10, 20, 30, 40, 50, 60, 70, 80, 90, 100])

        response = await client.get("/api/v1/polls/poll-num/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 10
        assert data["distribution"]["values"] == [1, 2, 2, 2, 3]
        assert data["mean"] == 55.0
        assert data["median"] == 50.0
        assert data["mode"] is None

    async def test_empty_poll(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/polls/poll-choice/stats")

        assert response.status_code == 200
        assert response.json()["count"] == 0
        assert response.json()["distribution"] == {"labels": [], "values": []}

    async def test_demographic_filter(self, client: AsyncClient, seed) -> None:
        seed("poll-bool", [True, True], gender="female")
        seed("poll-bool", [False], gender="male")

        response = await client.get("/api/v1/polls/poll-bool/stats", params={"gender": "male"})

        assert response.status_code == 200
        assert response.json()["count"] == 1
        assert response.json()["distribution"]["values"] == [0, 1]

    async def test_invalid_filter_value(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/polls/poll-bool/stats", params={"age_range": "12-17"})

        assert response.status_code == 422

    async def test_unknown_poll(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/polls/missing/stats")

        assert response.status_code == 404
        assert response.json()["detail"] == "Poll not found"


@pytest.mark.integration
class TestInsightEndpoints:
    """Test global and personalized insight endpoints."""

    async def test_global_insights(self, client: AsyncClient, seed) -> None:
        seed("poll-bool", [True] * 7 + [False] * 3)

        response = await client.get("/api/v1/polls/poll-bool/insights")

        assert response.status_code == 200
        assert [i["text"] for i in response.json()] == [
            '70% of all respondents said "Yes".',
            '"No" was chosen by 30% of respondents.',
        ]

    async def test_global_insights_unknown_poll(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/polls/missing/insights")

        assert response.status_code == 404

    async def test_personalized_insights(self, client: AsyncClient, seed) -> None:
        seed("poll-choice", ["o1"] * 5 + ["o2"] * 3 + ["o3"] * 2)

        response = await client.post(
            "/api/v1/polls/poll-choice/insights/personalized",
            json={"value": "o3"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data[0]["text"] == 'You answered "Fish". So did 20% of respondents.'
        assert all(item["is_comparison"] for item in data)

    async def test_personalized_without_answer(self, client: AsyncClient, seed) -> None:
        seed("poll-bool", [True] * 10)

        response = await client.post("/api/v1/polls/poll-bool/insights/personalized", json={})

        assert response.status_code == 200
        assert response.json() == []

    async def test_personalized_first_respondents(self, client: AsyncClient, seed) -> None:
        seed("poll-bool", [True, False])

        response = await client.post(
            "/api/v1/polls/poll-bool/insights/personalized",
            json={"value": True, "user_id": "user-complete"},
        )

        data = response.json()
        assert len(data) == 1
        assert data[0]["is_comparison"] is False


@pytest.mark.integration
class TestSubmitResponseEndpoint:
    """Test POST /polls/{poll_id}/responses."""

    async def test_submit_once(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/polls/poll-bool/responses",
            json={"user_id": "user-complete", "value": True},
        )

        assert response.status_code == 201
        assert response.json()["success"] is True
        assert response.json()["poll_id"] == "poll-bool"

        stats = await client.get("/api/v1/polls/poll-bool/stats", params={"region": "Europe"})
        assert stats.json()["count"] == 1

    async def test_duplicate_conflict(self, client: AsyncClient) -> None:
        payload = {"user_id": "user-1", "value": "o1"}
        await client.post("/api/v1/polls/poll-choice/responses", json=payload)

        response = await client.post("/api/v1/polls/poll-choice/responses", json=payload)

        assert response.status_code == 409
        assert response.json()["detail"] == "You have already responded to this poll."

    async def test_unknown_poll(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/polls/missing/responses",
            json={"user_id": "user-1", "value": True},
        )

        assert response.status_code == 404

    async def test_missing_user_id(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/polls/poll-bool/responses", json={"value": True})

        assert response.status_code == 422
