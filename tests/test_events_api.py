"""Tests for event logging endpoints."""

from datetime import timedelta
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def profile_id(client: TestClient) -> str:
    response = client.post("/api/v1/profiles/", json={"name": "Mia"})
    return response.json()["id"]


@pytest.fixture
def vomit_type(client: TestClient) -> dict:
    response = client.post("/api/v1/custom-event-types/", json={"name": "Vomit", "emoji": "🤮"})
    return response.json()


class TestCustomEventTypes:
    """Tests for custom event type endpoints."""

    def test_create_and_list(self, client: TestClient, vomit_type):
        assert vomit_type["name"] == "Vomit"
        assert vomit_type["emoji"] == "🤮"

        response = client.get("/api/v1/custom-event-types/")
        assert response.status_code == 200
        assert [item["emoji"] for item in response.json()] == ["🤮"]

    def test_duplicate_emoji_conflicts(self, client: TestClient, vomit_type):
        response = client.post("/api/v1/custom-event-types/", json={"name": "Spit up", "emoji": "🤮"})
        assert response.status_code == 409

    def test_delete(self, client: TestClient, vomit_type):
        response = client.delete(f"/api/v1/custom-event-types/{vomit_type['id']}")
        assert response.status_code == 204
        assert client.get("/api/v1/custom-event-types/").json() == []

    def test_delete_not_found(self, client: TestClient):
        response = client.delete(f"/api/v1/custom-event-types/{uuid4()}")
        assert response.status_code == 404


class TestFeeds:
    """Tests for feed endpoints."""

    def test_create_feed(self, client: TestClient, profile_id, base_time):
        response = client.post(
            "/api/v1/events/feeds/",
            json={
                "profile_id": profile_id,
                "start_time": base_time.isoformat(),
                "end_time": (base_time + timedelta(minutes=20)).isoformat(),
                "amount_value": 4,
                "amount_unit_symbol": "fl oz",
                "memo_text": "New bottle #BrandA #night",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["amount_unit_symbol"] == "fl oz"
        assert data["hashtags"] == ["branda", "night"]

    def test_end_before_start_rejected(self, client: TestClient, profile_id, base_time):
        response = client.post(
            "/api/v1/events/feeds/",
            json={
                "profile_id": profile_id,
                "start_time": base_time.isoformat(),
                "end_time": (base_time - timedelta(minutes=5)).isoformat(),
            },
        )
        assert response.status_code == 422

    def test_unknown_unit_rejected(self, client: TestClient, profile_id, base_time):
        response = client.post(
            "/api/v1/events/feeds/",
            json={
                "profile_id": profile_id,
                "start_time": base_time.isoformat(),
                "amount_value": 1,
                "amount_unit_symbol": "cups",
            },
        )
        assert response.status_code == 422

    def test_unknown_profile(self, client: TestClient, base_time):
        response = client.post(
            "/api/v1/events/feeds/",
            json={"profile_id": str(uuid4()), "start_time": base_time.isoformat()},
        )
        assert response.status_code == 404

    def test_list_feeds_in_range(self, client: TestClient, profile_id, base_time):
        for hours in (0, 2, 30):
            client.post(
                "/api/v1/events/feeds/",
                json={
                    "profile_id": profile_id,
                    "start_time": (base_time + timedelta(hours=hours)).isoformat(),
                },
            )

        response = client.get(
            "/api/v1/events/feeds/",
            params={
                "profile_id": profile_id,
                "start": base_time.isoformat(),
                "end": (base_time + timedelta(days=1)).isoformat(),
            },
        )
        assert response.status_code == 200
        assert len(response.json()) == 2

    def test_soft_delete(self, client: TestClient, profile_id, base_time):
        feed = client.post(
            "/api/v1/events/feeds/",
            json={"profile_id": profile_id, "start_time": base_time.isoformat()},
        ).json()

        response = client.delete(f"/api/v1/events/feeds/{feed['id']}")
        assert response.status_code == 204
        assert client.get("/api/v1/events/feeds/", params={"profile_id": profile_id}).json() == []

        # Deleting again finds nothing
        assert client.delete(f"/api/v1/events/feeds/{feed['id']}").status_code == 404


class TestDiaperChanges:
    """Tests for diaper change endpoints."""

    def test_create_and_list(self, client: TestClient, profile_id, base_time):
        response = client.post(
            "/api/v1/events/diapers/",
            json={
                "profile_id": profile_id,
                "timestamp": base_time.isoformat(),
                "diaper_type": "poo",
                "memo_text": "#Rash again",
            },
        )
        assert response.status_code == 201
        assert response.json()["diaper_type"] == "poo"
        assert response.json()["hashtags"] == ["rash"]

        listed = client.get("/api/v1/events/diapers/", params={"profile_id": profile_id}).json()
        assert len(listed) == 1

    def test_invalid_type_rejected(self, client: TestClient, profile_id, base_time):
        response = client.post(
            "/api/v1/events/diapers/",
            json={"profile_id": profile_id, "timestamp": base_time.isoformat(), "diaper_type": "both"},
        )
        assert response.status_code == 422


class TestCustomEvents:
    """Tests for custom event endpoints."""

    def test_event_copies_type(self, client: TestClient, profile_id, vomit_type, base_time):
        response = client.post(
            "/api/v1/events/custom/",
            json={
                "profile_id": profile_id,
                "timestamp": base_time.isoformat(),
                "event_type_emoji": "🤮",
                "memo_text": "#mild",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["event_type_name"] == "Vomit"
        assert data["event_type_emoji"] == "🤮"
        assert data["hashtags"] == ["mild"]

    def test_unknown_type(self, client: TestClient, profile_id, base_time):
        response = client.post(
            "/api/v1/events/custom/",
            json={"profile_id": profile_id, "timestamp": base_time.isoformat(), "event_type_emoji": "🛁"},
        )
        assert response.status_code == 404

    def test_filter_by_type(self, client: TestClient, profile_id, vomit_type, base_time):
        client.post("/api/v1/custom-event-types/", json={"name": "Bath", "emoji": "🛁"})
        for emoji in ("🤮", "🛁", "🤮"):
            client.post(
                "/api/v1/events/custom/",
                json={"profile_id": profile_id, "timestamp": base_time.isoformat(), "event_type_emoji": emoji},
            )

        response = client.get("/api/v1/events/custom/", params={"event_type_emoji": "🤮"})
        assert len(response.json()) == 2

    def test_unknown_kind_on_delete(self, client: TestClient):
        response = client.delete(f"/api/v1/events/sleeps/{uuid4()}")
        assert response.status_code == 404
