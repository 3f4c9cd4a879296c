"""
Integration tests for reading lookup endpoints.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from app.db.models import Profile


@pytest.mark.integration
class TestGetReadingEndpoint:
    """Tests for GET /api/readings/{userId}."""

    def test_unknown_id_returns_404(self, client):
        response = client.get(f"/api/readings/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "Reading not found"

    def test_malformed_id_returns_404(self, client):
        response = client.get("/api/readings/not-a-real-id")

        assert response.status_code == 404
        assert response.json()["error"] == "Reading not found"

    def test_returns_persisted_sections(self, client, birth_details):
        created = client.post("/api/users", json=birth_details).json()["data"]

        response = client.get(f"/api/readings/{created['userId']}")

        assert response.status_code == 200
        reading = response.json()
        assert reading["userId"] == created["userId"]
        assert reading["kundaliInsights"] == created["reading"]["kundaliInsights"]
        assert reading["recommendations"] == created["reading"]["recommendations"]
        assert reading["spiritualGuidance"] == created["reading"]["spiritualGuidance"]
        assert "createdAt" in reading

    def test_end_to_end_example(self, client, birth_details, fake_generator):
        fake_generator.error = TimeoutError("provider timed out")

        create_response = client.post("/api/users", json=birth_details)
        assert create_response.status_code == 201
        user_id = create_response.json()["data"]["userId"]

        response = client.get(f"/api/readings/{user_id}")

        assert response.status_code == 200
        reading = response.json()
        for section in ("kundaliInsights", "recommendations", "spiritualGuidance"):
            assert isinstance(reading[section], str)
            assert reading[section]
        for value in ("Asha", "1990-04-12", "14:30", "Mysore", "Karnataka"):
            assert value in reading["kundaliInsights"]


@pytest.mark.integration
class TestLatestReadingEndpoint:
    """Tests for GET /api/latest-reading."""

    def test_no_profiles_returns_404(self, client):
        response = client.get("/api/latest-reading")

        assert response.status_code == 404
        assert "error" in response.json()

    def test_returns_most_recent_profile(self, client, birth_details, fake_generator, test_db):
        first_id = client.post("/api/users", json=birth_details).json()["data"]["userId"]
        fake_generator.response = "Section 1: Ravi chart\nSection 2: Ravi remedies\nSection 3: Ravi practice"
        second_id = client.post("/api/users", json={**birth_details, "name": "Ravi"}).json()["data"]["userId"]
        # Pin P1 clearly earlier than P2
        first = test_db.get(Profile, uuid.UUID(first_id))
        first.created_at = datetime.now(timezone.utc) - timedelta(days=1)
        test_db.commit()

        response = client.get("/api/latest-reading")

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["id"] == second_id
        assert body["user"]["name"] == "Ravi"
        assert body["reading"]["kundaliInsights"] == "Ravi chart"
        assert body["reading"]["recommendations"] == "Ravi remedies"
        assert body["reading"]["spiritualGuidance"] == "Ravi practice"
        assert "createdAt" in body["reading"]

    def test_profile_without_reading_returns_404(self, client, test_db):
        test_db.add(
            Profile(
                name="Orphan",
                date_of_birth=datetime(1991, 1, 1).date(),
                time_of_birth="06:00",
                gender="male",
                state="Kerala",
                city="Kochi",
                created_at=datetime.now(timezone.utc),
            )
        )
        test_db.commit()

        response = client.get("/api/latest-reading")

        assert response.status_code == 404
        assert response.json()["error"] == "Reading not found"
