"""Tests for the preferences endpoints."""

import pytest

from tests.factories import bearer, register


@pytest.fixture
def headers(client):
    token = register(client)["token"]
    client.cookies.clear()
    return bearer(token)


class TestGetPreferences:
    def test_requires_auth(self, client):
        assert client.get("/api/preferences").status_code == 401

    def test_defaults_on_first_access(self, client, headers):
        response = client.get("/api/preferences", headers=headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["theme"] == "system"
        assert data["language"] == "en"
        assert data["default_task_status"] == "todo"
        assert data["email_notifications"] == "enabled"
        assert data["weekly_digest"] == "disabled"
        assert data["plan"] == "free"
        assert data["stripe_subscription_id"] is None

    def test_repeated_reads_return_same_record(self, client, headers):
        first = client.get("/api/preferences", headers=headers).json()["data"]
        second = client.get("/api/preferences", headers=headers).json()["data"]
        assert first["id"] == second["id"]


class TestUpdatePreferences:
    def test_partial_update(self, client, headers):
        response = client.put(
            "/api/preferences",
            json={"theme": "dark", "timezone": "Europe/Lisbon"},
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Preferences updated successfully"
        data = response.json()["data"]
        assert data["theme"] == "dark"
        assert data["timezone"] == "Europe/Lisbon"
        assert data["language"] == "en"

    def test_invalid_value(self, client, headers):
        response = client.put("/api/preferences", json={"theme": "neon"}, headers=headers)

        assert response.status_code == 400
        assert response.json()["details"][0]["path"] == "theme"

    def test_billing_fields_are_ignored(self, client, headers):
        response = client.put(
            "/api/preferences",
            json={"plan": "enterprise", "stripe_customer_id": "cus_free_lunch", "theme": "light"},
            headers=headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["plan"] == "free"
        assert data["stripe_customer_id"] is None
        assert data["theme"] == "light"

    def test_empty_body_is_a_no_op(self, client, headers):
        before = client.get("/api/preferences", headers=headers).json()["data"]

        response = client.put("/api/preferences", json={}, headers=headers)

        assert response.status_code == 200
        assert response.json()["data"]["theme"] == before["theme"]
