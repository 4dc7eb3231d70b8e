"""Tests for api/errors.py: every failure leaves the API as a failure envelope."""

import pytest
from fastapi.testclient import TestClient

from api import create_app
from api.dependencies import get_task_service
from shared.exceptions import NotFoundError

from tests.factories import bearer, register


@pytest.fixture
def failing_app(container):
    """A fresh app with extra routes that fail in controlled ways."""
    app = create_app()

    @app.get("/api/_boom")
    async def boom():
        raise RuntimeError("database password is hunter2")

    @app.get("/api/_missing")
    async def missing():
        raise NotFoundError("Widget not found", code="WIDGET_NOT_FOUND", details={"widget_id": 3})

    return app


class TestErrorEnvelopes:
    def test_unhandled_exception_is_generic_500(self, failing_app):
        client = TestClient(failing_app, raise_server_exceptions=False)
        response = client.get("/api/_boom")

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Internal server error"
        assert "hunter2" not in response.text
        assert "data" not in body

    def test_domain_error(self, failing_app):
        response = TestClient(failing_app).get("/api/_missing")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": "Widget not found",
            "code": "WIDGET_NOT_FOUND",
            "status_code": 404,
            "details": {"widget_id": 3},
        }

    def test_unknown_route(self, client):
        response = client.get("/api/does-not-exist")
        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_unauthorized_has_no_reason(self, client):
        response = client.get("/api/tasks")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        body = response.json()
        assert body["error"] == "Unauthorized"
        assert body["code"] == "UNAUTHORIZED"

    def test_validation_error_lists_fields(self, client):
        token = register(client)["token"]
        response = client.post("/api/tasks", json={"title": "", "status": "bogus"}, headers=bearer(token))

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation failed"
        assert body["code"] == "VALIDATION_ERROR"
        assert sorted(issue["path"] for issue in body["details"]) == ["status", "title"]

    def test_malformed_json(self, client):
        token = register(client)["token"]
        response = client.post(
            "/api/tasks",
            content="{not json",
            headers={**bearer(token), "Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_service_errors_are_not_leaked(self, client):
        """A crashing service still yields the generic envelope."""

        class BrokenTaskService:
            async def list_tasks(self, user_id):
                raise KeyError("internal detail")

        token = register(client)["token"]
        client.app.dependency_overrides[get_task_service] = lambda: BrokenTaskService()
        quiet_client = TestClient(client.app, raise_server_exceptions=False)

        response = quiet_client.get("/api/tasks", headers=bearer(token))

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"
        assert "internal detail" not in response.text
