"""Tests for client/http.py."""

import json

import httpx
import pytest

from client.http import ApiClient, ApiRequestError, decode_envelope


def make_api(handler, token="tok_123"):
    return ApiClient("http://api.test/api", token=token, transport=httpx.MockTransport(handler))


class TestDecodeEnvelope:
    def test_success(self):
        response = httpx.Response(200, json={"success": True, "data": {"id": 1}, "message": "Done"})

        result = decode_envelope(response)

        assert result.data == {"id": 1}
        assert result.message == "Done"

    def test_failure(self):
        response = httpx.Response(
            400,
            json={
                "success": False,
                "error": "Validation failed",
                "code": "VALIDATION_ERROR",
                "status_code": 400,
                "details": [{"path": "title", "message": "String should have at least 1 character"}],
            },
        )

        with pytest.raises(ApiRequestError) as exc_info:
            decode_envelope(response)

        error = exc_info.value
        assert error.status_code == 400
        assert error.error == "Validation failed"
        assert error.code == "VALIDATION_ERROR"
        assert error.details[0]["path"] == "title"

    def test_failure_without_status_in_body(self):
        response = httpx.Response(403, json={"success": False, "error": "Forbidden"})

        with pytest.raises(ApiRequestError) as exc_info:
            decode_envelope(response)

        assert exc_info.value.status_code == 403

    @pytest.mark.parametrize("content", [b"<html>Bad gateway</html>", b"[1, 2]", b'{"data": 1}'])
    def test_not_an_envelope(self, content):
        response = httpx.Response(502, content=content)

        with pytest.raises(ApiRequestError, match="Invalid response from server"):
            decode_envelope(response)


class TestApiClient:
    @pytest.mark.asyncio
    async def test_sends_bearer_token(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"success": True, "data": []})

        async with make_api(handler) as api:
            await api.get_tasks()

        assert seen["auth"] == "Bearer tok_123"
        assert seen["url"] == "http://api.test/api/tasks"

    @pytest.mark.asyncio
    async def test_no_token_no_header(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"success": True, "data": {}})

        async with make_api(handler, token=None) as api:
            await api.get_preferences()

        assert seen["auth"] is None

    @pytest.mark.asyncio
    async def test_request_shapes(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content) if request.content else None
            calls.append((request.method, request.url.path, body))
            return httpx.Response(200, json={"success": True, "data": {"deleted_id": 7}})

        async with make_api(handler) as api:
            await api.create_task({"title": "New"})
            await api.update_task(7, {"status": "completed"})
            await api.delete_task(7)
            await api.update_preferences({"theme": "dark"})

        assert calls == [
            ("POST", "/api/tasks", {"title": "New"}),
            ("PATCH", "/api/tasks/7", {"status": "completed"}),
            ("DELETE", "/api/tasks/7", None),
            ("PUT", "/api/preferences", {"theme": "dark"}),
        ]

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_api(handler) as api:
            with pytest.raises(ApiRequestError) as exc_info:
                await api.get_tasks()

        assert exc_info.value.status_code == 0
        assert exc_info.value.code == "NETWORK_ERROR"
