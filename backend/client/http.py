"""
HTTP client for the Orion API.

Sends the bearer token on every request and unwraps the response envelope:
success envelopes yield an ApiResponse, failure envelopes raise
ApiRequestError with the server's error, code and details.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiRequestError(Exception):
    """A failure envelope (or an undecodable response) from the API."""

    def __init__(
        self,
        status_code: int,
        error: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        self.status_code = status_code
        self.error = error
        self.code = code
        self.details = details
        super().__init__(error)

    def __repr__(self) -> str:
        return f"ApiRequestError(status_code={self.status_code}, error={self.error!r}, code={self.code!r})"


@dataclass
class ApiResponse:
    data: Any
    message: Optional[str] = None


def decode_envelope(response: httpx.Response) -> ApiResponse:
    """Unwrap a response envelope, raising ApiRequestError for failures."""
    try:
        body = response.json()
    except ValueError:
        raise ApiRequestError(response.status_code, "Invalid response from server")

    if not isinstance(body, dict) or "success" not in body:
        raise ApiRequestError(response.status_code, "Invalid response from server")

    if body["success"] is not True:
        raise ApiRequestError(
            status_code=body.get("status_code") or response.status_code,
            error=body.get("error") or "Request failed",
            code=body.get("code"),
            details=body.get("details"),
        )
    return ApiResponse(data=body.get("data"), message=body.get("message"))


class ApiClient:
    """
    Async client for the Orion API.

    Usage:
        async with ApiClient("http://localhost:8000/api", token=token) as api:
            tasks = await api.get_tasks()
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self.token = token
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            transport=transport,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(self, method: str, path: str, json: Optional[Any] = None) -> ApiResponse:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = await self._client.request(method, path, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiRequestError(0, "Network error", code="NETWORK_ERROR") from e

        return decode_envelope(response)

    # Tasks

    async def get_tasks(self) -> ApiResponse:
        return await self.request("GET", "/tasks")

    async def create_task(self, payload: dict[str, Any]) -> ApiResponse:
        return await self.request("POST", "/tasks", json=payload)

    async def update_task(self, task_id: int, payload: dict[str, Any]) -> ApiResponse:
        return await self.request("PATCH", f"/tasks/{task_id}", json=payload)

    async def delete_task(self, task_id: int) -> ApiResponse:
        return await self.request("DELETE", f"/tasks/{task_id}")

    # Preferences

    async def get_preferences(self) -> ApiResponse:
        return await self.request("GET", "/preferences")

    async def update_preferences(self, payload: dict[str, Any]) -> ApiResponse:
        return await self.request("PUT", "/preferences", json=payload)
