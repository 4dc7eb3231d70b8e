"""Fixtures for client tests: a client talking to the in-memory API in-process."""

import httpx
import pytest
import pytest_asyncio

from api import app
from client import ApiClient, Notifier, QueryCache

from tests.factories import register


@pytest.fixture
def token(client):
    data = register(client)
    client.cookies.clear()
    return data["token"]


@pytest_asyncio.fixture
async def api(token):
    transport = httpx.ASGITransport(app=app)
    async with ApiClient("http://testserver/api", token=token, transport=transport) as api:
        yield api


@pytest.fixture
def cache():
    return QueryCache(stale_time=60.0)


@pytest.fixture
def notifier():
    return Notifier()
