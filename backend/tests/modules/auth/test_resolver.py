"""Tests for modules/auth/resolver.py."""

from typing import Optional

import pytest
from starlette.requests import Request

from modules.auth.repository import InMemoryUserRepository
from modules.auth.resolver import IdentityResolver, bearer_token_from_header, token_from_cookie


def make_request(headers: Optional[dict[str, str]] = None) -> Request:
    raw = [(key.lower().encode(), value.encode()) for key, value in (headers or {}).items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw})


class TestExtractors:
    def test_bearer_header(self):
        assert bearer_token_from_header(make_request({"Authorization": "Bearer abc"})) == "abc"

    def test_bearer_scheme_is_case_insensitive(self):
        assert bearer_token_from_header(make_request({"Authorization": "bearer abc"})) == "abc"

    def test_other_scheme_ignored(self):
        assert bearer_token_from_header(make_request({"Authorization": "Basic abc"})) is None

    def test_empty_bearer(self):
        assert bearer_token_from_header(make_request({"Authorization": "Bearer "})) is None

    def test_no_header(self):
        assert bearer_token_from_header(make_request()) is None

    def test_cookie(self):
        extract = token_from_cookie("auth")
        assert extract(make_request({"Cookie": "auth=xyz; other=1"})) == "xyz"
        assert extract(make_request({"Cookie": "other=1"})) is None


class TestIdentityResolver:
    @pytest.fixture
    def users(self):
        return InMemoryUserRepository()

    @pytest.fixture
    def user(self, users):
        return users.create({"email": "alice@example.com", "name": "Alice", "password": "hash"})

    @pytest.fixture
    def resolver(self, codec, users):
        return IdentityResolver(codec, users, [bearer_token_from_header, token_from_cookie("auth")])

    @pytest.mark.asyncio
    async def test_resolves_bearer_token(self, resolver, codec, user):
        token = codec.issue(user.to_principal())
        principal = await resolver.resolve(make_request({"Authorization": f"Bearer {token}"}))

        assert principal.id == user.id
        assert principal.email == "alice@example.com"
        assert "password" not in principal.model_dump()

    @pytest.mark.asyncio
    async def test_resolves_cookie_token(self, resolver, codec, user):
        token = codec.issue(user.to_principal())
        principal = await resolver.resolve(make_request({"Cookie": f"auth={token}"}))
        assert principal.id == user.id

    @pytest.mark.asyncio
    async def test_header_wins_over_cookie(self, resolver, codec, user):
        """The first extractor with a token wins; an invalid header is not rescued by the cookie."""
        token = codec.issue(user.to_principal())
        request = make_request({"Authorization": "Bearer garbage", "Cookie": f"auth={token}"})

        assert resolver.extract_token(request) == "garbage"
        assert await resolver.resolve(request) is None

    @pytest.mark.asyncio
    async def test_no_token(self, resolver):
        assert await resolver.resolve(make_request()) is None

    @pytest.mark.asyncio
    async def test_deleted_account(self, resolver, codec, users, user):
        token = codec.issue(user.to_principal())
        users.delete(user.id)
        assert await resolver.resolve(make_request({"Authorization": f"Bearer {token}"})) is None
