"""Tests for modules/auth/service.py."""

from unittest.mock import MagicMock

import pytest

from modules.auth.exceptions import InvalidCredentialsError, UserExistsError, UserNotFoundError
from modules.auth.repository import InMemoryUserRepository
from modules.auth.service import AuthService, hash_password, verify_password
from modules.preferences.repository import InMemoryPreferenceRepository
from modules.tasks.repository import InMemoryTaskRepository


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("secret123", rounds=4)
        assert hashed != "secret123"
        assert verify_password("secret123", hashed) is True
        assert verify_password("wrong-password", hashed) is False

    def test_missing_hash_never_matches(self):
        assert verify_password("secret123", None) is False
        assert verify_password("secret123", "") is False

    def test_malformed_hash(self):
        assert verify_password("secret123", "not-a-bcrypt-hash") is False

    def test_long_passwords_are_truncated_to_72_bytes(self):
        hashed = hash_password("a" * 100, rounds=4)
        assert verify_password("a" * 72, hashed) is True


class TestAuthService:
    @pytest.fixture
    def users(self):
        return InMemoryUserRepository()

    @pytest.fixture
    def tasks(self):
        return InMemoryTaskRepository()

    @pytest.fixture
    def preferences(self):
        return InMemoryPreferenceRepository()

    @pytest.fixture
    def service(self, users, codec, tasks, preferences):
        return AuthService(users, codec, tasks, preferences, password_rounds=4)

    @pytest.mark.asyncio
    async def test_register_returns_principal_and_token(self, service, codec, users):
        result = await service.register("Alice", "Alice@Example.com", "secret123")

        assert result.user.email == "alice@example.com"
        assert result.user.name == "Alice"
        assert codec.verify(result.token) == result.user.id
        stored = users.get_by_id(result.user.id)
        assert stored.password != "secret123"

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, service):
        await service.register("Alice", "alice@example.com", "secret123")
        with pytest.raises(UserExistsError) as exc_info:
            await service.register("Alice Again", "ALICE@example.com", "other-pass")
        assert exc_info.value.message == "User exists"
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_login(self, service, codec):
        registered = await service.register("Alice", "alice@example.com", "secret123")
        result = await service.login("alice@example.com", "secret123")

        assert result.user.id == registered.user.id
        assert codec.verify(result.token) == registered.user.id

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, service):
        await service.register("Alice", "alice@example.com", "secret123")
        with pytest.raises(InvalidCredentialsError):
            await service.login("alice@example.com", "wrong-password")

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, service):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await service.login("nobody@example.com", "secret123")
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_update_profile(self, service):
        registered = await service.register("Alice", "alice@example.com", "secret123")
        updated = await service.update_profile(registered.user.id, "Alice B.")
        assert updated.name == "Alice B."

    @pytest.mark.asyncio
    async def test_update_profile_unknown_user(self, service):
        with pytest.raises(UserNotFoundError):
            await service.update_profile("missing", "Name")

    @pytest.mark.asyncio
    async def test_delete_account_removes_owned_data(self, service, users, tasks, preferences):
        registered = await service.register("Alice", "alice@example.com", "secret123")
        user_id = registered.user.id
        tasks.create({"user_id": user_id, "title": "One", "status": "todo"})
        tasks.create({"user_id": user_id, "title": "Two", "status": "completed"})
        preferences.create(user_id, {})

        assert await service.delete_account(user_id) is True
        assert users.get_by_id(user_id) is None
        assert tasks.list_for_user(user_id) == []
        assert preferences.get_by_user(user_id) is None

    @pytest.mark.asyncio
    async def test_delete_account_keeps_other_users_data(self, service, tasks):
        alice = await service.register("Alice", "alice@example.com", "secret123")
        bob = await service.register("Bob", "bob@example.com", "secret123")
        tasks.create({"user_id": bob.user.id, "title": "Bob's", "status": "todo"})

        await service.delete_account(alice.user.id)
        assert len(tasks.list_for_user(bob.user.id)) == 1

    @pytest.mark.asyncio
    async def test_delete_account_reports_failure(self, users, codec, preferences):
        """A failing step stops the deletion and the user row survives."""
        tasks = MagicMock()
        tasks.delete_by_user.side_effect = RuntimeError("database unavailable")
        service = AuthService(users, codec, tasks, preferences, password_rounds=4)
        registered = await service.register("Alice", "alice@example.com", "secret123")

        assert await service.delete_account(registered.user.id) is False
        assert users.get_by_id(registered.user.id) is not None

    @pytest.mark.asyncio
    async def test_delete_account_unconfirmed(self, codec, tasks, preferences):
        """If the user row is still there afterwards, deletion is reported as failed."""
        users = MagicMock()
        users.get_by_id.return_value = MagicMock()
        service = AuthService(users, codec, tasks, preferences, password_rounds=4)

        assert await service.delete_account("user-1") is False
        users.delete.assert_called_once_with("user-1")
