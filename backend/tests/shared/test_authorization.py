"""Tests for shared/authorization.py."""

from dataclasses import dataclass

import pytest

from shared.authorization import Authorization, ResourceAuthorizer, authorize
from shared.exceptions import AuthorizationError, NotFoundError
from shared.models import Principal


@dataclass
class Note:
    id: int
    user_id: str


class NoteNotFound(NotFoundError):
    def __init__(self, note_id):
        super().__init__("Note not found", code="NOTE_NOT_FOUND", details={"note_id": note_id})


class NoteForbidden(AuthorizationError):
    def __init__(self, note_id):
        super().__init__("Forbidden", code="NOTE_FORBIDDEN", details={"note_id": note_id})


class TestAuthorize:
    def test_missing_resource(self):
        assert authorize("user-1", None) is Authorization.NOT_FOUND

    def test_other_owner(self):
        assert authorize("user-1", Note(id=1, user_id="user-2")) is Authorization.FORBIDDEN

    def test_owner(self):
        assert authorize("user-1", Note(id=1, user_id="user-1")) is Authorization.ALLOWED


class TestResourceAuthorizer:
    @pytest.fixture
    def authorizer(self):
        return ResourceAuthorizer(NoteNotFound, NoteForbidden)

    def test_authorize_with_principal(self, authorizer):
        principal = Principal(id="user-1", email="alice@example.com")
        assert authorizer.authorize(principal, Note(id=1, user_id="user-1")) is Authorization.ALLOWED

    def test_ensure_allowed_returns_resource(self, authorizer):
        note = Note(id=1, user_id="user-1")
        assert authorizer.ensure_allowed("user-1", note, 1) is note

    def test_ensure_allowed_not_found(self, authorizer):
        with pytest.raises(NoteNotFound) as exc_info:
            authorizer.ensure_allowed("user-1", None, 7)
        assert exc_info.value.details == {"note_id": 7}
        assert exc_info.value.status_code == 404

    def test_ensure_allowed_forbidden(self, authorizer):
        """Existence is checked first, so another user's resource is 403, not 404."""
        with pytest.raises(NoteForbidden) as exc_info:
            authorizer.ensure_allowed("user-1", Note(id=7, user_id="user-2"), 7)
        assert exc_info.value.status_code == 403
