"""
Resource authorization.

Every user-scoped resource carries a ``user_id``. Authorization is a pure
comparison between the resolved principal and the freshly loaded resource;
it never consults client-side state.

Existence is checked before ownership: a missing resource is NOT_FOUND,
an existing resource owned by someone else is FORBIDDEN.
"""

from enum import Enum
from typing import Any, Callable, Optional, Protocol, TypeVar

from .exceptions import AuthorizationError, NotFoundError
from .models import Principal


class OwnedResource(Protocol):
    """Anything that belongs to exactly one user."""

    user_id: str


ResourceT = TypeVar("ResourceT", bound=OwnedResource)


class Authorization(str, Enum):
    """Outcome of an authorization check."""

    ALLOWED = "allowed"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"


def authorize(principal_id: str, resource: Optional[OwnedResource]) -> Authorization:
    """
    Decide whether a principal may act on a resource.

    Args:
        principal_id: ID of the authenticated principal
        resource: The resource as loaded from storage, or None if absent

    Returns:
        ALLOWED, FORBIDDEN or NOT_FOUND
    """
    if resource is None:
        return Authorization.NOT_FOUND
    if resource.user_id != principal_id:
        return Authorization.FORBIDDEN
    return Authorization.ALLOWED


class ResourceAuthorizer:
    """
    Converts authorization outcomes into domain exceptions.

    Services pass their module-specific exception classes (called with the
    resource id) so the error codes stay meaningful, e.g. TASK_NOT_FOUND.
    """

    def __init__(
        self,
        not_found: Callable[[Any], NotFoundError],
        forbidden: Callable[[Any], AuthorizationError],
    ) -> None:
        self._not_found = not_found
        self._forbidden = forbidden

    def authorize(self, principal: Principal, resource: Optional[OwnedResource]) -> Authorization:
        return authorize(principal.id, resource)

    def ensure_allowed(
        self,
        principal_id: str,
        resource: Optional[ResourceT],
        resource_id: Any,
    ) -> ResourceT:
        """
        Return the resource if the principal owns it.

        Raises:
            NotFoundError: If the resource does not exist
            AuthorizationError: If it exists but belongs to another user
        """
        outcome = authorize(principal_id, resource)
        if outcome is Authorization.NOT_FOUND:
            raise self._not_found(resource_id)
        if outcome is Authorization.FORBIDDEN:
            raise self._forbidden(resource_id)
        return resource  # type: ignore[return-value]
