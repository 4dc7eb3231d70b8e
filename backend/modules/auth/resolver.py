"""
Identity resolution for incoming requests.

A request may carry its credential token in the ``Authorization: Bearer``
header or in the auth cookie. Extractors are tried in order and the first
non-empty token wins; tokens from different sources are never merged.
"""

from typing import Callable, Optional, Sequence

from starlette.requests import HTTPConnection

from shared.models import Principal

from .interfaces import IUserRepository
from .tokens import TokenCodec

TokenExtractor = Callable[[HTTPConnection], Optional[str]]


def bearer_token_from_header(request: HTTPConnection) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    header = request.headers.get("authorization")
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def token_from_cookie(cookie_name: str) -> TokenExtractor:
    """Build an extractor reading the token from the named cookie."""

    def extract(request: HTTPConnection) -> Optional[str]:
        return request.cookies.get(cookie_name) or None

    return extract


class IdentityResolver:
    """
    Turn a request into the authenticated Principal, or None.

    Storage errors while loading the user propagate; only token problems
    and deleted accounts resolve to None.
    """

    def __init__(
        self,
        codec: TokenCodec,
        users: IUserRepository,
        extractors: Sequence[TokenExtractor],
    ) -> None:
        self._codec = codec
        self._users = users
        self._extractors = list(extractors)

    def extract_token(self, request: HTTPConnection) -> Optional[str]:
        for extractor in self._extractors:
            token = extractor(request)
            if token:
                return token
        return None

    async def resolve(self, request: HTTPConnection) -> Optional[Principal]:
        token = self.extract_token(request)
        if token is None:
            return None

        user_id = self._codec.verify(token)
        if user_id is None:
            return None

        user = self._users.get_by_id(user_id)
        if user is None:
            return None
        return user.to_principal()
