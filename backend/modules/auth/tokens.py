"""
Credential token codec.

Mints and verifies HS256 JWTs carrying the principal id as ``sub`` plus
issuer, audience, issued-at and expiry claims. Secret, issuer and audience
are injected at construction; nothing is read from the environment here.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from shared.models import Principal

from .models import TokenPayload

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    """
    Issue and verify signed, time-bound identity tokens.

    verify() collapses every failure (bad signature, expired, wrong issuer
    or audience, malformed, missing subject) into None.
    """

    ALGORITHM = "HS256"

    def __init__(
        self,
        secret: str,
        issuer: str,
        audience: str,
        expires_in: timedelta = timedelta(days=7),
        clock: Optional[Clock] = None,
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._issuer = issuer
        self._audience = audience
        self._expires_in = expires_in
        self._clock = clock or _utc_now

    @property
    def expires_in(self) -> timedelta:
        return self._expires_in

    def issue(self, principal: Principal) -> str:
        """
        Mint a token for a principal.

        Args:
            principal: The authenticated user

        Returns:
            Encoded JWT string
        """
        now = self._clock()
        payload = TokenPayload(
            sub=principal.id,
            email=principal.email,
            iss=self._issuer,
            aud=self._audience,
            iat=int(now.timestamp()),
            exp=int((now + self._expires_in).timestamp()),
        )
        return jwt.encode(payload.model_dump(exclude_none=True), self._secret, algorithm=self.ALGORITHM)

    def verify(self, token: Optional[str]) -> Optional[str]:
        """
        Verify a token and return its subject.

        Args:
            token: Encoded JWT, possibly None or empty

        Returns:
            The principal id, or None if the token is not valid
        """
        if not token:
            return None

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.ALGORITHM],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": ["exp", "iat", "iss", "aud", "sub"]},
            )
        except jwt.PyJWTError as e:
            logger.debug(f"Token rejected: {type(e).__name__}")
            return None

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            return None
        return subject
