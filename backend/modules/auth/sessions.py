"""
Session credential codec.

Signs and verifies the stateless JWT that proves a user's identity, role
and tenant. Validity is decided by signature and expiry alone.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from modules.accounts import User
from shared.clock import Clock, utcnow
from shared.exceptions import ConfigurationError

from .exceptions import ExpiredSessionError, InvalidSessionError, MissingSessionError
from .models import IssuedSession, SessionClaims


class SessionCodec:
    """Issues and validates session credentials."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        audience: str = "barida-session",
        issuer: str = "barida-identity",
        ttl: timedelta = timedelta(hours=8),
        clock: Clock = utcnow,
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._audience = audience
        self._issuer = issuer
        self._ttl = ttl
        self._clock = clock

    def _require_secret(self) -> str:
        if not self._secret:
            raise ConfigurationError(
                "Server authentication not configured",
                code="SESSION_SECRET_MISSING",
            )
        return self._secret

    def issue(self, user: User) -> IssuedSession:
        """Sign a credential carrying the user's identity, role and tenant."""
        secret = self._require_secret()
        now = self._clock()
        claims = SessionClaims(
            sub=user.id,
            username=user.username,
            role=user.role.value,
            tenant_ref=user.tenant_ref,
            iat=int(now.timestamp()),
            exp=int((now + self._ttl).timestamp()),
            aud=self._audience,
            iss=self._issuer,
        )
        token = jwt.encode(claims.model_dump(), secret, algorithm=self._algorithm)
        return IssuedSession(token=token, claims=claims)

    def decode(self, token: Optional[str]) -> SessionClaims:
        """
        Verify a credential and return its claims.

        Raises:
            MissingSessionError: If no token was given
            ExpiredSessionError: If the token has expired
            InvalidSessionError: If the signature, audience or shape is wrong
        """
        if not token:
            raise MissingSessionError()

        secret = self._require_secret()
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": ["exp", "iat", "sub"]},
            )
            claims = SessionClaims(**payload)
        except jwt.ExpiredSignatureError:
            raise ExpiredSessionError()
        except (jwt.InvalidTokenError, ValueError):
            raise InvalidSessionError()

        # PyJWT only checks the wall clock
        if claims.exp <= int(self._clock().timestamp()):
            raise ExpiredSessionError()
        return claims

    @staticmethod
    def expires_at(claims: SessionClaims) -> datetime:
        return datetime.fromtimestamp(claims.exp, tz=timezone.utc)
