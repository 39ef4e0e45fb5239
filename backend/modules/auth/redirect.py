"""
Redirect Bridge.

When a user logs in on an origin that is not their home, the session
credential is handed to the home origin through a one-time redirect URL:

    https://acme.barida.xyz/auth/callback?session=<jwt>&user=<json>&bid=<nonce>

There is no shared session store between origins, so the URL carries the
credential itself. The receiving side consumes it exactly once with
BootstrapConsumer, keeps the session, and replaces the visible URL with
the scrubbed one so a reload cannot process it again.
"""

import json
import logging
import secrets
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from modules.accounts import User
from shared.clock import Clock, utcnow

from .exceptions import (
    BootstrapAlreadyConsumedError,
    InvalidBootstrapError,
    InvalidSessionError,
    ExpiredSessionError,
)
from .models import BootstrapPayload, IssuedSession
from .sessions import SessionCodec

logger = logging.getLogger(__name__)

SESSION_PARAM = "session"
USER_PARAM = "user"
BOOTSTRAP_ID_PARAM = "bid"
BOOTSTRAP_PARAMS = (SESSION_PARAM, USER_PARAM, BOOTSTRAP_ID_PARAM)


def user_bootstrap_summary(user: User, requires_biometric: bool) -> dict[str, Any]:
    """The minimal user data the receiving origin needs before its first API call."""
    return {
        "id": user.id,
        "username": user.username,
        "role": user.role.value,
        "tenantRef": user.tenant_ref,
        "requiresBiometric": requires_biometric,
    }


class RedirectBridge:
    """Builds one-time redirect URLs to a user's home origin."""

    def __init__(self, bootstrap_path: str = "/auth/callback"):
        self.bootstrap_path = "/" + bootstrap_path.lstrip("/")

    def build(
        self,
        home_origin: str,
        session: IssuedSession,
        user: User,
        requires_biometric: bool,
    ) -> str:
        query = urlencode(
            {
                SESSION_PARAM: session.token,
                USER_PARAM: json.dumps(
                    user_bootstrap_summary(user, requires_biometric),
                    separators=(",", ":"),
                ),
                BOOTSTRAP_ID_PARAM: secrets.token_urlsafe(16),
            }
        )
        return f"{home_origin.rstrip('/')}{self.bootstrap_path}?{query}"


def scrub_bootstrap_params(url: str) -> str:
    """Remove the bootstrap parameters from a URL, keeping everything else."""
    parts = urlsplit(url)
    kept = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in BOOTSTRAP_PARAMS
    ]
    return urlunsplit(parts._replace(query=urlencode(kept)))


class BootstrapConsumer:
    """
    Receiving side of the Redirect Bridge.

    Each bootstrap id is accepted once per consumer; the URL parameters
    are never treated as a reusable credential. An id is remembered until
    the session it carried expires, after which the session itself no
    longer verifies.
    """

    def __init__(self, codec: SessionCodec, clock: Clock = utcnow):
        self._codec = codec
        self._clock = clock
        # bootstrap id -> exp of the session it carried
        self._consumed: dict[str, int] = {}

    def _forget_expired(self) -> None:
        now = int(self._clock().timestamp())
        expired = [bid for bid, exp in self._consumed.items() if exp <= now]
        for bid in expired:
            del self._consumed[bid]

    def __len__(self) -> int:
        return len(self._consumed)

    def consume(self, url: str) -> tuple[BootstrapPayload, str]:
        """
        Extract the session from a bootstrap URL.

        Returns:
            The payload and the URL with bootstrap parameters removed

        Raises:
            InvalidBootstrapError: If parameters are missing or do not verify
            BootstrapAlreadyConsumedError: If this URL was already processed
        """
        params = dict(parse_qsl(urlsplit(url).query))
        missing = [name for name in BOOTSTRAP_PARAMS if not params.get(name)]
        if missing:
            raise InvalidBootstrapError(f"missing {', '.join(missing)}")

        self._forget_expired()
        bootstrap_id = params[BOOTSTRAP_ID_PARAM]
        if bootstrap_id in self._consumed:
            raise BootstrapAlreadyConsumedError()

        try:
            claims = self._codec.decode(params[SESSION_PARAM])
        except (InvalidSessionError, ExpiredSessionError) as e:
            raise InvalidBootstrapError(e.message)

        try:
            user = json.loads(params[USER_PARAM])
        except json.JSONDecodeError:
            raise InvalidBootstrapError("malformed user summary")
        if not isinstance(user, dict) or user.get("id") != claims.sub:
            raise InvalidBootstrapError("user summary does not match session")

        self._consumed[bootstrap_id] = claims.exp
        logger.info(f"Session bootstrap consumed for {claims.username}")

        payload = BootstrapPayload(
            session_credential=params[SESSION_PARAM],
            claims=claims,
            user=user,
        )
        return payload, scrub_bootstrap_params(url)
