"""
Verification status poller.

Client side of the polling contract: ask the status endpoint on a fixed
interval until it stops reporting pending, and give up after a bounded
number of attempts or once the token itself has expired.

A 404 means the token is no longer open, which is how a completed
verification looks from outside. The caller then re-authenticates to
pick up the new verification state.
"""

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable, Optional

import httpx

from shared.clock import Clock, utcnow

from .exceptions import PollerError
from .models import PollResult, StatusResponse

logger = logging.getLogger(__name__)

STATUS_PATH = "/auth/verification-status/{token}"


class VerificationPoller:
    """Polls verification status over HTTP."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        interval_seconds: float = 3.0,
        max_attempts: int = 200,
        clock: Clock = utcnow,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._client = client
        self._interval = interval_seconds
        self._max_attempts = max_attempts
        self._clock = clock
        self._sleep = sleep

    async def fetch_status(self, token: str) -> Optional[StatusResponse]:
        """
        One status request.

        Returns:
            The status, or None if the token is no longer open

        Raises:
            PollerError: On any response other than 200 or 404
        """
        response = await self._client.get(STATUS_PATH.format(token=token))
        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise PollerError(response.status_code)
        return StatusResponse.model_validate(response.json())

    async def poll(self, token: str, expires_at: Optional[datetime] = None) -> PollResult:
        """
        Poll until the token stops being pending.

        Args:
            token: Token returned by generate-verification
            expires_at: Token expiry; polling stops once it is reached
        """
        last: Optional[StatusResponse] = None

        for attempt in range(1, self._max_attempts + 1):
            if expires_at is not None and self._clock() >= expires_at:
                logger.info(f"Stopped polling {token[:8]}: token expired")
                return PollResult(
                    completed=False, attempts=attempt - 1, timed_out=True, last_status=last
                )

            status = await self.fetch_status(token)
            if status is None or not status.pending:
                return PollResult(completed=True, attempts=attempt, last_status=status or last)

            last = status
            if expires_at is None:
                expires_at = status.expires_at
            if attempt < self._max_attempts:
                await self._sleep(self._interval)

        logger.info(f"Stopped polling {token[:8]}: {self._max_attempts} attempts")
        return PollResult(
            completed=False, attempts=self._max_attempts, timed_out=True, last_status=last
        )
