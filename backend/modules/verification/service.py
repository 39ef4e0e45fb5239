"""
Verification Handoff Protocol.

Per-user state machine:

    unverified --issue--> verification_pending --complete--> verified
                          verification_pending --issue--> verification_pending
    any state  --reset (authorized caller)--> unverified

Every mutation of a user's verification fields or of that user's tokens
runs under the user's lock, so issue/complete/reset for one user are
serialized while different users never contend.
"""

import logging
import secrets
from datetime import timedelta
from typing import Callable, Optional

from modules.accounts import (
    IUserRepository,
    UserNotFoundError,
    UserSummary,
    VerificationState,
)
from modules.authz import Action, Role, RoleAuthorizer, error_for
from shared.clock import Clock, utcnow
from shared.locks import KeyedLocks
from shared.models import AuthenticatedUser

from .exceptions import (
    MissingBiometricPayloadError,
    TokenAlreadyUsedError,
    TokenExpiredError,
    TokenNotFoundError,
    VerificationNotRequiredError,
)
from .interfaces import IVerificationService, IVerificationTokenStore
from .models import (
    CompleteResponse,
    IssueTokenResponse,
    StatusResponse,
    VerificationToken,
)

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


def _prefix(token: str) -> str:
    return token[:8]


class VerificationService(IVerificationService):
    """Implementation of the verification handoff protocol."""

    def __init__(
        self,
        users: IUserRepository,
        store: IVerificationTokenStore,
        authorizer: RoleAuthorizer,
        identity_origin: str,
        token_ttl: timedelta = timedelta(minutes=10),
        locks: Optional[KeyedLocks] = None,
        clock: Clock = utcnow,
        token_factory: Callable[[], str] = lambda: secrets.token_hex(TOKEN_BYTES),
    ):
        self._users = users
        self._store = store
        self._authorizer = authorizer
        self._identity_origin = identity_origin.rstrip("/")
        self._token_ttl = token_ttl
        self._locks = locks or KeyedLocks()
        self._clock = clock
        self._token_factory = token_factory

    def verification_url(self, token: str) -> str:
        """URL on the identity origin that the QR code points at."""
        return f"{self._identity_origin}/verify/{token}"

    async def issue_token(self, caller: AuthenticatedUser) -> IssueTokenResponse:
        user = await self._users.get_by_id(caller.id)
        if user is None:
            raise UserNotFoundError(caller.id)
        if user.role == Role.ADMIN:
            raise VerificationNotRequiredError("admins are exempt")
        if user.is_verified:
            raise VerificationNotRequiredError("already verified")

        async with self._locks.hold(user.id):
            # A completion may have committed while we waited for the lock
            user = await self._users.get_by_id(caller.id)
            if user is None:
                raise UserNotFoundError(caller.id)
            if user.is_verified:
                raise VerificationNotRequiredError("already verified")

            now = self._clock()
            superseded = await self._store.supersede_open(user.id)
            entry = await self._store.add(
                VerificationToken(
                    token=self._token_factory(),
                    user_id=user.id,
                    created_at=now,
                    expires_at=now + self._token_ttl,
                )
            )
            await self._users.update(
                user.id, {"verification_state": VerificationState.PENDING}
            )

        logger.info(
            f"Verification token {_prefix(entry.token)} issued for {user.username}"
            + (f" (superseded {superseded})" if superseded else "")
        )
        return IssueTokenResponse(
            verification_url=self.verification_url(entry.token),
            token=entry.token,
            expires_at=entry.expires_at,
        )

    async def _open_entry(self, token: str) -> VerificationToken:
        """
        Look up a token and require it to be open.

        Raises:
            TokenNotFoundError: Never issued, or superseded
            TokenAlreadyUsedError: Consumed by a completion
            TokenExpiredError: Past its expiry
        """
        entry = await self._store.get(token)
        if entry is None or entry.superseded:
            logger.warning(f"Rejected verification token {_prefix(token)}: not found")
            raise TokenNotFoundError()
        if entry.consumed_at is not None:
            logger.warning(f"Rejected verification token {_prefix(token)}: already used")
            raise TokenAlreadyUsedError()
        if entry.is_expired(self._clock()):
            logger.warning(f"Rejected verification token {_prefix(token)}: expired")
            raise TokenExpiredError()
        return entry

    async def check_status(self, token: str) -> StatusResponse:
        entry = await self._open_entry(token)
        user = await self._users.get_by_id(entry.user_id)
        if user is None:
            raise TokenNotFoundError()
        return StatusResponse(
            pending=not user.is_verified,
            username=user.username,
            expires_at=entry.expires_at,
        )

    async def complete_verification(
        self, token: str, photo_data: Optional[str]
    ) -> CompleteResponse:
        if not photo_data:
            raise MissingBiometricPayloadError()

        entry = await self._open_entry(token)

        async with self._locks.hold(entry.user_id):
            consumed = await self._store.consume(token, self._clock())
            if consumed is None:
                # Lost the race to another completion, a reset or a re-issue
                await self._open_entry(token)
                raise TokenAlreadyUsedError()

            user = await self._users.update(
                entry.user_id,
                {
                    "biometric_record": photo_data,
                    "verification_state": VerificationState.VERIFIED,
                    "requires_verification_on_next_login": False,
                },
            )
            if user is None:
                raise TokenNotFoundError()

        logger.info(f"Verification completed for {user.username}")
        return CompleteResponse(success=True, username=user.username)

    async def reset_verification(
        self, caller: AuthenticatedUser, user_id: str
    ) -> UserSummary:
        target = await self._users.get_by_id(user_id)
        if target is None:
            raise UserNotFoundError(user_id)

        decision = self._authorizer.check(
            Role(caller.role),
            caller.tenant_ref,
            target.role,
            target.tenant_ref,
            Action.RESET_VERIFICATION,
            is_self=caller.id == target.id,
        )
        if not decision.allowed:
            logger.warning(
                f"Verification reset denied: {caller.username} on {target.username}"
            )
            raise error_for(decision)

        async with self._locks.hold(target.id):
            await self._store.supersede_open(target.id)
            user = await self._users.update(
                target.id,
                {
                    "verification_state": VerificationState.UNVERIFIED,
                    "biometric_record": None,
                    "requires_verification_on_next_login": True,
                },
            )
            if user is None:
                raise UserNotFoundError(user_id)

        logger.info(f"Verification reset for {user.username} by {caller.username}")
        return UserSummary.from_user(user)
