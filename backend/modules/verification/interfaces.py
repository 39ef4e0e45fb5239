"""
Verification module interfaces.
"""

from datetime import datetime
from typing import Protocol, Optional, runtime_checkable

from modules.accounts import UserSummary
from shared.models import AuthenticatedUser

from .models import (
    CompleteResponse,
    IssueTokenResponse,
    StatusResponse,
    VerificationToken,
)


@runtime_checkable
class IVerificationTokenStore(Protocol):
    """
    Ephemeral storage for verification tokens, keyed by token value.

    The store does not enforce one open token per user by itself: callers
    supersede the user's open tokens before adding a new one, under the
    user's lock.
    """

    async def add(self, entry: VerificationToken) -> VerificationToken:
        """Store a new token entry."""
        ...

    async def get(self, token: str) -> Optional[VerificationToken]:
        """Get an entry by token value, None if never issued."""
        ...

    async def consume(self, token: str, now: datetime) -> Optional[VerificationToken]:
        """
        Mark an open token consumed.

        Compare-and-set: returns the consumed entry only if this call made
        the transition, None if the token was not open.
        """
        ...

    async def supersede_open(self, user_id: str) -> int:
        """Invalidate every unconsumed token of a user. Returns how many."""
        ...


@runtime_checkable
class IVerificationService(Protocol):
    """Interface for the verification handoff protocol."""

    async def issue_token(self, caller: AuthenticatedUser) -> IssueTokenResponse:
        """
        Issue a token for the caller, invalidating any earlier open token.

        Raises:
            VerificationNotRequiredError: If the caller is verified or an admin
        """
        ...

    async def check_status(self, token: str) -> StatusResponse:
        """
        Report whether verification for an open token is still pending.

        Raises:
            VerificationTokenError: If the token is unknown, used or expired
        """
        ...

    async def complete_verification(
        self, token: str, photo_data: Optional[str]
    ) -> CompleteResponse:
        """
        Store the biometric record and mark the user verified.

        Raises:
            MissingBiometricPayloadError: If photo_data is empty
            VerificationTokenError: If the token is not open
        """
        ...

    async def reset_verification(
        self, caller: AuthenticatedUser, user_id: str
    ) -> UserSummary:
        """
        Return a user to unverified, subject to the Role Authorizer.

        Raises:
            UserNotFoundError: If the user does not exist
            DeniedError: If the caller may not act on the user
        """
        ...
