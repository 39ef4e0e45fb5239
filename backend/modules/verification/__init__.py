"""
Verification handoff module.

Issues single-use verification tokens, reports their status to the
polling client, accepts the completion callback from the identity origin
and resets users back to unverified.

Public API:
- IVerificationService / IVerificationTokenStore: Interfaces
- InMemoryVerificationTokenStore / SupabaseVerificationTokenStore: Token stores
- VerificationPoller: Bounded HTTP polling client
- Request/response models and token exceptions
"""

from .interfaces import IVerificationService, IVerificationTokenStore
from .models import (
    VerificationToken,
    IssueTokenResponse,
    StatusResponse,
    CompleteRequest,
    CompleteResponse,
    PollResult,
)
from .store import InMemoryVerificationTokenStore, SupabaseVerificationTokenStore
from .poller import VerificationPoller
from .exceptions import (
    TOKEN_NOT_FOUND_MESSAGE,
    VerificationTokenError,
    TokenNotFoundError,
    TokenExpiredError,
    TokenAlreadyUsedError,
    VerificationNotRequiredError,
    MissingBiometricPayloadError,
    PollerError,
)

__all__ = [
    # Interfaces
    "IVerificationService",
    "IVerificationTokenStore",
    # Models
    "VerificationToken",
    "IssueTokenResponse",
    "StatusResponse",
    "CompleteRequest",
    "CompleteResponse",
    "PollResult",
    # Implementations
    "InMemoryVerificationTokenStore",
    "SupabaseVerificationTokenStore",
    "VerificationPoller",
    # Exceptions
    "TOKEN_NOT_FOUND_MESSAGE",
    "VerificationTokenError",
    "TokenNotFoundError",
    "TokenExpiredError",
    "TokenAlreadyUsedError",
    "VerificationNotRequiredError",
    "MissingBiometricPayloadError",
    "PollerError",
]
