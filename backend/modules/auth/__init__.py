"""
Authentication module.

Handles login, session credentials and the cross-origin Redirect Bridge.

Public API:
- IAuthService: Interface for auth operations
- SessionCodec: Signs and verifies session credentials
- RedirectBridge / BootstrapConsumer: One-time cross-origin session handoff
- LoginRequest / LoginResponse / SessionClaims: Models
- Auth exceptions: InvalidCredentialsError, WrongOriginError, etc.
"""

from .interfaces import IAuthService
from .models import (
    SessionClaims,
    IssuedSession,
    LoginRequest,
    LoginResponse,
    BootstrapPayload,
)
from .sessions import SessionCodec
from .redirect import RedirectBridge, BootstrapConsumer, scrub_bootstrap_params
from .exceptions import (
    InvalidCredentialsError,
    WorkspaceAccessDeniedError,
    WrongOriginError,
    InvalidSessionError,
    ExpiredSessionError,
    MissingSessionError,
    InvalidBootstrapError,
    BootstrapAlreadyConsumedError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "SessionClaims",
    "IssuedSession",
    "LoginRequest",
    "LoginResponse",
    "BootstrapPayload",
    # Sessions and redirects
    "SessionCodec",
    "RedirectBridge",
    "BootstrapConsumer",
    "scrub_bootstrap_params",
    # Exceptions
    "InvalidCredentialsError",
    "WorkspaceAccessDeniedError",
    "WrongOriginError",
    "InvalidSessionError",
    "ExpiredSessionError",
    "MissingSessionError",
    "InvalidBootstrapError",
    "BootstrapAlreadyConsumedError",
]
