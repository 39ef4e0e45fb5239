"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks and future extraction to a microservice.
"""

from typing import Protocol, runtime_checkable

from modules.accounts import UserSummary
from shared.models import AuthenticatedUser

from .models import LoginRequest, LoginResponse


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def login(self, request: LoginRequest, host: str = "") -> LoginResponse:
        """
        Authenticate credentials on an origin and issue a session credential.

        Args:
            request: Username, password and optional observed subdomain
            host: Host header of the request, used when no subdomain is given

        Returns:
            LoginResponse, with redirect_url set when the user belongs elsewhere

        Raises:
            InvalidCredentialsError: If the credentials are wrong
            TenantNotFoundError: If the origin names no workspace
            WorkspaceAccessDeniedError: If the user is not in the workspace
        """
        ...

    async def validate_session(self, token: str) -> AuthenticatedUser:
        """
        Validate a session credential and return the authenticated caller.

        Raises:
            AuthenticationError: If the credential is missing, invalid or expired
        """
        ...

    async def get_me(self, caller: AuthenticatedUser) -> UserSummary:
        """Return the caller's stored user summary."""
        ...
