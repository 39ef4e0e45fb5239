"""
Authentication module exceptions.

Authentication failures use generic messages: a caller must not be able
to tell an unknown username from a wrong password.
"""

from shared.exceptions import AuthenticationError, AuthorizationError, ValidationError


class InvalidCredentialsError(AuthenticationError):
    """Raised when username or password is wrong (never says which)."""

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class WorkspaceAccessDeniedError(AuthorizationError):
    """Raised when a user logs in on a workspace they do not belong to."""

    def __init__(self):
        super().__init__(
            "You do not have access to this workspace",
            code="WORKSPACE_ACCESS_DENIED",
        )


class WrongOriginError(AuthorizationError):
    """
    Raised when a user logs in on an origin that is not their home.

    Recoverable: the login flow turns it into a redirect to home_origin.
    """

    def __init__(self, home_origin: str):
        super().__init__(
            "Please login from your workspace subdomain",
            code="WRONG_ORIGIN",
            details={"home_origin": home_origin},
        )
        self.home_origin = home_origin


class InvalidSessionError(AuthenticationError):
    """Raised when a session credential is invalid or malformed."""

    def __init__(self, message: str = "Invalid session credential"):
        super().__init__(message, code="INVALID_SESSION")


class ExpiredSessionError(AuthenticationError):
    """Raised when a session credential has expired."""

    def __init__(self, message: str = "Session credential has expired"):
        super().__init__(message, code="SESSION_EXPIRED")


class MissingSessionError(AuthenticationError):
    """Raised when no session credential is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_SESSION")


class InvalidBootstrapError(ValidationError):
    """Raised when redirect bootstrap parameters are missing or do not verify."""

    def __init__(self, reason: str):
        super().__init__(
            f"Invalid session bootstrap: {reason}",
            code="INVALID_BOOTSTRAP",
        )


class BootstrapAlreadyConsumedError(ValidationError):
    """Raised when the same bootstrap URL is processed a second time."""

    def __init__(self):
        super().__init__(
            "Session bootstrap has already been used",
            code="BOOTSTRAP_ALREADY_CONSUMED",
        )
