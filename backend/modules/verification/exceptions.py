"""
Verification module exceptions.

The three token errors are distinct for logging and tests, but the API
answers all of them with the same not-found response: the caller may be
an unauthenticated third party on the identity origin.
"""

from shared.exceptions import BaridaError, NotFoundError, ValidationError

TOKEN_NOT_FOUND_MESSAGE = "Token not found or already used"


class VerificationTokenError(NotFoundError):
    """Base for token lifecycle failures."""

    def __init__(self, code: str):
        super().__init__(TOKEN_NOT_FOUND_MESSAGE, code=code)


class TokenNotFoundError(VerificationTokenError):
    """Raised when a token was never issued or has been superseded."""

    def __init__(self):
        super().__init__("TOKEN_NOT_FOUND")


class TokenExpiredError(VerificationTokenError):
    """Raised when a token is past its expiry."""

    def __init__(self):
        super().__init__("TOKEN_EXPIRED")


class TokenAlreadyUsedError(VerificationTokenError):
    """Raised when a token has already been consumed."""

    def __init__(self):
        super().__init__("TOKEN_ALREADY_USED")


class VerificationNotRequiredError(ValidationError):
    """Raised when a verified user or an admin requests a token."""

    def __init__(self, reason: str):
        super().__init__(
            f"Biometric verification is not required: {reason}",
            code="VERIFICATION_NOT_REQUIRED",
        )


class MissingBiometricPayloadError(ValidationError):
    """Raised when a completion callback carries no capture data."""

    def __init__(self):
        super().__init__("Photo data is required", code="MISSING_BIOMETRIC_PAYLOAD")


class PollerError(BaridaError):
    """Raised when the status endpoint answers with an unexpected response."""

    def __init__(self, status_code: int):
        super().__init__(
            f"Unexpected verification status response: HTTP {status_code}",
            code="POLLER_ERROR",
            details={"status_code": status_code},
        )
