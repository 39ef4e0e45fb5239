"""
Credential Store exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError, ValidationError


class UserNotFoundError(NotFoundError):
    """Raised when a user ID does not exist."""

    def __init__(self, user_id: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class UsernameTakenError(ConflictError):
    """Raised when creating a user with a username already in use."""

    def __init__(self, username: str):
        super().__init__(
            "Username already exists",
            code="USERNAME_TAKEN",
            details={"username": username},
        )


class InvalidTenantAssignmentError(ValidationError):
    """Raised when a role/tenant combination breaks the tenant invariant."""

    def __init__(self, role: str, reason: str):
        super().__init__(
            f"Invalid workspace assignment for role '{role}': {reason}",
            code="INVALID_TENANT_ASSIGNMENT",
            details={"role": role, "reason": reason},
        )


class PasswordTooLongError(ValidationError):
    """Raised when a password is longer than bcrypt can hash."""

    def __init__(self, max_bytes: int):
        super().__init__(
            f"Password must be at most {max_bytes} bytes",
            code="PASSWORD_TOO_LONG",
            details={"max_bytes": max_bytes},
        )
