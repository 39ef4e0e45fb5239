"""
Credential Store module.

Holds user records: username, password hash, role, tenant reference and
biometric verification state.

Public API:
- IUserRepository: Storage interface
- InMemoryUserRepository / SupabaseUserRepository: Implementations
- User, UserSummary, VerificationState: Models
- new_user / validate_tenant_assignment: Record construction
- hash_password / verify_password / password_fits: bcrypt helpers
"""

from .interfaces import IUserRepository
from .models import User, UserSummary, VerificationState
from .repository import InMemoryUserRepository, SupabaseUserRepository
from .factory import new_user, validate_tenant_assignment
from .passwords import hash_password, verify_password, password_fits, DUMMY_HASH, MAX_PASSWORD_BYTES
from .exceptions import (
    UserNotFoundError,
    UsernameTakenError,
    InvalidTenantAssignmentError,
    PasswordTooLongError,
)

__all__ = [
    # Interface
    "IUserRepository",
    # Models
    "User",
    "UserSummary",
    "VerificationState",
    # Implementations
    "InMemoryUserRepository",
    "SupabaseUserRepository",
    # Helpers
    "new_user",
    "validate_tenant_assignment",
    "hash_password",
    "verify_password",
    "DUMMY_HASH",
    "MAX_PASSWORD_BYTES",
    "password_fits",
    # Exceptions
    "UserNotFoundError",
    "UsernameTakenError",
    "InvalidTenantAssignmentError",
    "PasswordTooLongError",
]
