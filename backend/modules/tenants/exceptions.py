"""
Tenant module exceptions.
"""

from shared.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

# Same text for every unknown subdomain so responses never reveal which exist
TENANT_NOT_FOUND_MESSAGE = "Workspace not found"


class TenantNotFoundError(NotFoundError):
    """Raised when no tenant matches a subdomain or ID."""

    def __init__(self):
        super().__init__(TENANT_NOT_FOUND_MESSAGE, code="TENANT_NOT_FOUND")


class TenantInactiveError(AuthorizationError):
    """Raised when a tenant exists but is not accepting logins."""

    def __init__(self, status: str):
        super().__init__(
            f"Workspace is currently {status}",
            code="TENANT_INACTIVE",
            details={"status": status},
        )


class InvalidSubdomainError(ValidationError):
    """Raised when a subdomain fails the lowercase alphanumeric+hyphen rule."""

    def __init__(self, subdomain: str, reason: str):
        super().__init__(
            f"Invalid subdomain '{subdomain}': {reason}",
            code="INVALID_SUBDOMAIN",
            details={"subdomain": subdomain, "reason": reason},
        )


class SubdomainTakenError(ConflictError):
    """Raised when a subdomain is already in use."""

    def __init__(self, subdomain: str):
        super().__init__(
            "Subdomain already in use",
            code="SUBDOMAIN_TAKEN",
            details={"subdomain": subdomain},
        )


class TenantInUseError(ConflictError):
    """Raised when deleting a tenant that users are still assigned to."""

    def __init__(self, tenant_id: str, user_count: int):
        super().__init__(
            f"Workspace still has {user_count} user(s); move or delete them first",
            code="TENANT_IN_USE",
            details={"tenant_id": tenant_id, "user_count": user_count},
        )
