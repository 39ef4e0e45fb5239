"""
Role Authorizer exceptions.

Authorization failures carry their specific reason: the caller is already
authenticated and the explanation is not sensitive to them.
"""

from shared.exceptions import AuthorizationError

from .models import Decision, DenyReason


class InsufficientPermissionsError(AuthorizationError):
    """Raised when a caller's role is not allowed to perform an operation."""

    def __init__(self, required_role: str, user_role: str):
        super().__init__(
            f"Insufficient permissions. Required: {required_role}, has: {user_role}",
            code="INSUFFICIENT_PERMISSIONS",
            details={"required_role": required_role, "user_role": user_role},
        )


class DeniedError(AuthorizationError):
    """Base for errors raised from a deny Decision."""

    code_name = "ACCESS_DENIED"

    def __init__(self, message: str):
        super().__init__(message, code=self.code_name)


class RoleHierarchyViolationError(DeniedError):
    """Caller does not outrank the target, or tried to grant a forbidden role."""

    code_name = "ROLE_HIERARCHY_VIOLATION"


class TenantBoundaryViolationError(DeniedError):
    """Caller tried to act outside their own tenant."""

    code_name = "TENANT_BOUNDARY_VIOLATION"


class QuotaExceededError(DeniedError):
    """The caller's tenant is at its user cap."""

    code_name = "QUOTA_EXCEEDED"


class SelfActionForbiddenError(DeniedError):
    """Caller tried to change their own role or remove themselves."""

    code_name = "SELF_ACTION_FORBIDDEN"


_ERRORS_BY_REASON: dict[DenyReason, type[DeniedError]] = {
    DenyReason.ROLE_HIERARCHY: RoleHierarchyViolationError,
    DenyReason.NOT_A_MANAGER: RoleHierarchyViolationError,
    DenyReason.TENANT_BOUNDARY: TenantBoundaryViolationError,
    DenyReason.QUOTA_EXCEEDED: QuotaExceededError,
    DenyReason.SELF_ACTION: SelfActionForbiddenError,
}


def error_for(decision: Decision) -> DeniedError:
    """Build the exception matching a deny Decision."""
    if decision.allowed or decision.reason is None:
        raise ValueError("Cannot build an error from an allow decision")
    return _ERRORS_BY_REASON[decision.reason](decision.message)
