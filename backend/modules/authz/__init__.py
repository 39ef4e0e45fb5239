"""
Role authorization module.

Encodes the strict hierarchy admin > sub_admin > operator > viewer and the
tenant-boundary rules as a pure, storage-independent decision function.

Public API:
- Role: Ordered role enumeration
- authorize / RoleAuthorizer: The decision function and its configured wrapper
- Action, Decision, DenyReason: Decision inputs and outputs
- Authorization exceptions, one per deny reason
"""

from .roles import Role, HIERARCHY, MANAGER_ROLES, SUB_ADMIN_ASSIGNABLE, TENANT_BOUND_ROLES
from .models import Action, Decision, DenyReason
from .authorizer import authorize, RoleAuthorizer, DEFAULT_SUB_ADMIN_QUOTA
from .exceptions import (
    InsufficientPermissionsError,
    DeniedError,
    RoleHierarchyViolationError,
    TenantBoundaryViolationError,
    QuotaExceededError,
    SelfActionForbiddenError,
    error_for,
)

__all__ = [
    # Roles
    "Role",
    "HIERARCHY",
    "MANAGER_ROLES",
    "SUB_ADMIN_ASSIGNABLE",
    "TENANT_BOUND_ROLES",
    # Decisions
    "Action",
    "Decision",
    "DenyReason",
    "authorize",
    "RoleAuthorizer",
    "DEFAULT_SUB_ADMIN_QUOTA",
    # Exceptions
    "InsufficientPermissionsError",
    "DeniedError",
    "RoleHierarchyViolationError",
    "TenantBoundaryViolationError",
    "QuotaExceededError",
    "SelfActionForbiddenError",
    "error_for",
]
