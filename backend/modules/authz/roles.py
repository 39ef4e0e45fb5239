"""
Role hierarchy.

Roles form a strict total order: admin > sub_admin > operator > viewer.
All rank comparisons in the codebase go through this module.
"""

from enum import Enum


class Role(str, Enum):
    """User roles, ordered by rank."""

    ADMIN = "admin"
    SUB_ADMIN = "sub_admin"
    OPERATOR = "operator"
    VIEWER = "viewer"

    @property
    def rank(self) -> int:
        """Numeric rank of the role (higher outranks lower)."""
        return HIERARCHY[self]

    def outranks(self, other: "Role") -> bool:
        """Whether this role is strictly above another."""
        return self.rank > other.rank


HIERARCHY: dict[Role, int] = {
    Role.ADMIN: 4,
    Role.SUB_ADMIN: 3,
    Role.OPERATOR: 2,
    Role.VIEWER: 1,
}

# Roles that may perform user-management actions at all
MANAGER_ROLES = frozenset({Role.ADMIN, Role.SUB_ADMIN})

# Roles a sub_admin may hand out
SUB_ADMIN_ASSIGNABLE = frozenset({Role.OPERATOR, Role.VIEWER})

# Roles that must belong to a tenant
TENANT_BOUND_ROLES = frozenset({Role.SUB_ADMIN, Role.OPERATOR, Role.VIEWER})
