"""
Role Authorizer.

A pure decision function over (caller, target, action). It never touches
storage: callers pass in everything it needs, including the current
population of a tenant when a quota applies.
"""

from typing import Optional

from .models import Action, Decision, DenyReason
from .roles import Role, MANAGER_ROLES, SUB_ADMIN_ASSIGNABLE

DEFAULT_SUB_ADMIN_QUOTA = 4

_GRANTING_ACTIONS = frozenset({Action.CREATE, Action.CHANGE_ROLE})


def authorize(
    caller_role: Role,
    caller_tenant: Optional[str],
    target_role: Role,
    target_tenant: Optional[str],
    action: Action,
    *,
    is_self: bool = False,
    new_role: Optional[Role] = None,
    new_tenant: Optional[str] = None,
    tenant_population: Optional[int] = None,
    quota: int = DEFAULT_SUB_ADMIN_QUOTA,
) -> Decision:
    """
    Decide whether a caller may perform an action on a target user.

    Checks run in a fixed order and the first failing rule decides:
    self-action, manager role, tenant boundary, role grant, hierarchy, quota.

    Args:
        caller_role: Role of the acting user
        caller_tenant: Tenant of the acting user (None for global admins)
        target_role: Current role of the target. For CREATE, the role
            the new account will receive.
        target_tenant: Current tenant of the target. For CREATE, the
            tenant the new account will be placed in.
        action: What the caller wants to do
        is_self: Whether the target is the caller
        new_role: Role being assigned (CHANGE_ROLE)
        new_tenant: Tenant being assigned (CHANGE_TENANT)
        tenant_population: Users in the caller's tenant excluding the
            caller; required when a sub_admin creates a user
        quota: Cap on tenant_population for sub_admin creations

    Returns:
        Decision.allow() or Decision.deny(reason, message)
    """
    if is_self:
        return Decision.deny(
            DenyReason.SELF_ACTION,
            f"Cannot {action.value.replace('_', ' ')} on your own account",
        )

    if caller_role not in MANAGER_ROLES:
        return Decision.deny(
            DenyReason.NOT_A_MANAGER,
            f"Role '{caller_role.value}' cannot manage users",
        )

    scoped = caller_role == Role.SUB_ADMIN

    if scoped and target_tenant != caller_tenant:
        return Decision.deny(
            DenyReason.TENANT_BOUNDARY,
            "Target user belongs to a different workspace",
        )

    if scoped and action == Action.CHANGE_TENANT and new_tenant != caller_tenant:
        return Decision.deny(
            DenyReason.TENANT_BOUNDARY,
            "Cannot move users to a different workspace",
        )

    if action in _GRANTING_ACTIONS:
        granted = target_role if action == Action.CREATE else new_role
        if granted is None:
            raise ValueError(f"{action.value} requires the role being assigned")
        if scoped and granted not in SUB_ADMIN_ASSIGNABLE:
            return Decision.deny(
                DenyReason.ROLE_HIERARCHY,
                f"Sub-admins may only assign operator or viewer, not '{granted.value}'",
            )

    if action != Action.CREATE and not caller_role.outranks(target_role):
        return Decision.deny(
            DenyReason.ROLE_HIERARCHY,
            f"Role '{caller_role.value}' cannot act on role '{target_role.value}'",
        )

    if scoped and action == Action.CREATE:
        if tenant_population is None:
            raise ValueError("tenant_population is required for sub_admin creations")
        if tenant_population >= quota:
            return Decision.deny(
                DenyReason.QUOTA_EXCEEDED,
                f"Workspace user limit reached ({quota})",
            )

    return Decision.allow()


class RoleAuthorizer:
    """
    Thin object wrapper around authorize() carrying the configured quota.

    Services depend on this so the quota comes from settings in one place.
    """

    def __init__(self, quota: int = DEFAULT_SUB_ADMIN_QUOTA):
        self.quota = quota

    def check(
        self,
        caller_role: Role,
        caller_tenant: Optional[str],
        target_role: Role,
        target_tenant: Optional[str],
        action: Action,
        **kwargs,
    ) -> Decision:
        """Evaluate authorize() with this authorizer's quota."""
        kwargs.setdefault("quota", self.quota)
        return authorize(
            caller_role, caller_tenant, target_role, target_tenant, action, **kwargs
        )
