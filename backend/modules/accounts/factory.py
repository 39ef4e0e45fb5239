"""
User record construction.

Every account is created through new_user() so the role/tenant invariant
and the initial verification fields are set in one place.
"""

import uuid
from typing import Optional

from modules.authz import Role, TENANT_BOUND_ROLES

from .exceptions import InvalidTenantAssignmentError
from .models import User, VerificationState
from .passwords import hash_password


def validate_tenant_assignment(role: Role, tenant_ref: Optional[str]) -> None:
    """
    Enforce that tenant-bound roles have a tenant and admins do not.

    Raises:
        InvalidTenantAssignmentError: If the combination is not allowed
    """
    if role in TENANT_BOUND_ROLES and tenant_ref is None:
        raise InvalidTenantAssignmentError(role.value, "a workspace is required")
    if role == Role.ADMIN and tenant_ref is not None:
        raise InvalidTenantAssignmentError(role.value, "admins are not bound to a workspace")


def new_user(
    username: str,
    password: str,
    role: Role = Role.OPERATOR,
    tenant_ref: Optional[str] = None,
) -> User:
    """
    Build a fresh user record.

    Non-admin accounts start unverified and must verify on first login.
    Admins are exempt from biometric verification.
    """
    validate_tenant_assignment(role, tenant_ref)
    return User(
        id=str(uuid.uuid4()),
        username=username,
        password_hash=hash_password(password),
        role=role,
        tenant_ref=tenant_ref,
        verification_state=VerificationState.UNVERIFIED,
        requires_verification_on_next_login=role != Role.ADMIN,
    )
