"""
User administration interface.
"""

from typing import Protocol, runtime_checkable

from modules.accounts import UserSummary
from modules.authz import Role
from shared.models import AuthenticatedUser

from .models import CreateUserRequest, UserListResponse


@runtime_checkable
class IAdminService(Protocol):
    """
    User management operations.

    Every operation is checked by the Role Authorizer against the caller
    and raises the matching DeniedError when refused.
    """

    async def create_user(
        self, caller: AuthenticatedUser, request: CreateUserRequest
    ) -> UserSummary:
        """
        Create a user.

        Raises:
            UsernameTakenError: If the username is in use
            TenantNotFoundError: If the workspace does not exist
            QuotaExceededError: If a sub_admin's workspace is full
        """
        ...

    async def list_users(self, caller: AuthenticatedUser) -> UserListResponse:
        """All users for admins, the caller's workspace for sub_admins."""
        ...

    async def change_role(
        self, caller: AuthenticatedUser, user_id: str, role: Role
    ) -> UserSummary:
        ...

    async def change_tenant(
        self, caller: AuthenticatedUser, user_id: str, tenant_ref: str
    ) -> UserSummary:
        ...

    async def delete_user(self, caller: AuthenticatedUser, user_id: str) -> None:
        ...

    async def reset_password(
        self, caller: AuthenticatedUser, user_id: str, password: str
    ) -> UserSummary:
        """Set a new password and require verification on next login."""
        ...

    async def reset_biometric(
        self, caller: AuthenticatedUser, user_id: str
    ) -> UserSummary:
        """Return the user to unverified and invalidate their open token."""
        ...
