"""
Credential Store interface.

Services depend on IUserRepository, not on a storage backend.
"""

from typing import Any, Protocol, Optional, runtime_checkable

from .models import User


@runtime_checkable
class IUserRepository(Protocol):
    """Storage contract for user records."""

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by ID, None if absent."""
        ...

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get a user by username, None if absent."""
        ...

    async def list(self, tenant_ref: Optional[str] = None) -> list[User]:
        """List users, optionally restricted to one tenant, newest first."""
        ...

    async def count_in_tenant(self, tenant_ref: str, exclude_user_id: Optional[str] = None) -> int:
        """Count users currently assigned to a tenant."""
        ...

    async def create(self, user: User) -> User:
        """
        Persist a new user.

        Raises:
            UsernameTakenError: If the username is already in use
        """
        ...

    async def update(self, user_id: str, changes: dict[str, Any]) -> Optional[User]:
        """Apply field changes; returns the updated user, None if absent."""
        ...

    async def delete(self, user_id: str) -> bool:
        """Remove a user. Returns False if it did not exist."""
        ...
