"""
Tenant module interfaces.

Services depend on ITenantRepository, not on a storage backend.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import Tenant


@runtime_checkable
class ITenantRepository(Protocol):
    """Storage contract for tenants."""

    async def get_by_id(self, tenant_id: str) -> Optional[Tenant]:
        """Get a tenant by ID, None if absent."""
        ...

    async def get_by_subdomain(self, subdomain: str) -> Optional[Tenant]:
        """Get a tenant by its exact (lowercase) subdomain, None if absent."""
        ...

    async def list(self) -> list[Tenant]:
        """List all tenants, most recent first."""
        ...

    async def create(self, tenant: Tenant) -> Tenant:
        """
        Persist a new tenant.

        Raises:
            SubdomainTakenError: If the subdomain is already in use
        """
        ...

    async def update(self, tenant_id: str, changes: dict) -> Optional[Tenant]:
        """Apply field changes; returns the updated tenant, None if absent."""
        ...

    async def delete(self, tenant_id: str) -> bool:
        """Remove a tenant. Returns False if it did not exist."""
        ...
