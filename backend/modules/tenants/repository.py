"""
Tenant repositories.

InMemoryTenantRepository keeps tenants in process memory and is the
default backend. SupabaseTenantRepository stores them in the `tenants`
table (see migrations/001_identity.sql).
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from shared.repository import BaseRepository

from .exceptions import SubdomainTakenError
from .models import Tenant, TenantStatus


class InMemoryTenantRepository:
    """Tenant storage backed by a dict."""

    def __init__(self) -> None:
        self._tenants: dict[str, Tenant] = {}

    async def get_by_id(self, tenant_id: str) -> Optional[Tenant]:
        return self._tenants.get(tenant_id)

    async def get_by_subdomain(self, subdomain: str) -> Optional[Tenant]:
        for tenant in self._tenants.values():
            if tenant.subdomain == subdomain:
                return tenant
        return None

    async def list(self) -> list[Tenant]:
        return sorted(
            self._tenants.values(),
            key=lambda t: t.created_at or datetime.min.replace(tzinfo=timezone.utc),
            reverse=True,
        )

    async def create(self, tenant: Tenant) -> Tenant:
        if await self.get_by_subdomain(tenant.subdomain) is not None:
            raise SubdomainTakenError(tenant.subdomain)
        stored = tenant.model_copy(
            update={
                "id": tenant.id or str(uuid.uuid4()),
                "created_at": tenant.created_at or datetime.now(timezone.utc),
            }
        )
        self._tenants[stored.id] = stored
        return stored

    async def update(self, tenant_id: str, changes: dict[str, Any]) -> Optional[Tenant]:
        tenant = self._tenants.get(tenant_id)
        if tenant is None:
            return None
        updated = tenant.model_copy(update=changes)
        self._tenants[tenant_id] = updated
        return updated

    async def delete(self, tenant_id: str) -> bool:
        return self._tenants.pop(tenant_id, None) is not None


class SupabaseTenantRepository(BaseRepository[Tenant]):
    """
    Tenant storage in Supabase.

    Subdomain uniqueness is enforced by a unique index; the pre-insert
    lookup only exists to return a friendly error.
    """

    TABLE = "tenants"

    async def get_by_id(self, tenant_id: str) -> Optional[Tenant]:
        result = self._db.table(self.TABLE).select("*").eq("id", tenant_id).execute()
        row = self._first(result)
        return self._map_to_tenant(row) if row else None

    async def get_by_subdomain(self, subdomain: str) -> Optional[Tenant]:
        result = self._db.table(self.TABLE).select("*").eq("subdomain", subdomain).execute()
        row = self._first(result)
        return self._map_to_tenant(row) if row else None

    async def list(self) -> list[Tenant]:
        result = self._db.table(self.TABLE).select("*").order("created_at", desc=True).execute()
        return [self._map_to_tenant(row) for row in result.data]

    async def create(self, tenant: Tenant) -> Tenant:
        if await self.get_by_subdomain(tenant.subdomain) is not None:
            raise SubdomainTakenError(tenant.subdomain)
        data = {
            "name": tenant.name,
            "subdomain": tenant.subdomain,
            "status": tenant.status.value,
            "created_by": tenant.created_by,
            "description": tenant.description,
            "company": tenant.company,
            "location": tenant.location,
        }
        result = self._db.table(self.TABLE).insert(data).execute()
        return self._map_to_tenant(result.data[0])

    async def update(self, tenant_id: str, changes: dict[str, Any]) -> Optional[Tenant]:
        data = {
            key: value.value if isinstance(value, TenantStatus) else value
            for key, value in changes.items()
        }
        result = self._db.table(self.TABLE).update(data).eq("id", tenant_id).execute()
        row = self._first(result)
        return self._map_to_tenant(row) if row else None

    async def delete(self, tenant_id: str) -> bool:
        result = self._db.table(self.TABLE).delete().eq("id", tenant_id).execute()
        return bool(result.data)

    def _map_to_tenant(self, data: dict[str, Any]) -> Tenant:
        """Map database row to Tenant model."""
        created_by = data.get("created_by")
        return Tenant(
            id=str(data["id"]),
            name=data["name"],
            subdomain=data["subdomain"],
            status=TenantStatus(data.get("status", "active")),
            created_by=str(created_by) if created_by is not None else None,
            description=data.get("description"),
            company=data.get("company"),
            location=data.get("location"),
            created_at=data.get("created_at"),
        )
