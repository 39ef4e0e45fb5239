"""
Tenant service.

Workspace management for global admins plus the public lookups used by
browser clients to find out which workspace they are on.
"""

import logging
import uuid
from typing import Optional

from modules.accounts import IUserRepository
from modules.authz import InsufficientPermissionsError, Role
from shared.clock import Clock, utcnow
from shared.locks import KeyedLocks
from shared.models import AuthenticatedUser

from .exceptions import (
    InvalidSubdomainError,
    TenantInactiveError,
    TenantInUseError,
    TenantNotFoundError,
)
from .interfaces import ITenantRepository
from .models import (
    SUBDOMAIN_PATTERN,
    ConnectionReport,
    CreateTenantRequest,
    OriginKind,
    Resolution,
    Tenant,
    UpdateTenantRequest,
)
from .resolver import TenantResolver

logger = logging.getLogger(__name__)


def _require_admin(caller: AuthenticatedUser) -> None:
    if caller.role != Role.ADMIN.value:
        raise InsufficientPermissionsError(Role.ADMIN.value, caller.role)


class TenantService:
    """Tenant lookups and administration."""

    def __init__(
        self,
        tenants: ITenantRepository,
        resolver: TenantResolver,
        users: IUserRepository,
        locks: Optional[KeyedLocks] = None,
        clock: Clock = utcnow,
    ):
        self._tenants = tenants
        self._resolver = resolver
        self._users = users
        self._locks = locks or KeyedLocks()
        self._clock = clock

    async def resolve_host(self, host: str) -> Resolution:
        """Classify a request's Host header."""
        return await self._resolver.resolve(host)

    async def get_active_by_subdomain(self, subdomain: str) -> Tenant:
        """
        Get a tenant for display on its own origin.

        Raises:
            TenantNotFoundError: If no tenant has this subdomain
            TenantInactiveError: If the tenant exists but is not active
        """
        resolution = await self._resolver.resolve_subdomain(subdomain)
        if resolution.kind != OriginKind.TENANT_SCOPED or resolution.tenant is None:
            raise TenantNotFoundError()
        if not resolution.tenant.is_active:
            raise TenantInactiveError(resolution.tenant.status.value)
        return resolution.tenant

    async def get_tenant(self, caller: AuthenticatedUser, tenant_id: str) -> Tenant:
        """
        Get a tenant by ID.

        Admins see every tenant; everyone else sees only their own, and
        any other ID looks the same as an unknown one.

        Raises:
            TenantNotFoundError: If the tenant is absent or not visible
        """
        if caller.role != Role.ADMIN.value and caller.tenant_ref != tenant_id:
            raise TenantNotFoundError()
        tenant = await self._tenants.get_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundError()
        return tenant

    async def delete_tenant(self, caller: AuthenticatedUser, tenant_id: str) -> None:
        """
        Delete a tenant that no user is assigned to. Admin only.

        Raises:
            InsufficientPermissionsError: If the caller is not an admin
            TenantNotFoundError: If the tenant does not exist
            TenantInUseError: If users are still assigned to it
        """
        _require_admin(caller)
        # Same key AdminService.create_user holds while placing users
        async with self._locks.hold(f"tenant:{tenant_id}"):
            tenant = await self._tenants.get_by_id(tenant_id)
            if tenant is None:
                raise TenantNotFoundError()
            members = await self._users.count_in_tenant(tenant_id)
            if members:
                logger.warning(
                    f"Refused to delete tenant {tenant.subdomain}: {members} user(s) assigned"
                )
                raise TenantInUseError(tenant_id, members)
            if not await self._tenants.delete(tenant_id):
                raise TenantNotFoundError()
        logger.info(f"Tenant deleted: {tenant.subdomain} by {caller.username}")

    async def check_connection(
        self, caller: AuthenticatedUser, tenant_id: str
    ) -> ConnectionReport:
        """Report a tenant's origin URL and whether it accepts logins. Admin only."""
        _require_admin(caller)
        tenant = await self._tenants.get_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundError()
        return ConnectionReport(
            workspace=tenant.name,
            subdomain=tenant.subdomain,
            status=tenant.status,
            url=self._resolver.tenant_origin(tenant.subdomain),
            online=tenant.is_active,
            checked_at=self._clock(),
        )

    async def list_tenants(self, caller: AuthenticatedUser) -> list[Tenant]:
        _require_admin(caller)
        return await self._tenants.list()

    async def create_tenant(
        self,
        caller: AuthenticatedUser,
        request: CreateTenantRequest,
    ) -> Tenant:
        """
        Create a tenant. Admin only.

        Raises:
            InsufficientPermissionsError: If the caller is not an admin
            InvalidSubdomainError: If the subdomain is malformed or reserved
            SubdomainTakenError: If the subdomain is already in use
        """
        _require_admin(caller)
        self.validate_subdomain(request.subdomain)

        tenant = await self._tenants.create(
            Tenant(
                id=str(uuid.uuid4()),
                name=request.name,
                subdomain=request.subdomain,
                created_by=caller.id,
                description=request.description,
                company=request.company,
                location=request.location,
            )
        )
        logger.info(f"Tenant created: {tenant.subdomain} by {caller.username}")
        return tenant

    async def update_tenant(
        self,
        caller: AuthenticatedUser,
        tenant_id: str,
        request: UpdateTenantRequest,
    ) -> Tenant:
        """Update name, status or descriptive fields. Admin only."""
        _require_admin(caller)
        changes = request.model_dump(exclude_unset=True, exclude_none=True)
        tenant = await self._tenants.update(tenant_id, changes)
        if tenant is None:
            raise TenantNotFoundError()
        if "status" in changes:
            logger.info(f"Tenant {tenant.subdomain} status set to {tenant.status.value}")
        return tenant

    def validate_subdomain(self, subdomain: str) -> None:
        """
        Check a subdomain against the naming rule and reserved labels.

        Raises:
            InvalidSubdomainError: If the subdomain cannot be used
        """
        if not SUBDOMAIN_PATTERN.match(subdomain):
            raise InvalidSubdomainError(
                subdomain, "only lowercase letters, digits and hyphens are allowed"
            )
        if subdomain.startswith("-") or subdomain.endswith("-"):
            raise InvalidSubdomainError(subdomain, "cannot start or end with a hyphen")
        if subdomain in self._resolver.reserved_subdomains:
            raise InvalidSubdomainError(subdomain, "this subdomain is reserved")
