"""
Tenant (workspace) module.

Resolves request origins to tenants and manages tenant records.

Public API:
- TenantResolver: Hostname classification and origin URL builders
- TenantService: Workspace lookups and admin management
- ITenantRepository: Storage interface, with in-memory and Supabase implementations
- Tenant, TenantStatus, OriginKind, Resolution: Models
- Tenant exceptions
"""

from .interfaces import ITenantRepository
from .models import (
    Tenant,
    TenantStatus,
    OriginKind,
    Resolution,
    CreateTenantRequest,
    UpdateTenantRequest,
    TenantResponse,
    ConnectionReport,
)
from .repository import InMemoryTenantRepository, SupabaseTenantRepository
from .resolver import TenantResolver, normalize_host
from .service import TenantService
from .exceptions import (
    TENANT_NOT_FOUND_MESSAGE,
    TenantNotFoundError,
    TenantInactiveError,
    InvalidSubdomainError,
    SubdomainTakenError,
    TenantInUseError,
)

__all__ = [
    "ITenantRepository",
    "Tenant",
    "TenantStatus",
    "OriginKind",
    "Resolution",
    "CreateTenantRequest",
    "UpdateTenantRequest",
    "TenantResponse",
    "ConnectionReport",
    "InMemoryTenantRepository",
    "SupabaseTenantRepository",
    "TenantResolver",
    "normalize_host",
    "TenantService",
    "TENANT_NOT_FOUND_MESSAGE",
    "TenantNotFoundError",
    "TenantInactiveError",
    "InvalidSubdomainError",
    "SubdomainTakenError",
    "TenantInUseError",
]
