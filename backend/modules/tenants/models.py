"""
Tenant (workspace) module data models.
"""

import re
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from shared.models import CamelModel

SUBDOMAIN_PATTERN = re.compile(r"^[a-z0-9-]+$")


class TenantStatus(str, Enum):
    """Operational status of a tenant."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    MAINTENANCE = "maintenance"


class Tenant(BaseModel):
    """
    An isolated customer/site scope identified by a unique subdomain.
    """

    id: str = Field(..., description="Tenant ID")
    name: str = Field(..., description="Display name")
    subdomain: str = Field(..., description="Unique lowercase label, e.g. 'acme'")
    status: TenantStatus = Field(default=TenantStatus.ACTIVE)
    created_by: Optional[str] = Field(None, description="User ID of the creating admin")
    description: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == TenantStatus.ACTIVE


class OriginKind(str, Enum):
    """Classification of a request origin."""

    CENTRAL_ADMIN = "central_admin"
    IDENTITY_HANDOFF = "identity_handoff"
    TENANT_SCOPED = "tenant_scoped"
    NOT_FOUND = "not_found"


class Resolution(BaseModel):
    """
    Result of resolving a hostname.

    `tenant` is set only for TENANT_SCOPED. Inactive tenants still
    resolve to TENANT_SCOPED; callers decide whether to gate them.
    """

    model_config = {"frozen": True}

    kind: OriginKind
    tenant: Optional[Tenant] = None
    subdomain: Optional[str] = None

    @property
    def is_tenant_scoped(self) -> bool:
        return self.kind == OriginKind.TENANT_SCOPED


class CreateTenantRequest(CamelModel):
    """Request to create a tenant."""

    name: str = Field(..., min_length=1, max_length=255)
    subdomain: str = Field(..., min_length=1, max_length=63)
    description: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None

    @field_validator("subdomain")
    @classmethod
    def normalize_subdomain(cls, value: str) -> str:
        return value.strip().lower()


class UpdateTenantRequest(CamelModel):
    """Partial tenant update. Omitted fields are left unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    status: Optional[TenantStatus] = None
    description: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None


class TenantResponse(CamelModel):
    """Public view of a tenant."""

    id: str
    name: str
    subdomain: str
    status: TenantStatus
    company: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_tenant(cls, tenant: Tenant) -> "TenantResponse":
        return cls(
            id=tenant.id,
            name=tenant.name,
            subdomain=tenant.subdomain,
            status=tenant.status,
            company=tenant.company,
            location=tenant.location,
            description=tenant.description,
        )


class ResolutionResponse(CamelModel):
    """API view of a hostname resolution."""

    kind: OriginKind
    tenant: Optional[TenantResponse] = None


class ConnectionReport(CamelModel):
    """Reachability summary for one workspace origin."""

    workspace: str
    subdomain: str
    status: TenantStatus
    url: str
    online: bool
    checked_at: datetime
