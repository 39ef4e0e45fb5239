"""
Workspace API endpoints.

The subdomain and resolve lookups are public: browser clients call them
before login to find out which workspace they are on.
"""

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_tenant_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .models import (
    ConnectionReport,
    CreateTenantRequest,
    ResolutionResponse,
    TenantResponse,
    UpdateTenantRequest,
)
from .service import TenantService

router = APIRouter()


@router.get("/subdomain/{subdomain}", response_model=TenantResponse, response_model_by_alias=True)
async def get_by_subdomain(
    subdomain: str,
    service: TenantService = Depends(get_tenant_service),
) -> TenantResponse:
    """
    Look up an active workspace by subdomain.

    Unknown and reserved subdomains return the same 404.
    """
    tenant = await service.get_active_by_subdomain(subdomain)
    return TenantResponse.from_tenant(tenant)


@router.get("/resolve", response_model=ResolutionResponse, response_model_by_alias=True)
async def resolve(
    request: Request,
    service: TenantService = Depends(get_tenant_service),
) -> ResolutionResponse:
    """
    Classify the Host this request was sent to.
    """
    resolution = await service.resolve_host(request.headers.get("host", ""))
    return ResolutionResponse(
        kind=resolution.kind,
        tenant=TenantResponse.from_tenant(resolution.tenant) if resolution.tenant else None,
    )


@router.get("", response_model=list[TenantResponse], response_model_by_alias=True)
async def list_tenants(
    user: AuthenticatedUser = Depends(get_current_user),
    service: TenantService = Depends(get_tenant_service),
) -> list[TenantResponse]:
    """
    List all workspaces. Admin only.
    """
    return [TenantResponse.from_tenant(t) for t in await service.list_tenants(user)]


@router.post("", response_model=TenantResponse, response_model_by_alias=True, status_code=201)
async def create_tenant(
    request: CreateTenantRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: TenantService = Depends(get_tenant_service),
) -> TenantResponse:
    """
    Create a workspace. Admin only.

    The subdomain is lowercased; reserved labels and duplicates are refused.
    """
    tenant = await service.create_tenant(user, request)
    return TenantResponse.from_tenant(tenant)


@router.put("/{tenant_id}", response_model=TenantResponse, response_model_by_alias=True)
async def update_tenant(
    tenant_id: str,
    request: UpdateTenantRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: TenantService = Depends(get_tenant_service),
) -> TenantResponse:
    tenant = await service.update_tenant(user, tenant_id, request)
    return TenantResponse.from_tenant(tenant)


@router.get("/{tenant_id}", response_model=TenantResponse, response_model_by_alias=True)
async def get_tenant(
    tenant_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: TenantService = Depends(get_tenant_service),
) -> TenantResponse:
    """
    Get a workspace by ID.

    Non-admins can only read their own workspace.
    """
    tenant = await service.get_tenant(user, tenant_id)
    return TenantResponse.from_tenant(tenant)


@router.delete("/{tenant_id}", status_code=204)
async def delete_tenant(
    tenant_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: TenantService = Depends(get_tenant_service),
) -> None:
    """
    Delete an empty workspace. Admin only.

    Refused with 409 while users are still assigned to it.
    """
    await service.delete_tenant(user, tenant_id)


@router.post("/{tenant_id}/test", response_model=ConnectionReport, response_model_by_alias=True)
async def check_connection(
    tenant_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: TenantService = Depends(get_tenant_service),
) -> ConnectionReport:
    return await service.check_connection(user, tenant_id)
