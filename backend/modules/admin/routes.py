"""
User administration API endpoints.

All endpoints require a session; what the caller may do is decided by
the Role Authorizer inside the service.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_admin_service
from api.middleware.auth import get_current_user
from modules.accounts import UserSummary
from shared.models import AuthenticatedUser

from .interfaces import IAdminService
from .models import (
    ChangeRoleRequest,
    ChangeTenantRequest,
    CreateUserRequest,
    ResetPasswordRequest,
    UserListResponse,
)

router = APIRouter()


@router.post("", response_model=UserSummary, response_model_by_alias=True, status_code=201)
async def create_user(
    request: CreateUserRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAdminService = Depends(get_admin_service),
) -> UserSummary:
    """
    Create a user.

    Sub-admins create operators and viewers in their own workspace, up
    to the workspace quota.
    """
    return await service.create_user(user, request)


@router.get("", response_model=UserListResponse, response_model_by_alias=True)
async def list_users(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAdminService = Depends(get_admin_service),
) -> UserListResponse:
    """
    List users visible to the caller.
    """
    return await service.list_users(user)


@router.put("/{user_id}/role", response_model=UserSummary, response_model_by_alias=True)
async def change_role(
    user_id: str,
    request: ChangeRoleRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAdminService = Depends(get_admin_service),
) -> UserSummary:
    return await service.change_role(user, user_id, request.role)


@router.put("/{user_id}/tenant", response_model=UserSummary, response_model_by_alias=True)
async def change_tenant(
    user_id: str,
    request: ChangeTenantRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAdminService = Depends(get_admin_service),
) -> UserSummary:
    return await service.change_tenant(user, user_id, request.tenant_ref)


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAdminService = Depends(get_admin_service),
) -> None:
    """
    Delete a user. Deleting yourself is always refused.
    """
    await service.delete_user(user, user_id)


@router.put(
    "/{user_id}/reset-password",
    response_model=UserSummary,
    response_model_by_alias=True,
)
async def reset_password(
    user_id: str,
    request: ResetPasswordRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAdminService = Depends(get_admin_service),
) -> UserSummary:
    """
    Set a new password. The user must verify again on next login.
    """
    return await service.reset_password(user, user_id, request.password)


@router.put(
    "/{user_id}/reset-biometric",
    response_model=UserSummary,
    response_model_by_alias=True,
)
async def reset_biometric(
    user_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAdminService = Depends(get_admin_service),
) -> UserSummary:
    """
    Clear the user's biometric record and return them to unverified.
    """
    return await service.reset_biometric(user, user_id)
