"""
User administration module.

Public API:
- IAdminService: Interface for user management
- Request/response models
"""

from .interfaces import IAdminService
from .models import (
    CreateUserRequest,
    ChangeRoleRequest,
    ChangeTenantRequest,
    ResetPasswordRequest,
    UserListResponse,
)

__all__ = [
    "IAdminService",
    "CreateUserRequest",
    "ChangeRoleRequest",
    "ChangeTenantRequest",
    "ResetPasswordRequest",
    "UserListResponse",
]
