"""
User administration request and response models.
"""

from typing import Optional

from pydantic import Field, field_validator

from modules.accounts import MAX_PASSWORD_BYTES, UserSummary, password_fits
from modules.authz import Role
from shared.models import CamelModel


def _check_password(value: str) -> str:
    if not password_fits(value):
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes in UTF-8")
    return value


class CreateUserRequest(CamelModel):
    """
    Request to create a user.

    tenant_ref defaults to the caller's own workspace for sub_admins.
    """

    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)
    role: Role = Field(default=Role.OPERATOR)
    tenant_ref: Optional[str] = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password(value)


class ChangeRoleRequest(CamelModel):
    role: Role


class ChangeTenantRequest(CamelModel):
    tenant_ref: str = Field(..., min_length=1)


class ResetPasswordRequest(CamelModel):
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password(value)


class UserListResponse(CamelModel):
    """Users visible to the caller, most recent first."""

    users: list[UserSummary]
    total: int
