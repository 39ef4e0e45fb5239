"""
Credential Store data models.

User is the stored record and never leaves the backend as-is: API
responses use UserSummary, which omits the password hash and the
biometric record.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from modules.authz import Role
from shared.models import CamelModel


class VerificationState(str, Enum):
    """Biometric verification state of a user."""

    UNVERIFIED = "unverified"
    PENDING = "verification_pending"
    VERIFIED = "verified"


class User(BaseModel):
    """A stored user record."""

    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Unique login name")
    password_hash: str = Field(..., description="bcrypt hash")
    role: Role = Field(default=Role.OPERATOR)
    tenant_ref: Optional[str] = Field(None, description="Tenant ID, None only for admins")
    verification_state: VerificationState = Field(default=VerificationState.UNVERIFIED)
    biometric_record: Optional[str] = Field(
        None, description="Opaque capture payload, present only when verified"
    )
    requires_verification_on_next_login: bool = Field(default=True)
    created_at: Optional[datetime] = None

    @property
    def is_verified(self) -> bool:
        return self.verification_state == VerificationState.VERIFIED


class UserSummary(CamelModel):
    """What clients are allowed to see about a user."""

    id: str
    username: str
    role: Role
    tenant_ref: Optional[str] = None
    verification_state: VerificationState
    has_biometric: bool = False
    requires_verification_on_next_login: bool = False
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(
            id=user.id,
            username=user.username,
            role=user.role,
            tenant_ref=user.tenant_ref,
            verification_state=user.verification_state,
            has_biometric=user.biometric_record is not None,
            requires_verification_on_next_login=user.requires_verification_on_next_login,
            created_at=user.created_at,
        )
