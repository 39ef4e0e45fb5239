"""
Role Authorizer data models.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Action(str, Enum):
    """Actions a caller can take on a target user."""

    CREATE = "create"
    CHANGE_ROLE = "change_role"
    CHANGE_TENANT = "change_tenant"
    RESET_PASSWORD = "reset_password"
    RESET_VERIFICATION = "reset_verification"
    DELETE = "delete"


class DenyReason(str, Enum):
    """Why an action was denied."""

    ROLE_HIERARCHY = "role_hierarchy"
    TENANT_BOUNDARY = "tenant_boundary"
    QUOTA_EXCEEDED = "quota_exceeded"
    SELF_ACTION = "self_action"
    NOT_A_MANAGER = "not_a_manager"


class Decision(BaseModel):
    """Outcome of an authorization check."""

    model_config = {"frozen": True}

    allowed: bool = Field(..., description="Whether the action is permitted")
    reason: Optional[DenyReason] = Field(None, description="Deny reason, None when allowed")
    message: str = Field(default="", description="Human-readable explanation")

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason, message: str) -> "Decision":
        return cls(allowed=False, reason=reason, message=message)
