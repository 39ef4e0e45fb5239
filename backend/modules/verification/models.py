"""
Verification module data models.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from shared.models import CamelModel


class VerificationToken(BaseModel):
    """
    An entry in the ephemeral token store.

    A token is open while it is neither consumed, superseded by a newer
    token for the same user, nor past its expiry.
    """

    token: str = Field(..., description="Random token value")
    user_id: str = Field(..., description="User the token verifies")
    expires_at: datetime
    created_at: datetime
    consumed_at: Optional[datetime] = None
    superseded: bool = False

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def is_open(self, now: datetime) -> bool:
        return self.consumed_at is None and not self.superseded and not self.is_expired(now)


class IssueTokenResponse(CamelModel):
    """A freshly issued token and the URL to encode in the QR code."""

    verification_url: str
    token: str
    expires_at: datetime


class StatusResponse(CamelModel):
    """Status of an open token. Carries no PII beyond the username."""

    pending: bool
    username: str
    expires_at: datetime


class CompleteRequest(CamelModel):
    """Completion callback from the identity origin."""

    token: str = Field(..., min_length=1)
    photo_data: Optional[str] = Field(None, description="Captured biometric payload")


class CompleteResponse(CamelModel):
    success: bool
    username: str


class PollResult(BaseModel):
    """Outcome of a VerificationPoller run."""

    completed: bool = Field(..., description="Status stopped reporting pending")
    attempts: int
    timed_out: bool = False
    last_status: Optional[StatusResponse] = None
