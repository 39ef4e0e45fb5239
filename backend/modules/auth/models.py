"""
Authentication module data models.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from modules.accounts import UserSummary
from shared.models import CamelModel


class SessionClaims(BaseModel):
    """
    Decoded session credential payload.

    The credential is stateless: these claims plus the signature and
    expiry are everything the server knows about a session.
    """

    sub: str = Field(..., description="Subject (user ID)")
    username: str = Field(..., description="Username at issue time")
    role: str = Field(..., description="Role at issue time")
    tenant_ref: Optional[str] = Field(None, description="Tenant ID, None for admins")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")
    aud: str = Field(default="barida-session", description="Audience")
    iss: str = Field(default="barida-identity", description="Issuer")

    model_config = {"frozen": True, "extra": "ignore"}


class IssuedSession(BaseModel):
    """A freshly signed session credential and its claims."""

    token: str
    claims: SessionClaims


class LoginRequest(CamelModel):
    """Credentials plus the subdomain the client is on."""

    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)
    subdomain: Optional[str] = Field(
        None,
        description="Subdomain observed by the client; falls back to the Host header",
    )


class LoginResponse(CamelModel):
    """
    Result of a successful login.

    When redirect_url is set, the client must navigate there instead of
    using the credential on the current origin.
    """

    session_credential: str
    user: UserSummary
    requires_biometric: bool
    redirect_url: Optional[str] = None


class BootstrapPayload(BaseModel):
    """Session data extracted from a Redirect Bridge URL."""

    session_credential: str
    claims: SessionClaims
    user: dict[str, Any]
