"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for request/response bodies exchanged with the browser clients.

    Fields are declared in snake_case and serialized in camelCase.
    Input is accepted in either form.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class AuthenticatedUser(BaseModel):
    """
    Represents the caller of a request, as proven by a session credential.

    This model is populated from the verified session claims and made
    available to route handlers via dependency injection. It is never
    reloaded from storage, so it reflects the state at login time.
    """

    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Unique login name")
    role: str = Field(..., description="Role at the time the session was issued")
    tenant_ref: Optional[str] = Field(None, description="Tenant ID, None for global admins")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra claims
    }
