"""
Authentication API endpoints.
"""

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_auth_service
from api.middleware.auth import get_current_user
from modules.accounts import UserSummary
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import LoginRequest, LoginResponse

router = APIRouter()


@router.post("/login", response_model=LoginResponse, response_model_by_alias=True)
async def login(
    body: LoginRequest,
    request: Request,
    service: IAuthService = Depends(get_auth_service),
) -> LoginResponse:
    """
    Log in with username and password.

    When the user belongs to a different origin, the response carries a
    redirectUrl the client must navigate to instead of using the
    credential here.
    """
    return await service.login(body, host=request.headers.get("host", ""))


@router.get("/me", response_model=UserSummary, response_model_by_alias=True)
async def get_me(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> UserSummary:
    """
    Get the current user's stored summary.
    """
    return await service.get_me(user)
