"""
Exception handling.

Maps the BaridaError taxonomy onto HTTP responses in one place, so
services raise domain errors and never build HTTP responses themselves.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from modules.tenants import TENANT_NOT_FOUND_MESSAGE, TenantNotFoundError
from modules.verification import TOKEN_NOT_FOUND_MESSAGE, VerificationTokenError
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BaridaError,
    ConfigurationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

from ..models.errors import ErrorResponse

logger = logging.getLogger(__name__)

# Checked in order; the first matching category decides the status
_STATUS_BY_CATEGORY: list[tuple[type[BaridaError], int]] = [
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ConfigurationError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_for(exc: BaridaError) -> int:
    for category, code in _STATUS_BY_CATEGORY:
        if isinstance(exc, category):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(exc: BaridaError) -> ErrorResponse:
    """
    Build the response body for an error.

    Token and workspace lookups answer with one fixed body whatever the
    underlying cause, so responses never reveal which tokens or
    subdomains exist. Authentication failures carry no details.
    """
    if isinstance(exc, VerificationTokenError):
        return ErrorResponse(error="TOKEN_NOT_FOUND", message=TOKEN_NOT_FOUND_MESSAGE)
    if isinstance(exc, TenantNotFoundError):
        return ErrorResponse(error="TENANT_NOT_FOUND", message=TENANT_NOT_FOUND_MESSAGE)
    if isinstance(exc, AuthenticationError):
        return ErrorResponse(error=exc.code, message=exc.message)
    return ErrorResponse(**exc.to_dict())


async def barida_error_handler(request: Request, exc: BaridaError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}: {exc.message}")

    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=status_code,
        content=error_body(exc).model_dump(),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaridaError, barida_error_handler)
