"""
Verification API endpoints.

generate-verification requires a session. The status, stream and
completion endpoints are called from the identity origin, which has no
session, so the token itself is the only credential they accept.
"""

import asyncio
import logging
from typing import AsyncIterator, Awaitable, Callable

from fastapi import APIRouter, Depends
from sse_starlette.sse import EventSourceResponse

from api.dependencies import get_verification_service
from api.middleware.auth import get_current_user
from shared.config import Settings, get_settings
from shared.models import AuthenticatedUser

from .exceptions import VerificationTokenError
from .interfaces import IVerificationService
from .models import (
    CompleteRequest,
    CompleteResponse,
    IssueTokenResponse,
    StatusResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/generate-verification",
    response_model=IssueTokenResponse,
    response_model_by_alias=True,
)
async def generate_verification(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IVerificationService = Depends(get_verification_service),
) -> IssueTokenResponse:
    """
    Issue a verification token for the current user.

    Any earlier open token of the user stops working.
    """
    return await service.issue_token(user)


@router.get(
    "/verification-status/{token}",
    response_model=StatusResponse,
    response_model_by_alias=True,
)
async def verification_status(
    token: str,
    service: IVerificationService = Depends(get_verification_service),
) -> StatusResponse:
    """
    Check whether verification for a token is still pending.

    Unknown, used and expired tokens all return the same 404.
    """
    return await service.check_status(token)


@router.post("/verify-biometric", response_model=CompleteResponse, response_model_by_alias=True)
async def verify_biometric(
    body: CompleteRequest,
    service: IVerificationService = Depends(get_verification_service),
) -> CompleteResponse:
    """
    Complete verification with the captured photo.
    """
    return await service.complete_verification(body.token, body.photo_data)


async def status_events(
    token: str,
    service: IVerificationService,
    interval_seconds: float,
    max_attempts: int,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> AsyncIterator[dict]:
    """
    Generate SSE events for a token.

    Yields `pending` events while verification is outstanding and ends
    with one `done` event. The stream is bounded by max_attempts and by
    the token's expiry, which check_status enforces.

    Yields events in the format:
        event: pending | done
        data: <json_data>
    """
    for attempt in range(1, max_attempts + 1):
        try:
            status = await service.check_status(token)
        except VerificationTokenError:
            yield {"event": "done", "data": '{"pending":false}'}
            return

        if not status.pending:
            yield {"event": "done", "data": status.model_dump_json(by_alias=True)}
            return

        yield {"event": "pending", "data": status.model_dump_json(by_alias=True)}
        if attempt < max_attempts:
            await sleep(interval_seconds)

    yield {"event": "done", "data": '{"pending":true,"timedOut":true}'}


@router.get("/verification-status/{token}/stream")
async def stream_verification_status(
    token: str,
    service: IVerificationService = Depends(get_verification_service),
    settings: Settings = Depends(get_settings),
):
    """
    Push the status of a token via SSE instead of client polling.

    The token must be open when the stream starts; otherwise this returns
    the same 404 as the status endpoint.
    """
    await service.check_status(token)
    return EventSourceResponse(
        status_events(
            token,
            service,
            settings.verification_poll_interval_seconds,
            settings.verification_poll_max_attempts,
        ),
        media_type="text/event-stream",
    )
