"""
FastAPI routes for the LawConnect backend.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from lawconnect.core.config import AppSettings, get_settings
from lawconnect.core.errors import ValidationError
from lawconnect.dependencies import (
    AuthenticatedUser,
    get_authenticated_user,
    get_email_dispatch_service,
    get_google_oauth_client,
    get_google_token_service,
    get_reminder_repository,
)
from lawconnect.models import ReminderRecord
from lawconnect.schemas import (
    AuthorizationUrlResponse,
    EmailDispatchRequest,
    EmailDispatchResponse,
    OAuthExchangeRequest,
    OAuthExchangeResponse,
    OAuthRefreshRequest,
    OAuthRefreshResponse,
    ReminderCancelResponse,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.get("/auth/google/authorize", response_model=AuthorizationUrlResponse)
async def build_google_consent_url(
    oauth_client: Annotated[Any, Depends(get_google_oauth_client)],
    settings: Annotated[AppSettings, Depends(get_settings)],
    redirect_uri: str | None = Query(
        default=None,
        description="Where Google should send the user back; defaults to configuration.",
    ),
    state: str | None = Query(default=None),
) -> AuthorizationUrlResponse:
    """Return the Google consent URL for the calendar (and mail) grant."""
    target = redirect_uri or settings.google.redirect_uri
    if not target:
        raise ValidationError("Missing required parameter: redirect_uri")
    url = oauth_client.build_authorization_url(str(target), state=state)
    return AuthorizationUrlResponse(authorization_url=url)


@router.post("/auth/google/exchange", response_model=OAuthExchangeResponse)
async def exchange_google_code(
    payload: OAuthExchangeRequest,
    token_service: Annotated[Any, Depends(get_google_token_service)],
) -> OAuthExchangeResponse:
    """Complete the OAuth exchange and store tokens; nothing is echoed back."""
    await token_service.exchange_code(
        code=payload.code,
        user_id=payload.user_id,
        redirect_uri=payload.redirect_uri,
    )
    return OAuthExchangeResponse(message="Google Calendar connected successfully")


@router.post("/auth/google/refresh", response_model=OAuthRefreshResponse)
async def refresh_google_token(
    payload: OAuthRefreshRequest,
    token_service: Annotated[Any, Depends(get_google_token_service)],
) -> OAuthRefreshResponse:
    """Refresh a user's access token for trusted internal callers."""
    record = await token_service.refresh(user_id=payload.user_id)
    return OAuthRefreshResponse(
        access_token=record.access_token, expires_at=record.expires_at
    )


@router.post("/email/send", response_model=EmailDispatchResponse)
async def send_email_reminder(
    payload: EmailDispatchRequest,
    user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    dispatch_service: Annotated[Any, Depends(get_email_dispatch_service)],
) -> EmailDispatchResponse:
    """Send now, or schedule, an email to one of the caller's clients."""
    return await dispatch_service.dispatch(user_id=user.id, request=payload)


@router.get("/email/reminders", response_model=list[ReminderRecord])
async def list_email_reminders(
    user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    reminders: Annotated[Any, Depends(get_reminder_repository)],
) -> list[ReminderRecord]:
    """List the caller's reminders, newest first."""
    return await reminders.list_for_user(user.id)


@router.post(
    "/email/reminders/{reminder_id}/cancel", response_model=ReminderCancelResponse
)
async def cancel_email_reminder(
    reminder_id: str,
    user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    reminders: Annotated[Any, Depends(get_reminder_repository)],
) -> ReminderCancelResponse:
    await reminders.cancel(reminder_id=reminder_id, user_id=user.id)
    return ReminderCancelResponse()
