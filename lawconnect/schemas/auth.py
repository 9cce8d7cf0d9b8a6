"""Schemas related to OAuth flows."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class OAuthExchangeRequest(BaseModel):
    """Payload sent by the web client after the user grants consent."""

    model_config = ConfigDict(populate_by_name=True)

    code: str = Field(..., min_length=1, description="Authorization code from Google.")
    user_id: str = Field(..., alias="userId", min_length=1)
    redirect_uri: str = Field(
        ...,
        alias="redirectUri",
        min_length=1,
        description="Redirect URI used when the code was issued.",
    )


class OAuthExchangeResponse(BaseModel):
    success: bool = True
    message: str


class OAuthRefreshRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1)


class OAuthRefreshResponse(BaseModel):
    """Fresh access token for trusted internal callers."""

    success: bool = True
    access_token: str
    expires_at: datetime


class AuthorizationUrlResponse(BaseModel):
    authorization_url: str


__all__ = [
    "AuthorizationUrlResponse",
    "OAuthExchangeRequest",
    "OAuthExchangeResponse",
    "OAuthRefreshRequest",
    "OAuthRefreshResponse",
]
