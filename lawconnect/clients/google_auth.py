"""
Google OAuth utilities.

These helpers build the consent URL and talk to Google's token endpoint for
the authorization-code and refresh-token grants.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urlencode

import httpx

from lawconnect.core.config import GoogleSettings, OAuthSettings
from lawconnect.core.errors import ProviderExchangeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenGrant:
    """Fields Google returns from a successful token request."""

    access_token: str
    expires_in: int
    refresh_token: Optional[str] = field(default=None, repr=False)
    scope: Optional[str] = None


class GoogleOAuthClient:
    """Build Google authorization URLs and exchange or refresh tokens."""

    AUTH_BASE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"

    def __init__(
        self,
        google_settings: GoogleSettings,
        oauth_settings: OAuthSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._google = google_settings
        self._oauth = oauth_settings
        self._transport = transport

    def build_authorization_url(
        self, redirect_uri: str, state: str | None = None
    ) -> str:
        """Construct the Google OAuth consent URL."""
        params = {
            "client_id": self._google.client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": " ".join(self._oauth.scopes),
            "access_type": "offline",
            "prompt": "consent",
        }
        if state:
            params["state"] = state
        return f"{self.AUTH_BASE_URL}?{urlencode(params)}"

    async def exchange_authorization_code(
        self, code: str, redirect_uri: str
    ) -> TokenGrant:
        """Exchange an authorization code for an access/refresh token pair."""
        payload = {
            "client_id": self._google.client_id,
            "client_secret": self._google.client_secret,
            "code": code,
            "grant_type": "authorization_code",
            "redirect_uri": redirect_uri,
        }
        token_payload = await self._post_token_request(
            payload, failure_message="Failed to exchange code for tokens"
        )
        return self._parse_grant(token_payload)

    async def refresh_access_token(self, refresh_token: str) -> TokenGrant:
        """Mint a new access token from a stored refresh token."""
        payload = {
            "client_id": self._google.client_id,
            "client_secret": self._google.client_secret,
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
        }
        token_payload = await self._post_token_request(
            payload, failure_message="Failed to refresh tokens"
        )
        return self._parse_grant(token_payload)

    async def _post_token_request(
        self, payload: dict[str, str], *, failure_message: str
    ) -> dict:
        try:
            async with httpx.AsyncClient(
                timeout=10.0, transport=self._transport
            ) as client:
                response = await client.post(self.TOKEN_URL, data=payload)
        except httpx.HTTPError as exc:
            logger.error("Google token endpoint unreachable: %s", exc)
            raise ProviderExchangeError(failure_message, details=str(exc)) from exc

        if response.status_code != httpx.codes.OK:
            logger.error(
                "Google %s grant failed (%s): %s",
                payload["grant_type"],
                response.status_code,
                response.text,
            )
            raise ProviderExchangeError(failure_message, details=response.text)

        try:
            return response.json()
        except ValueError as exc:
            raise ProviderExchangeError(
                failure_message, details="Token endpoint returned a non-JSON body."
            ) from exc

    @staticmethod
    def _parse_grant(token_payload: dict) -> TokenGrant:
        access_token = token_payload.get("access_token")
        expires_in = token_payload.get("expires_in")
        if not access_token or not expires_in:
            raise ProviderExchangeError(
                "Incomplete token payload returned from Google."
            )
        return TokenGrant(
            access_token=access_token,
            expires_in=int(expires_in),
            refresh_token=token_payload.get("refresh_token") or None,
            scope=token_payload.get("scope"),
        )


__all__ = ["GoogleOAuthClient", "TokenGrant"]
