"""
Google OAuth token lifecycle: code exchange, refresh, and freshness checks.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from lawconnect.clients.google_auth import GoogleOAuthClient, TokenGrant
from lawconnect.core.errors import (
    NotFoundError,
    PreconditionError,
    ProviderExchangeError,
)
from lawconnect.models import OAuthTokenRecord
from lawconnect.services.token_store import TokenStore

logger = logging.getLogger(__name__)

# Gmail access is granted by the calendar consent flow; there is no separate
# mail connection a user could set up.
MAIL_REQUIRES_CALENDAR = (
    "No tienes conectado Google Calendar. Conéctalo primero para enviar emails."
)


class GoogleTokenService:
    """Manages persisted Google OAuth tokens for each user."""

    def __init__(self, *, store: TokenStore, oauth_client: GoogleOAuthClient) -> None:
        self._store = store
        self._oauth = oauth_client

    async def exchange_code(
        self, *, code: str, user_id: str, redirect_uri: str
    ) -> OAuthTokenRecord:
        """Trade an authorization code for tokens and upsert the user's record."""
        grant = await self._oauth.exchange_authorization_code(code, redirect_uri)
        issued_at = datetime.now(timezone.utc)

        refresh_token = grant.refresh_token
        if not refresh_token:
            # Google omits the refresh token when consent was granted before.
            existing = await self._store.get(user_id)
            if existing is None:
                raise ProviderExchangeError(
                    "Failed to exchange code for tokens",
                    details="Google did not return a refresh token.",
                )
            refresh_token = existing.refresh_token

        record = OAuthTokenRecord(
            user_id=user_id,
            access_token=grant.access_token,
            refresh_token=refresh_token,
            expires_at=issued_at + timedelta(seconds=grant.expires_in),
            scope=grant.scope,
        )
        await self._store.upsert(record)
        logger.info("Stored Google tokens for user %s", user_id)
        return record

    async def refresh(self, *, user_id: str) -> OAuthTokenRecord:
        """Refresh the user's access token regardless of its expiry."""
        record = await self._store.get(user_id)
        if record is None:
            raise NotFoundError("No Google Calendar tokens found for user")
        return await self._refresh_record(record)

    async def ensure_fresh_token(self, user_id: str) -> str:
        """Return a usable access token, refreshing it first if it has expired."""
        record = await self._store.get(user_id)
        if record is None:
            raise PreconditionError(MAIL_REQUIRES_CALENDAR)
        if record.is_expired():
            record = await self._refresh_record(record)
        return record.access_token

    async def _refresh_record(self, record: OAuthTokenRecord) -> OAuthTokenRecord:
        grant: TokenGrant = await self._oauth.refresh_access_token(record.refresh_token)
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=grant.expires_in)
        # A persistence failure here propagates; the new token is discarded
        # and the next call refreshes again.
        await self._store.update_access_token(
            user_id=record.user_id,
            access_token=grant.access_token,
            expires_at=expires_at,
        )
        logger.info("Refreshed Google access token for user %s", record.user_id)
        return record.model_copy(
            update={"access_token": grant.access_token, "expires_at": expires_at}
        )


__all__ = ["GoogleTokenService", "MAIL_REQUIRES_CALENDAR"]
