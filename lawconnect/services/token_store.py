"""
Persistence of per-user Google credentials.

Only this module touches the tokens table, and only through the privileged
accessor: refresh tokens must never be readable by a browser session.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from lawconnect.clients.supabase import PrivilegedAccessor
from lawconnect.core.errors import PersistenceError
from lawconnect.models import OAuthTokenRecord
from lawconnect.services.token_cipher import TokenCipherService

logger = logging.getLogger(__name__)


class TokenStore:
    """Read, upsert and refresh rows of the tokens table."""

    def __init__(
        self,
        *,
        accessor: PrivilegedAccessor,
        table_name: str,
        token_cipher: TokenCipherService,
    ) -> None:
        self._table = accessor.table(table_name)
        self._cipher = token_cipher

    async def get(self, user_id: str) -> Optional[OAuthTokenRecord]:
        rows = await self._table.select(
            "user_id,access_token,refresh_token,expires_at,scope,updated_at",
            filters={"user_id": user_id},
            order_by="expires_at",
            descending=True,
            limit=1,
        )
        if not rows:
            return None
        row = dict(rows[0])
        try:
            row["refresh_token"] = self._cipher.unseal(row.get("refresh_token") or "")
        except ValueError as exc:
            logger.error("Stored refresh token for user %s is unreadable", user_id)
            raise PersistenceError("Stored refresh token could not be decrypted") from exc
        return OAuthTokenRecord.model_validate(row)

    async def upsert(self, record: OAuthTokenRecord) -> None:
        """Insert or replace the single row keyed by ``user_id``."""
        row = {
            "user_id": record.user_id,
            "access_token": record.access_token,
            "refresh_token": self._cipher.seal(record.refresh_token),
            "expires_at": record.expires_at.isoformat(),
            "scope": record.scope,
            "updated_at": _utcnow().isoformat(),
        }
        await self._table.upsert(row, on_conflict="user_id")

    async def update_access_token(
        self, *, user_id: str, access_token: str, expires_at: datetime
    ) -> None:
        """Patch the access token in place; refresh token and scope are untouched."""
        updated = await self._table.update(
            {
                "access_token": access_token,
                "expires_at": expires_at.isoformat(),
                "updated_at": _utcnow().isoformat(),
            },
            filters={"user_id": user_id},
        )
        if not updated:
            raise PersistenceError("Failed to update tokens", details="No token row matched.")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


__all__ = ["TokenStore"]
