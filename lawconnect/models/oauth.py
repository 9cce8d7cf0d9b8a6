"""
Domain models for OAuth token persistence.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class OAuthTokenRecord(BaseModel):
    """A user's Google credentials as stored in the tokens table.

    There is at most one record per ``user_id``; writes go through an upsert
    keyed on that column.
    """

    user_id: str
    access_token: str
    refresh_token: str = Field(..., repr=False)
    expires_at: datetime
    scope: Optional[str] = None
    updated_at: Optional[datetime] = None

    @field_validator("expires_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Return True once ``expires_at`` has been reached."""
        now = now or datetime.now(timezone.utc)
        return self.expires_at <= now


__all__ = ["OAuthTokenRecord"]
