"""
Audit record of an email sent, or scheduled, to a client.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, field_validator, model_validator

from .cliente import ClientSummary


class ReminderStatus(str, Enum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"
    CANCELLED = "cancelled"


class ReminderRecord(BaseModel):
    """One row of the reminders table.

    Pending rows are left for an external scheduler; nothing in this service
    delivers them later. The scheduler moves them to ``sent`` or ``failed``
    and records ``error_message`` on failure.
    """

    id: Optional[str] = None
    user_id: str
    cliente_id: str
    caso_id: Optional[str] = None
    subject: str
    message: str
    recipient_email: str
    scheduled_for: datetime
    sent_at: Optional[datetime] = None
    status: ReminderStatus
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None
    cliente: Optional[ClientSummary] = None

    @field_validator("id", "cliente_id", "caso_id", mode="before")
    @classmethod
    def _coerce_identifier(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @field_validator("scheduled_for", "sent_at", "created_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def _sent_rows_carry_timestamp(self) -> ReminderRecord:
        if self.status is ReminderStatus.SENT and self.sent_at is None:
            raise ValueError("A sent reminder must record sent_at.")
        return self

    def to_row(self) -> dict[str, Any]:
        """Serialize for insertion, leaving server-generated columns out."""
        return self.model_dump(
            mode="json", exclude={"id", "created_at", "cliente"}, exclude_none=True
        )


__all__ = ["ReminderRecord", "ReminderStatus"]
