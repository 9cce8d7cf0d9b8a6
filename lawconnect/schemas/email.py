"""Schemas for the email reminder endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EmailDispatchRequest(BaseModel):
    """Send now, or schedule for later, an email to one of the caller's clients."""

    model_config = ConfigDict(populate_by_name=True)

    cliente_id: str = Field(..., alias="clienteId", min_length=1)
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    scheduled_for: Optional[datetime] = Field(
        None,
        alias="scheduledFor",
        description="Delivery time; omitted or past values mean send immediately.",
    )

    @field_validator("cliente_id", mode="before")
    @classmethod
    def _coerce_cliente_id(cls, value):
        return str(value) if isinstance(value, int) else value

    @field_validator("subject")
    @classmethod
    def _single_line_subject(cls, value: str) -> str:
        if "\r" in value or "\n" in value:
            raise ValueError("subject must be a single line")
        return value

    @field_validator("scheduled_for")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class EmailDispatchResponse(BaseModel):
    success: bool = True
    message: str


class ReminderCancelResponse(BaseModel):
    success: bool = True
    message: str = "Recordatorio cancelado"


__all__ = [
    "EmailDispatchRequest",
    "EmailDispatchResponse",
    "ReminderCancelResponse",
]
