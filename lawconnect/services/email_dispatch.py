"""
Email dispatch: resolve the recipient, make sure the Google token is fresh,
then either send through Gmail or leave a pending reminder for later.

Exactly one reminder row is written per successful dispatch. A failed send
writes nothing, so there is no audit trail for rejected deliveries.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from lawconnect.clients.gmail import GmailClient
from lawconnect.core.errors import ValidationError
from lawconnect.models import ReminderRecord, ReminderStatus
from lawconnect.schemas import EmailDispatchRequest, EmailDispatchResponse
from lawconnect.services.client_directory import ClientDirectory
from lawconnect.services.email_composer import build_reminder_message, encode_base64url
from lawconnect.services.google_tokens import GoogleTokenService
from lawconnect.services.reminders import ReminderRepository

logger = logging.getLogger(__name__)

SENT_MESSAGE = "Email enviado correctamente"
SCHEDULED_MESSAGE = "Email programado correctamente"


class EmailDispatchService:
    """Orchestrates one email request for an authenticated user."""

    def __init__(
        self,
        *,
        directory: ClientDirectory,
        reminders: ReminderRepository,
        token_service: GoogleTokenService,
        gmail_client: GmailClient,
    ) -> None:
        self._directory = directory
        self._reminders = reminders
        self._tokens = token_service
        self._gmail = gmail_client

    async def dispatch(
        self, *, user_id: str, request: EmailDispatchRequest
    ) -> EmailDispatchResponse:
        contact = await self._directory.get_contact(
            cliente_id=request.cliente_id, user_id=user_id
        )
        if not contact.email:
            raise ValidationError("El cliente no tiene email registrado")

        access_token = await self._tokens.ensure_fresh_token(user_id)

        now = datetime.now(timezone.utc)
        scheduled_for = request.scheduled_for or now
        record = ReminderRecord(
            user_id=user_id,
            cliente_id=request.cliente_id,
            subject=request.subject,
            message=request.message,
            recipient_email=contact.email,
            scheduled_for=scheduled_for,
            status=ReminderStatus.PENDING,
        )

        if scheduled_for > now:
            await self._reminders.insert(record)
            logger.info(
                "Scheduled reminder for cliente %s at %s",
                request.cliente_id,
                scheduled_for.isoformat(),
            )
            return EmailDispatchResponse(message=SCHEDULED_MESSAGE)

        message = build_reminder_message(
            recipient=contact.email,
            subject=request.subject,
            nombre=contact.nombre,
            message=request.message,
        )
        await self._gmail.send_raw(
            access_token=access_token, raw=encode_base64url(message.as_bytes())
        )

        sent = record.model_copy(
            update={"status": ReminderStatus.SENT, "sent_at": datetime.now(timezone.utc)}
        )
        await self._reminders.insert(sent)
        logger.info("Sent reminder email to cliente %s", request.cliente_id)
        return EmailDispatchResponse(message=SENT_MESSAGE)


__all__ = ["EmailDispatchService", "SCHEDULED_MESSAGE", "SENT_MESSAGE"]
