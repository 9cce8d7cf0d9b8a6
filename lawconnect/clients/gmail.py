"""Thin wrapper around the Gmail "send raw message" endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from lawconnect.core.errors import DeliveryError

logger = logging.getLogger(__name__)


class GmailClient:
    """Deliver pre-encoded MIME messages on behalf of the token owner."""

    SEND_URL = "https://gmail.googleapis.com/gmail/v1/users/me/messages/send"

    def __init__(self, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport

    async def send_raw(self, *, access_token: str, raw: str) -> dict[str, Any]:
        """POST a base64url encoded message and return Gmail's response body."""
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(
                timeout=10.0, transport=self._transport
            ) as client:
                response = await client.post(
                    self.SEND_URL, headers=headers, json={"raw": raw}
                )
        except httpx.HTTPError as exc:
            logger.error("Gmail send request failed: %s", exc)
            raise DeliveryError(f"Error enviando email: {exc}") from exc

        if not response.is_success:
            reason = self._error_message(response)
            logger.error("Gmail rejected message (%s): %s", response.status_code, reason)
            raise DeliveryError(
                f"Error enviando email: {reason}", details=response.text
            )

        return response.json() if response.content else {}

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or "Error desconocido"
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        return "Error desconocido"


__all__ = ["GmailClient"]
