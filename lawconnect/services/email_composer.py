"""
Build the branded reminder email and encode it for Gmail's ``raw`` field.
"""

from __future__ import annotations

import base64
import html
from email.message import EmailMessage
from string import Template

_REMINDER_TEMPLATE = Template(
    """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <style>
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
        .container { max-width: 600px; margin: 0 auto; padding: 20px; }
        .header { background-color: #89b4fa; color: white; padding: 20px; text-align: center; }
        .content { padding: 20px; background-color: #f9f9f9; }
        .footer { padding: 20px; text-align: center; color: #666; font-size: 12px; }
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>LawConnect</h1>
        </div>
        <div class="content">
            <p>Estimado/a $nombre,</p>
            <div>$body</div>
        </div>
        <div class="footer">
            <p>Este email fue enviado desde LawConnect</p>
        </div>
    </div>
</body>
</html>
"""
)


def render_reminder_html(*, nombre: str, message: str) -> str:
    """Fill the template; the message is escaped and newlines become <br>."""
    lines = html.escape(message).splitlines()
    return _REMINDER_TEMPLATE.substitute(
        nombre=html.escape(nombre), body="<br>".join(lines)
    )


def build_reminder_message(
    *, recipient: str, subject: str, nombre: str, message: str
) -> EmailMessage:
    msg = EmailMessage()
    msg["To"] = recipient
    msg["Subject"] = subject
    msg.set_content(
        render_reminder_html(nombre=nombre, message=message),
        subtype="html",
        charset="utf-8",
    )
    return msg


def encode_base64url(data: bytes) -> str:
    """URL-safe base64 with the ``=`` padding stripped, as Gmail expects."""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def decode_base64url(value: str) -> bytes:
    padding = "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode(value + padding)


__all__ = [
    "build_reminder_message",
    "decode_base64url",
    "encode_base64url",
    "render_reminder_html",
]
