"""Domain models persisted in the hosted store."""

from .cliente import ClientContact, ClientSummary
from .oauth import OAuthTokenRecord
from .reminder import ReminderRecord, ReminderStatus

__all__ = [
    "ClientContact",
    "ClientSummary",
    "OAuthTokenRecord",
    "ReminderRecord",
    "ReminderStatus",
]
