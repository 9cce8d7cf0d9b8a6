"""Service layer exports."""

from .client_directory import ClientDirectory
from .email_dispatch import EmailDispatchService
from .google_tokens import GoogleTokenService
from .reminders import ReminderRepository
from .token_cipher import TokenCipherService
from .token_store import TokenStore

__all__ = [
    "ClientDirectory",
    "EmailDispatchService",
    "GoogleTokenService",
    "ReminderRepository",
    "TokenCipherService",
    "TokenStore",
]
