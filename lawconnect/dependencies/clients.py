"""
Factory functions to provide shared clients and services as FastAPI dependencies.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from lawconnect.clients import (
    GmailClient,
    GoogleOAuthClient,
    SupabaseRestClient,
)
from lawconnect.core.config import get_settings
from lawconnect.dependencies.auth import AuthenticatedUser, get_authenticated_user
from lawconnect.services import (
    ClientDirectory,
    EmailDispatchService,
    GoogleTokenService,
    ReminderRepository,
    TokenCipherService,
    TokenStore,
)


@lru_cache()
def get_google_oauth_client() -> GoogleOAuthClient:
    """Create a singleton Google OAuth client."""
    settings = get_settings()
    return GoogleOAuthClient(settings.google, settings.oauth)


@lru_cache()
def get_gmail_client() -> GmailClient:
    return GmailClient()


@lru_cache()
def get_supabase_rest_client() -> SupabaseRestClient:
    """Provide the factory for scoped and privileged table access."""
    return SupabaseRestClient(get_settings().supabase)


@lru_cache()
def get_token_cipher_service() -> TokenCipherService:
    """Provide symmetric encryption helper for refresh token storage."""
    settings = get_settings()
    secret = settings.security.token_encryption_secret or settings.google.client_secret
    return TokenCipherService(secret=secret)


@lru_cache()
def get_token_store() -> TokenStore:
    settings = get_settings()
    return TokenStore(
        accessor=get_supabase_rest_client().privileged(),
        table_name=settings.supabase.tokens_table,
        token_cipher=get_token_cipher_service(),
    )


@lru_cache()
def get_google_token_service() -> GoogleTokenService:
    """Provide helper for managing Google OAuth tokens."""
    return GoogleTokenService(
        store=get_token_store(),
        oauth_client=get_google_oauth_client(),
    )


def get_client_directory(
    user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    rest_client: Annotated[SupabaseRestClient, Depends(get_supabase_rest_client)],
) -> ClientDirectory:
    """Client lookups run with the caller's own credentials."""
    return ClientDirectory(
        accessor=rest_client.scoped(user.access_token),
        table_name=get_settings().supabase.clients_table,
    )


def get_reminder_repository(
    user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    rest_client: Annotated[SupabaseRestClient, Depends(get_supabase_rest_client)],
) -> ReminderRepository:
    return ReminderRepository(
        accessor=rest_client.scoped(user.access_token),
        table_name=get_settings().supabase.reminders_table,
        clients_table=get_settings().supabase.clients_table,
    )


def get_email_dispatch_service(
    directory: Annotated[ClientDirectory, Depends(get_client_directory)],
    reminders: Annotated[ReminderRepository, Depends(get_reminder_repository)],
    token_service: Annotated[GoogleTokenService, Depends(get_google_token_service)],
    gmail_client: Annotated[GmailClient, Depends(get_gmail_client)],
) -> EmailDispatchService:
    """Build a dispatch service bound to the authenticated caller."""
    return EmailDispatchService(
        directory=directory,
        reminders=reminders,
        token_service=token_service,
        gmail_client=gmail_client,
    )


__all__ = [
    "get_client_directory",
    "get_email_dispatch_service",
    "get_gmail_client",
    "get_google_oauth_client",
    "get_google_token_service",
    "get_reminder_repository",
    "get_supabase_rest_client",
    "get_token_cipher_service",
    "get_token_store",
]
