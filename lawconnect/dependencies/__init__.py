"""Expose dependency helpers for FastAPI routers."""

from .auth import AuthenticatedUser, get_authenticated_user, get_supabase_auth_client
from .clients import (
    get_client_directory,
    get_email_dispatch_service,
    get_gmail_client,
    get_google_oauth_client,
    get_google_token_service,
    get_reminder_repository,
    get_supabase_rest_client,
    get_token_cipher_service,
    get_token_store,
)

__all__ = [
    "AuthenticatedUser",
    "get_authenticated_user",
    "get_client_directory",
    "get_email_dispatch_service",
    "get_gmail_client",
    "get_google_oauth_client",
    "get_google_token_service",
    "get_reminder_repository",
    "get_supabase_auth_client",
    "get_supabase_rest_client",
    "get_token_cipher_service",
    "get_token_store",
]
