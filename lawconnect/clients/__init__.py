"""Expose constructed client wrappers."""

from .gmail import GmailClient
from .google_auth import GoogleOAuthClient, TokenGrant
from .supabase import (
    PrivilegedAccessor,
    ScopedAccessor,
    SupabaseAuthClient,
    SupabaseRestClient,
    SupabaseTable,
)

__all__ = [
    "GmailClient",
    "GoogleOAuthClient",
    "PrivilegedAccessor",
    "ScopedAccessor",
    "SupabaseAuthClient",
    "SupabaseRestClient",
    "SupabaseTable",
    "TokenGrant",
]
