"""Bearer authentication for endpoints that act on behalf of a signed-in user."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends, Header

from lawconnect.clients import SupabaseAuthClient
from lawconnect.core.config import get_settings
from lawconnect.core.errors import AuthenticationError


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str
    access_token: str = field(repr=False)


@lru_cache()
def get_supabase_auth_client() -> SupabaseAuthClient:
    return SupabaseAuthClient(get_settings().supabase)


async def get_authenticated_user(
    auth_client: Annotated[SupabaseAuthClient, Depends(get_supabase_auth_client)],
    authorization: Annotated[Optional[str], Header()] = None,
) -> AuthenticatedUser:
    """Validate the bearer JWT with the identity service; never trust a body user id."""
    if not authorization:
        raise AuthenticationError("No authorization header")
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthenticationError("Invalid authorization header")

    user = await auth_client.get_user(token)
    return AuthenticatedUser(id=str(user["id"]), access_token=token)


__all__ = ["AuthenticatedUser", "get_authenticated_user", "get_supabase_auth_client"]
