"""
Supabase table and identity clients built on ``supabase-py``.

Table access comes in two capabilities. A scoped accessor forwards the
caller's JWT so row level security applies; a privileged accessor uses the
service-role key and is reserved for the token table.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import AsyncClient, AuthError

from lawconnect.core.config import SupabaseSettings
from lawconnect.core.errors import AuthenticationError, PersistenceError

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], AsyncClient]


class SupabaseTable:
    """CRUD helpers for a single table."""

    def __init__(self, client: AsyncClient, name: str) -> None:
        self._client = client
        self.name = name

    async def select(
        self,
        columns: str = "*",
        *,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        query = _apply_filters(self._client.table(self.name).select(columns), filters)
        if order_by:
            query = query.order(order_by, desc=descending)
        if limit is not None:
            query = query.limit(limit)
        return await self._execute("select", query)

    async def insert(self, row: Mapping[str, Any]) -> list[dict[str, Any]]:
        return await self._execute("insert", self._client.table(self.name).insert(dict(row)))

    async def upsert(
        self, row: Mapping[str, Any], *, on_conflict: str
    ) -> list[dict[str, Any]]:
        query = self._client.table(self.name).upsert(dict(row), on_conflict=on_conflict)
        return await self._execute("upsert", query)

    async def update(
        self, values: Mapping[str, Any], *, filters: Mapping[str, Any]
    ) -> list[dict[str, Any]]:
        if not filters:
            raise ValueError("Refusing to update a table without filters.")
        query = _apply_filters(self._client.table(self.name).update(dict(values)), filters)
        return await self._execute("update", query)

    async def _execute(self, operation: str, query: Any) -> list[dict[str, Any]]:
        try:
            response = await query.execute()
        except APIError as exc:
            logger.error("Store rejected %s on %s: %s", operation, self.name, exc.message)
            raise PersistenceError(
                f"Store request on {self.name} failed", details=exc.message
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Store %s on %s failed: %s", operation, self.name, exc)
            raise PersistenceError(
                f"Store request on {self.name} failed", details=str(exc)
            ) from exc
        return list(response.data or [])


class _TableAccessor:
    def __init__(self, client: AsyncClient) -> None:
        self._client = client

    def table(self, name: str) -> SupabaseTable:
        return SupabaseTable(self._client, name)


class ScopedAccessor(_TableAccessor):
    """Row-level-secured access on behalf of one authenticated caller."""


class PrivilegedAccessor(_TableAccessor):
    """Service-role access that bypasses row level security."""


class SupabaseRestClient:
    """Factory for the two table access capabilities."""

    def __init__(
        self,
        settings: SupabaseSettings,
        *,
        client_factory: Optional[ClientFactory] = None,
    ) -> None:
        self._settings = settings
        self._client_factory = client_factory or self._create_client
        self._privileged: Optional[AsyncClient] = None

    def _create_client(self, key: str) -> AsyncClient:
        return AsyncClient(self._settings.base_url, key)

    def scoped(self, user_jwt: str) -> ScopedAccessor:
        # One client per caller; the JWT replaces the key on PostgREST requests.
        client = self._client_factory(self._settings.gateway_key)
        client.postgrest.auth(user_jwt)
        return ScopedAccessor(client)

    def privileged(self) -> PrivilegedAccessor:
        if self._privileged is None:
            self._privileged = self._client_factory(self._settings.service_role_key)
        return PrivilegedAccessor(self._privileged)


class SupabaseAuthClient:
    """Validate caller JWTs against the Supabase identity service."""

    def __init__(
        self,
        settings: SupabaseSettings,
        *,
        client: Optional[AsyncClient] = None,
    ) -> None:
        self._client = client or AsyncClient(settings.base_url, settings.gateway_key)

    async def get_user(self, access_token: str) -> dict[str, Any]:
        """Return the id and email of the user the JWT belongs to."""
        try:
            response = await self._client.auth.get_user(access_token)
        except AuthError as exc:
            logger.info("Identity service rejected token: %s", exc)
            raise AuthenticationError("Invalid token") from exc
        except httpx.HTTPError as exc:
            logger.error("Identity service unreachable: %s", exc)
            raise AuthenticationError("Unable to validate token") from exc

        user = response.user if response is not None else None
        if user is None or not user.id:
            raise AuthenticationError("Invalid token")
        return {"id": str(user.id), "email": user.email}


def _apply_filters(query: Any, filters: Optional[Mapping[str, Any]]) -> Any:
    for column, value in (filters or {}).items():
        query = query.eq(column, value)
    return query


__all__ = [
    "PrivilegedAccessor",
    "ScopedAccessor",
    "SupabaseAuthClient",
    "SupabaseRestClient",
    "SupabaseTable",
]
