"""In-memory stand-ins for the store and Google endpoints used across tests."""

from __future__ import annotations

import json
from datetime import datetime
from types import SimpleNamespace
from typing import Any
from urllib.parse import parse_qsl

import httpx
from postgrest import APIResponse

from lawconnect.core.config import GoogleSettings, OAuthSettings, SupabaseSettings
from lawconnect.core.errors import NotFoundError
from lawconnect.models import ClientContact, OAuthTokenRecord, ReminderRecord


def google_settings() -> GoogleSettings:
    return GoogleSettings(client_id="client", client_secret="secret")


def oauth_settings() -> OAuthSettings:
    return OAuthSettings()


def supabase_settings() -> SupabaseSettings:
    return SupabaseSettings(
        url="https://project.supabase.co",
        service_role_key="service-key",
        anon_key="anon-key",
    )


class InMemoryTokenStore:
    def __init__(self) -> None:
        self.records: dict[str, OAuthTokenRecord] = {}
        self.upserts = 0
        self.updates: list[dict] = []

    async def get(self, user_id: str) -> OAuthTokenRecord | None:
        record = self.records.get(user_id)
        return record.model_copy() if record else None

    async def upsert(self, record: OAuthTokenRecord) -> None:
        self.upserts += 1
        self.records[record.user_id] = record

    async def update_access_token(
        self, *, user_id: str, access_token: str, expires_at: datetime
    ) -> None:
        self.updates.append({"user_id": user_id, "access_token": access_token})
        self.records[user_id] = self.records[user_id].model_copy(
            update={"access_token": access_token, "expires_at": expires_at}
        )


class FakeGoogleAPIs:
    """Serves the token endpoint and Gmail send endpoint from memory."""

    def __init__(
        self,
        *,
        token_status: int = 200,
        token_body: dict | str | None = None,
        send_status: int = 200,
        send_body: dict | None = None,
    ) -> None:
        self.token_status = token_status
        self.token_body = (
            token_body
            if token_body is not None
            else {"access_token": "new-access", "expires_in": 3600}
        )
        self.send_status = send_status
        self.send_body = send_body if send_body is not None else {"id": "msg-1"}
        self.token_requests: list[dict[str, str]] = []
        self.sent: list[dict[str, str]] = []

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == "oauth2.googleapis.com":
            self.token_requests.append(dict(parse_qsl(request.content.decode())))
            if isinstance(self.token_body, str):
                return httpx.Response(self.token_status, text=self.token_body)
            return httpx.Response(self.token_status, json=self.token_body)
        if request.url.host == "gmail.googleapis.com":
            self.sent.append(
                {
                    "authorization": request.headers["authorization"],
                    "raw": json.loads(request.content)["raw"],
                }
            )
            return httpx.Response(self.send_status, json=self.send_body)
        raise AssertionError(f"Unexpected request to {request.url}")


class StubClientDirectory:
    def __init__(self, contacts: dict[tuple[str, str], ClientContact]) -> None:
        self._contacts = contacts
        self.lookups: list[tuple[str, str]] = []

    async def get_contact(self, *, cliente_id: str, user_id: str) -> ClientContact:
        self.lookups.append((cliente_id, user_id))
        contact = self._contacts.get((cliente_id, user_id))
        if contact is None:
            raise NotFoundError("Cliente no encontrado")
        return contact


class RecordingReminderRepository:
    def __init__(self) -> None:
        self.inserted: list[ReminderRecord] = []

    async def insert(self, record: ReminderRecord) -> ReminderRecord:
        self.inserted.append(record)
        return record


class FakeQuery:
    """Records a query builder chain and answers ``execute`` from its client."""

    def __init__(self, client: "FakeSupabase", table: str) -> None:
        self._client = client
        self.table = table
        self.calls: list[tuple[str, tuple, dict]] = []

    def _chain(self, name: str, *args: Any, **kwargs: Any) -> "FakeQuery":
        self.calls.append((name, args, kwargs))
        return self

    def select(self, *args: Any, **kwargs: Any) -> "FakeQuery":
        return self._chain("select", *args, **kwargs)

    def insert(self, *args: Any, **kwargs: Any) -> "FakeQuery":
        return self._chain("insert", *args, **kwargs)

    def upsert(self, *args: Any, **kwargs: Any) -> "FakeQuery":
        return self._chain("upsert", *args, **kwargs)

    def update(self, *args: Any, **kwargs: Any) -> "FakeQuery":
        return self._chain("update", *args, **kwargs)

    def eq(self, *args: Any, **kwargs: Any) -> "FakeQuery":
        return self._chain("eq", *args, **kwargs)

    def order(self, *args: Any, **kwargs: Any) -> "FakeQuery":
        return self._chain("order", *args, **kwargs)

    def limit(self, *args: Any, **kwargs: Any) -> "FakeQuery":
        return self._chain("limit", *args, **kwargs)

    def call(self, name: str) -> tuple[tuple, dict]:
        for call_name, args, kwargs in self.calls:
            if call_name == name:
                return args, kwargs
        raise AssertionError(f"{name} was not called on {self.table}")

    @property
    def operation(self) -> str:
        return self.calls[0][0]

    @property
    def filters(self) -> dict[str, Any]:
        return {args[0]: args[1] for name, args, _ in self.calls if name == "eq"}

    async def execute(self) -> APIResponse:
        result = self._client.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return APIResponse(data=result, count=None)


class FakePostgrest:
    def __init__(self) -> None:
        self.token: str | None = None

    def auth(self, token: str) -> "FakePostgrest":
        self.token = token
        return self


class FakeAuth:
    def __init__(self, users: dict[str, str]) -> None:
        self._users = users
        self.tokens: list[str] = []

    async def get_user(self, jwt: str | None = None) -> SimpleNamespace | None:
        self.tokens.append(jwt)
        user_id = self._users.get(jwt)
        if user_id is None:
            return None
        return SimpleNamespace(user=SimpleNamespace(id=user_id, email=f"{user_id}@example.com"))


class FakeSupabase:
    """Stands in for ``supabase.AsyncClient``; results are served in order."""

    def __init__(self, *results: Any, users: dict[str, str] | None = None) -> None:
        self.results = list(results)
        self.queries: list[FakeQuery] = []
        self.keys: list[str] = []
        self.postgrest = FakePostgrest()
        self.auth = FakeAuth(users or {})

    def table(self, name: str) -> FakeQuery:
        query = FakeQuery(self, name)
        self.queries.append(query)
        return query

    def factory(self, key: str) -> "FakeSupabase":
        self.keys.append(key)
        return self
