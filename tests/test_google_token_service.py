from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from _fakes import FakeGoogleAPIs, InMemoryTokenStore, google_settings, oauth_settings
from lawconnect.clients.google_auth import GoogleOAuthClient
from lawconnect.core.errors import (
    NotFoundError,
    PreconditionError,
    ProviderExchangeError,
)
from lawconnect.models import OAuthTokenRecord
from lawconnect.services.google_tokens import GoogleTokenService


def _service(fake: FakeGoogleAPIs, store: InMemoryTokenStore) -> GoogleTokenService:
    oauth_client = GoogleOAuthClient(
        google_settings(), oauth_settings(), transport=fake.transport
    )
    return GoogleTokenService(store=store, oauth_client=oauth_client)


def _stored(user_id: str = "user-1", *, expires_in: timedelta) -> OAuthTokenRecord:
    return OAuthTokenRecord(
        user_id=user_id,
        access_token="stale-access",
        refresh_token="R",
        expires_at=datetime.now(timezone.utc) + expires_in,
        scope="https://www.googleapis.com/auth/calendar",
    )


@pytest.mark.anyio
async def test_exchange_stores_record_with_provider_lifetime() -> None:
    fake = FakeGoogleAPIs(
        token_body={
            "access_token": "access-1",
            "refresh_token": "refresh-1",
            "expires_in": 3600,
            "scope": "calendar",
        }
    )
    store = InMemoryTokenStore()

    before = datetime.now(timezone.utc)
    await _service(fake, store).exchange_code(
        code="code-1", user_id="user-1", redirect_uri="https://app.example.com/cb"
    )
    after = datetime.now(timezone.utc)

    record = store.records["user-1"]
    assert record.access_token == "access-1"
    assert record.refresh_token == "refresh-1"
    assert record.scope == "calendar"
    assert before + timedelta(seconds=3600) <= record.expires_at
    assert record.expires_at <= after + timedelta(seconds=3600)


@pytest.mark.anyio
async def test_exchanging_twice_keeps_one_record() -> None:
    fake = FakeGoogleAPIs(
        token_body={"access_token": "a", "refresh_token": "r", "expires_in": 60}
    )
    store = InMemoryTokenStore()
    service = _service(fake, store)

    await service.exchange_code(code="c1", user_id="user-1", redirect_uri="https://x.example")
    fake.token_body = {"access_token": "b", "refresh_token": "r2", "expires_in": 60}
    await service.exchange_code(code="c2", user_id="user-1", redirect_uri="https://x.example")

    assert list(store.records) == ["user-1"]
    assert store.records["user-1"].access_token == "b"
    assert store.upserts == 2


@pytest.mark.anyio
async def test_failed_exchange_persists_nothing() -> None:
    fake = FakeGoogleAPIs(token_status=400, token_body='{"error": "invalid_grant"}')
    store = InMemoryTokenStore()

    with pytest.raises(ProviderExchangeError):
        await _service(fake, store).exchange_code(
            code="used", user_id="user-1", redirect_uri="https://x.example"
        )

    assert store.records == {}


@pytest.mark.anyio
async def test_exchange_without_refresh_token_reuses_stored_one() -> None:
    fake = FakeGoogleAPIs(token_body={"access_token": "again", "expires_in": 60})
    store = InMemoryTokenStore()
    store.records["user-1"] = _stored(expires_in=timedelta(minutes=-5))

    await _service(fake, store).exchange_code(
        code="c", user_id="user-1", redirect_uri="https://x.example"
    )

    assert store.records["user-1"].refresh_token == "R"
    assert store.records["user-1"].access_token == "again"


@pytest.mark.anyio
async def test_exchange_without_any_refresh_token_fails() -> None:
    fake = FakeGoogleAPIs(token_body={"access_token": "a", "expires_in": 60})
    store = InMemoryTokenStore()

    with pytest.raises(ProviderExchangeError):
        await _service(fake, store).exchange_code(
            code="c", user_id="user-1", redirect_uri="https://x.example"
        )
    assert store.records == {}


@pytest.mark.anyio
async def test_refresh_keeps_refresh_token_and_scope() -> None:
    fake = FakeGoogleAPIs(token_body={"access_token": "fresh", "expires_in": 3600})
    store = InMemoryTokenStore()
    store.records["user-1"] = _stored(expires_in=timedelta(minutes=30))

    refreshed = await _service(fake, store).refresh(user_id="user-1")

    assert refreshed.access_token == "fresh"
    stored = store.records["user-1"]
    assert stored.access_token == "fresh"
    assert stored.refresh_token == "R"
    assert stored.scope == "https://www.googleapis.com/auth/calendar"
    assert fake.token_requests[0]["refresh_token"] == "R"


@pytest.mark.anyio
async def test_refresh_without_record_is_not_found() -> None:
    fake = FakeGoogleAPIs()

    with pytest.raises(NotFoundError):
        await _service(fake, InMemoryTokenStore()).refresh(user_id="nobody")
    assert fake.token_requests == []


@pytest.mark.anyio
async def test_refresh_failure_leaves_record_untouched() -> None:
    fake = FakeGoogleAPIs(token_status=400, token_body='{"error": "invalid_grant"}')
    store = InMemoryTokenStore()
    store.records["user-1"] = _stored(expires_in=timedelta(minutes=-1))

    with pytest.raises(ProviderExchangeError):
        await _service(fake, store).refresh(user_id="user-1")

    assert store.updates == []
    assert store.records["user-1"].access_token == "stale-access"


@pytest.mark.anyio
async def test_ensure_fresh_token_uses_valid_token_as_is() -> None:
    fake = FakeGoogleAPIs()
    store = InMemoryTokenStore()
    store.records["user-1"] = _stored(expires_in=timedelta(minutes=10))

    token = await _service(fake, store).ensure_fresh_token("user-1")

    assert token == "stale-access"
    assert fake.token_requests == []


@pytest.mark.anyio
async def test_ensure_fresh_token_refreshes_expired_token() -> None:
    fake = FakeGoogleAPIs(token_body={"access_token": "fresh", "expires_in": 3600})
    store = InMemoryTokenStore()
    store.records["user-1"] = _stored(expires_in=timedelta(seconds=-1))

    token = await _service(fake, store).ensure_fresh_token("user-1")

    assert token == "fresh"
    assert len(fake.token_requests) == 1
    assert store.records["user-1"].expires_at > datetime.now(timezone.utc)


@pytest.mark.anyio
async def test_ensure_fresh_token_requires_calendar_connection() -> None:
    with pytest.raises(PreconditionError) as excinfo:
        await _service(FakeGoogleAPIs(), InMemoryTokenStore()).ensure_fresh_token("user-1")

    assert "Google Calendar" in excinfo.value.message
