"""Branch coverage tests for core.factory helpers.

Updates:
  v0.1.1 - 2026-09-15 - Cover Redis channel selection and DSN failures.
  v0.1.0 - 2026-09-04 - Add service wiring tests.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

import pytest
from redis.exceptions import RedisError

from config import QuoteWidgetSettings
from core import (
    InMemoryQuoteRepository,
    QuoteStorageError,
    RedisPreferenceChannel,
    SQLitePreferenceChannel,
    build_preference_channel,
    build_quote_store,
    build_services,
)
from core.factory import _resolve_redis_client

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from pathlib import Path

    from redis import Redis
else:  # pragma: no cover - runtime placeholders
    Redis = Any


class _RedisStub:
    def __init__(self, label: str = "redis") -> None:
        self.label = label
        self.data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> bool:
        self.data[key] = value
        return True

    def delete(self, key: str) -> int:
        return 1 if self.data.pop(key, None) is not None else 0


def _make_settings(tmp_path: Path, **overrides: object) -> QuoteWidgetSettings:
    values: dict[str, object] = {"shared_container_path": tmp_path / "group"}
    values.update(overrides)
    return QuoteWidgetSettings(**values)  # type: ignore[arg-type]


def _as_redis(value: object) -> Redis:
    return cast("Redis", value)


def test_resolve_redis_client_returns_existing_instance() -> None:
    existing = _as_redis(_RedisStub())
    assert _resolve_redis_client("redis://localhost", existing) == (existing, None)


def test_resolve_redis_client_skips_without_dsn() -> None:
    assert _resolve_redis_client(None, None) == (None, None)


def test_resolve_redis_client_invokes_from_url(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, bool]] = []

    def _from_url(url: str, *, decode_responses: bool = False) -> Redis:
        calls.append((url, decode_responses))
        return _as_redis(_RedisStub(url))

    monkeypatch.setattr("core.factory.redis.from_url", _from_url)

    client, reason = _resolve_redis_client("redis://cache", None)

    assert isinstance(client, _RedisStub)
    assert client.label == "redis://cache"
    assert reason is None
    assert calls == [("redis://cache", True)]


def test_resolve_redis_client_reports_configuration_errors(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def _from_url(url: str, **_: object) -> Redis:
        raise RedisError("bad scheme")

    monkeypatch.setattr("core.factory.redis.from_url", _from_url)

    client, reason = _resolve_redis_client("nope://", None)

    assert client is None
    assert reason is not None and "bad scheme" in reason


def test_preference_channel_defaults_to_sqlite(tmp_path: Path) -> None:
    settings = _make_settings(tmp_path)

    channel = build_preference_channel(settings)

    assert isinstance(channel, SQLitePreferenceChannel)
    assert settings.preferences_path.exists()


def test_preference_channel_uses_redis_namespace(tmp_path: Path) -> None:
    settings = _make_settings(tmp_path, redis_dsn="redis://localhost:6379/0")
    stub = _RedisStub()

    channel = build_preference_channel(settings, redis_client=_as_redis(stub))
    channel.set("pinnedQuoteID", "abc")

    assert isinstance(channel, RedisPreferenceChannel)
    assert stub.data == {f"{settings.app_group}:pinnedQuoteID": "abc"}


def test_broken_redis_dsn_falls_back_to_sqlite(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    def _from_url(url: str, **_: object) -> Redis:
        raise ValueError("invalid DSN")

    monkeypatch.setattr("core.factory.redis.from_url", _from_url)
    settings = _make_settings(tmp_path, redis_dsn="redis://")

    with caplog.at_level(logging.WARNING, logger="quote_widget.factory"):
        channel = build_preference_channel(settings)

    assert isinstance(channel, SQLitePreferenceChannel)
    assert "Redis preference channel disabled" in caplog.text


def test_build_quote_store_seeds_on_first_load(tmp_path: Path) -> None:
    settings = _make_settings(tmp_path)

    first = build_quote_store(settings)
    second = build_quote_store(settings)

    assert first.count() == 5
    assert second.count() == 5
    assert settings.db_path.exists()


def test_build_quote_store_respects_seed_flag(tmp_path: Path) -> None:
    settings = _make_settings(tmp_path, seed_sample_quotes=False)

    assert build_quote_store(settings).count() == 0


def test_build_quote_store_wraps_open_failures(tmp_path: Path) -> None:
    settings = _make_settings(tmp_path, db_filename="quotes.sqlite")
    settings.db_path.mkdir(parents=True)

    with pytest.raises(QuoteStorageError):
        build_quote_store(settings)


def test_build_services_shares_events_between_store_and_actions(tmp_path: Path) -> None:
    backend = InMemoryQuoteRepository()
    services = build_services(
        _make_settings(tmp_path, seed_sample_quotes=False),
        backend=backend,
        channel=SQLitePreferenceChannel(tmp_path / "prefs.sqlite"),
    )
    received = []
    services.events.subscribe(received.append)

    quote = services.store.add("Cytat", "Autor")
    services.actions.pin(quote.id)

    assert services.store.events is services.events
    assert [event.quote_id for event in received] == [quote.id, quote.id]
    assert services.resolver.resolve().id == quote.id
    assert services.list_model().quotes[0].id == quote.id
