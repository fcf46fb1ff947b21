"""Factories for wiring quote widget services from validated settings.

Updates:
  v0.2.0 - 2026-09-15 - Select the Redis preference channel when a DSN is configured.
  v0.1.0 - 2026-09-04 - Build store, preferences, resolver, and timeline from settings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import redis
from redis.exceptions import RedisError

from .exceptions import QuoteStorageError
from .notifications import QuoteEventCenter
from .preferences import (
    PreferenceChannel,
    RedisPreferenceChannel,
    SQLitePreferenceChannel,
    WidgetPreferences,
)
from .quote_list import QuoteListModel
from .quote_store import QuoteStore
from .repository import QuoteRepository, RepositoryError
from .widget import WidgetActions, WidgetResolver, WidgetTimelineProvider

if TYPE_CHECKING:  # pragma: no cover - typing only
    from redis import Redis

    from config import QuoteWidgetSettings

    from .repository import QuoteBackend

factory_logger = logging.getLogger("quote_widget.factory")


@dataclass(slots=True)
class QuoteWidgetServices:
    """Explicitly constructed services shared by the app and widget roles."""

    store: QuoteStore
    preferences: WidgetPreferences
    resolver: WidgetResolver
    timeline: WidgetTimelineProvider
    actions: WidgetActions
    events: QuoteEventCenter

    def list_model(self) -> QuoteListModel:
        """Return a list model bound to this store."""
        return QuoteListModel(self.store)


def _resolve_redis_client(
    redis_dsn: str | None,
    redis_client: Redis | None,
) -> tuple[Redis | None, str | None]:
    """Create a Redis client when a DSN is provided but no client supplied."""
    if redis_client is not None or not redis_dsn:
        return redis_client, None
    try:
        client = redis.from_url(redis_dsn, decode_responses=True)
    except (ValueError, RedisError) as exc:
        reason = (
            "Redis preference channel disabled: unable to configure the client. "
            f"DSN={redis_dsn!s}; error={exc}"
        )
        return None, reason
    return client, None


def build_preference_channel(
    settings: QuoteWidgetSettings,
    *,
    redis_client: Redis | None = None,
) -> PreferenceChannel:
    """Return the Redis channel when configured, otherwise the shared SQLite file."""
    client, reason = _resolve_redis_client(settings.redis_dsn, redis_client)
    if reason:
        factory_logger.warning(reason)
    if client is not None:
        return RedisPreferenceChannel(client, settings.app_group)
    return SQLitePreferenceChannel(settings.preferences_path)


def build_quote_store(
    settings: QuoteWidgetSettings,
    *,
    backend: QuoteBackend | None = None,
    events: QuoteEventCenter | None = None,
) -> QuoteStore:
    """Open the quote collection and seed it on first load when enabled."""
    if backend is None:
        try:
            backend = QuoteRepository(settings.db_path)
        except RepositoryError as exc:
            raise QuoteStorageError(
                f"Unable to open quote database at {settings.db_path}"
            ) from exc
    store = QuoteStore(backend, events=events)
    if settings.seed_sample_quotes:
        store.ensure_seeded()
    return store


def build_services(
    settings: QuoteWidgetSettings,
    *,
    backend: QuoteBackend | None = None,
    channel: PreferenceChannel | None = None,
    redis_client: Redis | None = None,
) -> QuoteWidgetServices:
    """Wire every service from *settings*, honouring injected test doubles."""
    events = QuoteEventCenter()
    store = build_quote_store(settings, backend=backend, events=events)
    resolved_channel = channel or build_preference_channel(settings, redis_client=redis_client)
    preferences = WidgetPreferences(resolved_channel)
    resolver = WidgetResolver(store, preferences)
    factory_logger.debug(
        "Quote widget services ready",
        extra={
            "db_path": str(settings.db_path),
            "channel": type(resolved_channel).__name__,
        },
    )
    return QuoteWidgetServices(
        store=store,
        preferences=preferences,
        resolver=resolver,
        timeline=WidgetTimelineProvider(resolver),
        actions=WidgetActions(preferences, events),
        events=events,
    )


__all__ = [
    "QuoteWidgetServices",
    "build_preference_channel",
    "build_quote_store",
    "build_services",
]
