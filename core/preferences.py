"""Shared preference channel used by the app and the widget to coordinate display.

Both processes read and write a handful of keys (pinned quote, daily pick)
stored under the app group. Writes are atomic per key and the last writer
wins; there is no compare-and-swap.

Updates:
  v0.2.0 - 2026-09-15 - Add Redis-backed channel selected through redis_dsn.
  v0.1.0 - 2026-09-12 - Introduce SQLite key/value channel and typed widget view.
"""

from __future__ import annotations

import logging
import sqlite3
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from redis.exceptions import RedisError

from .exceptions import PreferenceStorageError
from .repository.base import connect as _connect, ensure_directory as _ensure_directory

if TYPE_CHECKING:
    from redis import Redis

logger = logging.getLogger("quote_widget.preferences")

PINNED_QUOTE_ID_KEY = "pinnedQuoteID"
DAILY_QUOTE_ID_KEY = "dailyQuoteID"
LAST_QUOTE_DATE_KEY = "lastQuoteDate"


class PreferenceChannel(Protocol):
    """Minimal cross-process key/value contract."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def clear(self, key: str) -> None: ...


class SQLitePreferenceChannel:
    """Key/value channel persisted in its own SQLite file inside the shared container."""

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path)
        _ensure_directory(self._db_path)
        try:
            with _connect(self._db_path) as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS preferences (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL
                    );
                    """
                )
        except sqlite3.Error as exc:
            raise PreferenceStorageError("Failed to initialise preference store") from exc

    def get(self, key: str) -> str | None:
        try:
            with _connect(self._db_path) as conn:
                row = conn.execute(
                    "SELECT value FROM preferences WHERE key = ?;", (key,)
                ).fetchone()
        except sqlite3.Error as exc:
            raise PreferenceStorageError(f"Failed to read preference {key}") from exc
        return None if row is None else str(row["value"])

    def set(self, key: str, value: str) -> None:
        try:
            with _connect(self._db_path) as conn:
                conn.execute(
                    "INSERT INTO preferences (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value;",
                    (key, value),
                )
        except sqlite3.Error as exc:
            raise PreferenceStorageError(f"Failed to write preference {key}") from exc

    def clear(self, key: str) -> None:
        try:
            with _connect(self._db_path) as conn:
                conn.execute("DELETE FROM preferences WHERE key = ?;", (key,))
        except sqlite3.Error as exc:
            raise PreferenceStorageError(f"Failed to clear preference {key}") from exc


class RedisPreferenceChannel:
    """Key/value channel stored in Redis under an ``<app_group>:`` namespace."""

    def __init__(self, client: Redis, namespace: str) -> None:
        self._client = client
        self._namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    def get(self, key: str) -> str | None:
        try:
            value = self._client.get(self._key(key))
        except RedisError as exc:
            raise PreferenceStorageError(f"Failed to read preference {key}") from exc
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str) -> None:
        try:
            self._client.set(self._key(key), value)
        except RedisError as exc:
            raise PreferenceStorageError(f"Failed to write preference {key}") from exc

    def clear(self, key: str) -> None:
        try:
            self._client.delete(self._key(key))
        except RedisError as exc:
            raise PreferenceStorageError(f"Failed to clear preference {key}") from exc


@dataclass(slots=True, frozen=True)
class DailyPick:
    """Cached quote-of-the-day id and the moment it was chosen."""

    quote_id: uuid.UUID
    chosen_at: datetime

    def is_same_day(self, now: datetime) -> bool:
        """Return True when the pick falls on *now*'s calendar day in *now*'s timezone."""
        chosen = self.chosen_at.astimezone(now.tzinfo) if now.tzinfo else self.chosen_at
        return chosen.date() == now.date()


def _parse_uuid(value: str | None) -> uuid.UUID | None:
    if not value:
        return None
    try:
        return uuid.UUID(value)
    except ValueError:
        logger.debug("Ignoring malformed quote id in preferences: %r", value)
        return None


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        logger.debug("Ignoring malformed timestamp in preferences: %r", value)
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


class WidgetPreferences:
    """Typed access to the widget keys of a :class:`PreferenceChannel`."""

    def __init__(self, channel: PreferenceChannel) -> None:
        self._channel = channel

    @property
    def channel(self) -> PreferenceChannel:
        return self._channel

    def pinned_quote_id(self) -> uuid.UUID | None:
        return _parse_uuid(self._channel.get(PINNED_QUOTE_ID_KEY))

    def pin(self, quote_id: uuid.UUID) -> None:
        self._channel.set(PINNED_QUOTE_ID_KEY, str(quote_id))

    def clear_pin(self) -> None:
        self._channel.clear(PINNED_QUOTE_ID_KEY)

    def daily_pick(self) -> DailyPick | None:
        """Return the cached daily pick, or None when either key is missing or unreadable."""
        chosen_at = _parse_timestamp(self._channel.get(LAST_QUOTE_DATE_KEY))
        if chosen_at is None:
            return None
        quote_id = _parse_uuid(self._channel.get(DAILY_QUOTE_ID_KEY))
        if quote_id is None:
            return None
        return DailyPick(quote_id=quote_id, chosen_at=chosen_at)

    def record_daily_pick(self, quote_id: uuid.UUID, chosen_at: datetime) -> None:
        """Store the daily pick; both keys are always written together."""
        self._channel.set(DAILY_QUOTE_ID_KEY, str(quote_id))
        self._channel.set(LAST_QUOTE_DATE_KEY, chosen_at.isoformat())


__all__ = [
    "DAILY_QUOTE_ID_KEY",
    "LAST_QUOTE_DATE_KEY",
    "PINNED_QUOTE_ID_KEY",
    "DailyPick",
    "PreferenceChannel",
    "RedisPreferenceChannel",
    "SQLitePreferenceChannel",
    "WidgetPreferences",
]
