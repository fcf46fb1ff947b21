"""Shared preference channel tests for SQLite and Redis backends."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from core import (
    DailyPick,
    PreferenceStorageError,
    RedisPreferenceChannel,
    SQLitePreferenceChannel,
    WidgetPreferences,
)
from core.preferences import DAILY_QUOTE_ID_KEY, LAST_QUOTE_DATE_KEY, PINNED_QUOTE_ID_KEY

if TYPE_CHECKING:
    from pathlib import Path

_WARSAW_SUMMER = timezone(timedelta(hours=2))


class _FakeRedis:
    """Subset of redis-py used by the preference channel."""

    def __init__(self, *, fail: bool = False) -> None:
        self.data: dict[str, Any] = {}
        self._fail = fail

    def _check(self) -> None:
        if self._fail:
            raise RedisConnectionError("connection refused")

    def get(self, key: str) -> Any:
        self._check()
        return self.data.get(key)

    def set(self, key: str, value: str) -> bool:
        self._check()
        self.data[key] = value.encode("utf-8")
        return True

    def delete(self, key: str) -> int:
        self._check()
        return 1 if self.data.pop(key, None) is not None else 0


def test_sqlite_channel_get_set_clear(tmp_path: Path) -> None:
    channel = SQLitePreferenceChannel(tmp_path / "group" / "preferences.sqlite")

    assert channel.get("missing") is None
    channel.set("key", "one")
    channel.set("key", "two")
    assert channel.get("key") == "two"

    channel.clear("key")
    channel.clear("key")
    assert channel.get("key") is None


def test_sqlite_channel_is_visible_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "preferences.sqlite"
    app_side = SQLitePreferenceChannel(path)
    widget_side = SQLitePreferenceChannel(path)

    app_side.set(PINNED_QUOTE_ID_KEY, "abc")

    assert widget_side.get(PINNED_QUOTE_ID_KEY) == "abc"


def test_redis_channel_namespaces_keys_and_decodes_bytes() -> None:
    client = _FakeRedis()
    channel = RedisPreferenceChannel(client, "group.test")  # type: ignore[arg-type]

    channel.set(DAILY_QUOTE_ID_KEY, "value")

    assert client.data == {f"group.test:{DAILY_QUOTE_ID_KEY}": b"value"}
    assert channel.get(DAILY_QUOTE_ID_KEY) == "value"
    channel.clear(DAILY_QUOTE_ID_KEY)
    assert channel.get(DAILY_QUOTE_ID_KEY) is None


def test_redis_errors_become_preference_errors() -> None:
    channel = RedisPreferenceChannel(_FakeRedis(fail=True), "group.test")  # type: ignore[arg-type]

    with pytest.raises(PreferenceStorageError):
        channel.get(PINNED_QUOTE_ID_KEY)
    with pytest.raises(PreferenceStorageError):
        channel.set(PINNED_QUOTE_ID_KEY, "x")


def test_widget_preferences_pin_roundtrip(tmp_path: Path) -> None:
    preferences = WidgetPreferences(SQLitePreferenceChannel(tmp_path / "prefs.sqlite"))
    quote_id = uuid.uuid4()

    assert preferences.pinned_quote_id() is None
    preferences.pin(quote_id)
    assert preferences.pinned_quote_id() == quote_id
    preferences.clear_pin()
    assert preferences.pinned_quote_id() is None


def test_widget_preferences_daily_pick_roundtrip(tmp_path: Path) -> None:
    channel = SQLitePreferenceChannel(tmp_path / "prefs.sqlite")
    preferences = WidgetPreferences(channel)
    quote_id = uuid.uuid4()
    chosen_at = datetime(2026, 10, 18, 8, 15, tzinfo=_WARSAW_SUMMER)

    preferences.record_daily_pick(quote_id, chosen_at)

    assert preferences.daily_pick() == DailyPick(quote_id=quote_id, chosen_at=chosen_at)
    assert channel.get(LAST_QUOTE_DATE_KEY) == chosen_at.isoformat()


@pytest.mark.parametrize(
    ("daily_id", "last_date"),
    [
        ("not-a-uuid", "2026-10-18T08:00:00+02:00"),
        (str(uuid.uuid4()), "yesterday-ish"),
        (None, "2026-10-18T08:00:00+02:00"),
        (str(uuid.uuid4()), None),
    ],
)
def test_unreadable_daily_pick_reads_as_absent(
    tmp_path: Path,
    daily_id: str | None,
    last_date: str | None,
) -> None:
    channel = SQLitePreferenceChannel(tmp_path / "prefs.sqlite")
    if daily_id is not None:
        channel.set(DAILY_QUOTE_ID_KEY, daily_id)
    if last_date is not None:
        channel.set(LAST_QUOTE_DATE_KEY, last_date)

    assert WidgetPreferences(channel).daily_pick() is None


def test_daily_pick_compares_calendar_days_in_callers_timezone() -> None:
    # 23:30 UTC on the 17th is already the 18th in Warsaw.
    pick = DailyPick(quote_id=uuid.uuid4(), chosen_at=datetime(2026, 10, 17, 23, 30, tzinfo=UTC))

    assert pick.is_same_day(datetime(2026, 10, 18, 7, 0, tzinfo=_WARSAW_SUMMER))
    assert not pick.is_same_day(datetime(2026, 10, 19, 0, 5, tzinfo=_WARSAW_SUMMER))
    assert not pick.is_same_day(datetime(2026, 10, 18, 7, 0, tzinfo=UTC))
