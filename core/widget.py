"""Widget quote resolution, timeline entries, and app-side widget actions.

Updates:
  v0.3.1 - 2026-10-20 - Resolve the next local midnight against the system zone across DST.
  v0.3.0 - 2026-09-20 - Keep resolving when storage reads fail instead of raising.
  v0.2.0 - 2026-09-16 - Add timeline provider refreshing at the next local midnight.
  v0.1.0 - 2026-09-14 - Introduce pinned/daily/random/placeholder resolution policy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone
from enum import Enum
from typing import TYPE_CHECKING

from models.quote_model import Quote, loading_quote, placeholder_quote

from .exceptions import PreferenceStorageError, QuoteStorageError
from .notifications import QuoteEvent, QuoteEventKind

if TYPE_CHECKING:
    import uuid
    from collections.abc import Callable

    from .notifications import QuoteEventCenter
    from .preferences import DailyPick, WidgetPreferences
    from .quote_store import QuoteStore

logger = logging.getLogger("quote_widget.widget")


def local_now() -> datetime:
    """Return the current time as an aware datetime in the local timezone."""
    return datetime.now().astimezone()


def next_local_midnight(now: datetime) -> datetime:
    """Return the start of the calendar day after *now*, in *now*'s timezone.

    A fixed offset matching the system clock (what :func:`local_now` yields) is
    re-resolved against the system zone, so a UTC offset change at midnight
    lands on the real start of the day. Other fixed offsets and ``zoneinfo``
    zones are used as given.
    """
    next_day = now.date() + timedelta(days=1)
    tzinfo = now.tzinfo
    if tzinfo is None:
        return datetime.combine(next_day, time.min)
    if isinstance(tzinfo, timezone) and now.utcoffset() == now.astimezone().utcoffset():
        return datetime.combine(next_day, time.min).astimezone()
    return datetime.combine(next_day, time.min, tzinfo=tzinfo)


class ResolutionTier(str, Enum):
    """Which branch of the resolution policy produced the quote."""

    PINNED = "pinned"
    DAILY = "daily"
    RANDOM = "random"
    PLACEHOLDER = "placeholder"


@dataclass(slots=True, frozen=True)
class Resolution:
    quote: Quote
    tier: ResolutionTier


class WidgetResolver:
    """Decide which quote the widget shows right now.

    Tiers, first match wins: a pinned quote; today's cached daily pick; a
    fresh random pick (cached as today's pick); the never-persisted
    placeholder when the collection is empty. Dangling ids fall through to
    the next tier, and storage failures are logged rather than raised so the
    widget always has something to render.
    """

    def __init__(
        self,
        store: QuoteStore,
        preferences: WidgetPreferences,
        *,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self._store = store
        self._preferences = preferences
        self._clock = clock

    def resolve(self, now: datetime | None = None) -> Quote:
        return self.resolve_with_tier(now).quote

    def resolve_with_tier(self, now: datetime | None = None) -> Resolution:
        current = now or self._clock()

        pinned = self._pinned_quote()
        if pinned is not None:
            return Resolution(pinned, ResolutionTier.PINNED)

        daily = self._daily_quote(current)
        if daily is not None:
            return Resolution(daily, ResolutionTier.DAILY)

        try:
            picked = self._store.random_pick()
        except QuoteStorageError:
            logger.warning("Random quote pick failed; showing placeholder", exc_info=True)
            picked = None
        if picked is None:
            return Resolution(placeholder_quote(), ResolutionTier.PLACEHOLDER)

        try:
            self._preferences.record_daily_pick(picked.id, current)
        except PreferenceStorageError:
            logger.warning("Unable to cache daily quote %s", picked.id, exc_info=True)
        return Resolution(picked, ResolutionTier.RANDOM)

    def _pinned_quote(self) -> Quote | None:
        try:
            pinned_id = self._preferences.pinned_quote_id()
        except PreferenceStorageError:
            logger.warning("Unable to read pinned quote id", exc_info=True)
            return None
        if pinned_id is None:
            return None
        return self._lookup(pinned_id)

    def _daily_quote(self, now: datetime) -> Quote | None:
        try:
            pick: DailyPick | None = self._preferences.daily_pick()
        except PreferenceStorageError:
            logger.warning("Unable to read daily quote cache", exc_info=True)
            return None
        if pick is None or not pick.is_same_day(now):
            return None
        return self._lookup(pick.quote_id)

    def _lookup(self, quote_id: uuid.UUID) -> Quote | None:
        try:
            return self._store.get(quote_id)
        except QuoteStorageError:
            logger.warning("Unable to load quote %s", quote_id, exc_info=True)
            return None


@dataclass(slots=True, frozen=True)
class QuoteEntry:
    """One renderable widget state."""

    date: datetime
    quote: Quote


@dataclass(slots=True, frozen=True)
class Timeline:
    """Entries to render plus the moment the widget should ask again."""

    entries: tuple[QuoteEntry, ...]
    refresh_after: datetime


class WidgetTimelineProvider:
    """Placeholder, snapshot, and timeline requests issued by the widget host."""

    def __init__(
        self,
        resolver: WidgetResolver,
        *,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self._resolver = resolver
        self._clock = clock

    def placeholder(self, now: datetime | None = None) -> QuoteEntry:
        return QuoteEntry(date=now or self._clock(), quote=loading_quote())

    def snapshot(self, now: datetime | None = None) -> QuoteEntry:
        current = now or self._clock()
        return QuoteEntry(date=current, quote=self._resolver.resolve(current))

    def timeline(self, now: datetime | None = None) -> Timeline:
        """Return a single-entry timeline valid until the next local midnight."""
        current = now or self._clock()
        entry = QuoteEntry(date=current, quote=self._resolver.resolve(current))
        return Timeline(entries=(entry,), refresh_after=next_local_midnight(current))


class WidgetActions:
    """App-side controls over what the widget shows."""

    def __init__(self, preferences: WidgetPreferences, events: QuoteEventCenter) -> None:
        self._preferences = preferences
        self._events = events

    def pin(self, quote_id: uuid.UUID) -> None:
        """Show *quote_id* on the widget until the pin is cleared."""
        self._preferences.pin(quote_id)
        logger.info("Pinned quote %s to the widget", quote_id)
        self._events.publish(QuoteEvent(QuoteEventKind.WIDGET_RELOAD, quote_id))

    def refresh(self) -> None:
        """Drop the pin (the daily cache stays) and ask the widget to re-render."""
        self._preferences.clear_pin()
        self._events.publish(QuoteEvent(QuoteEventKind.WIDGET_RELOAD))


__all__ = [
    "QuoteEntry",
    "Resolution",
    "ResolutionTier",
    "Timeline",
    "WidgetActions",
    "WidgetResolver",
    "WidgetTimelineProvider",
    "local_now",
    "next_local_midnight",
]
