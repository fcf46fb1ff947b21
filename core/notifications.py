"""Change notification hub shared by the quote store and widget surfaces.

Updates:
  v0.2.0 - 2026-09-13 - Add widget reload events for pin and manual refresh.
  v0.1.0 - 2026-09-03 - Introduce quote event centre with disposable subscriptions.
"""
from __future__ import annotations

import logging
import threading
import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger("quote_widget.notifications")


class QuoteEventKind(str, Enum):
    """What changed in shared state."""
    ADDED = "added"
    UPDATED = "updated"
    DELETED = "deleted"
    SEEDED = "seeded"
    WIDGET_RELOAD = "widget_reload"

    @property
    def is_data_change(self) -> bool:
        """Return True for events emitted after the quote collection changed."""
        return self is not QuoteEventKind.WIDGET_RELOAD


@dataclass(slots=True)
class QuoteEvent:
    """Payload describing one change; quote_id is None for collection-wide events."""
    kind: QuoteEventKind
    quote_id: uuid.UUID | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        """Return a serialisable representation of the event."""
        return {
            "kind": self.kind.value,
            "quote_id": str(self.quote_id) if self.quote_id else None,
            "timestamp": self.timestamp.isoformat(),
        }


class Subscription:
    """Disposable handle that removes its callback when closed."""
    def __init__(
        self,
        center: QuoteEventCenter,
        callback: Callable[[QuoteEvent], None],
    ) -> None:
        self._center = center
        self._callback = callback
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Detach the stored callback if it is still active."""
        if self._closed:
            return
        self._closed = True
        self._center.unsubscribe(self._callback)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()


class QuoteEventCenter:
    """Thread-safe publish/subscribe hub for quote change events."""
    def __init__(self, history_limit: int = 100) -> None:
        """Initialise the subscriber registry and bounded history queue."""
        self._subscribers: list[Callable[[QuoteEvent], None]] = []
        self._lock = threading.RLock()
        self._history: deque[QuoteEvent] = deque(maxlen=history_limit)

    def subscribe(self, callback: Callable[[QuoteEvent], None]) -> Subscription:
        """Register *callback* to receive future events."""
        with self._lock:
            self._subscribers.append(callback)
        return Subscription(self, callback)

    def unsubscribe(self, callback: Callable[[QuoteEvent], None]) -> None:
        """Remove a previously subscribed callback if present."""
        with self._lock:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass

    def publish(self, event: QuoteEvent) -> None:
        """Deliver *event* to all registered subscribers."""
        with self._lock:
            self._history.append(event)
            subscribers = list(self._subscribers)

        logger.debug(
            "Quote event",
            extra={
                "kind": event.kind.value,
                "quote_id": str(event.quote_id) if event.quote_id else None,
            },
        )

        for callback in subscribers:
            try:
                callback(event)
            except Exception:  # pragma: no cover - keep one subscriber from breaking others
                logger.exception("Quote event subscriber raised an exception")

    def history(self) -> tuple[QuoteEvent, ...]:
        """Return a snapshot of stored events."""
        with self._lock:
            return tuple(self._history)


__all__ = [
    "QuoteEvent",
    "QuoteEventCenter",
    "QuoteEventKind",
    "Subscription",
]
