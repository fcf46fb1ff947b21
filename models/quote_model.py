"""Quote data model definitions.

Updates:
  v0.2.0 - 2026-09-14 - Add placeholder quotes shown by the widget surfaces.
  v0.1.0 - 2026-09-02 - Introduce Quote dataclass with SQLite record helpers.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Any


def _utc_now() -> datetime:
    """Return an aware UTC timestamp."""
    return datetime.now(UTC)


def _ensure_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if value:
        parsed = datetime.fromisoformat(str(value))
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    return _utc_now()


@dataclass(slots=True)
class Quote:
    """Text/author pair stamped with the moment it was added."""

    id: uuid.UUID
    text: str
    author: str
    date_added: datetime = field(default_factory=_utc_now)

    @classmethod
    def create(cls, text: str, author: str) -> Quote:
        """Return a new quote with a fresh identifier added right now."""
        return cls(id=uuid.uuid4(), text=text, author=author)

    def with_content(self, text: str, author: str) -> Quote:
        """Return a copy carrying new text/author; id and date stay fixed."""
        return replace(self, text=text, author=author)

    def to_record(self) -> dict[str, Any]:
        """Return a mapping suitable for SQLite persistence."""
        return {
            "id": str(self.id),
            "text": self.text,
            "author": self.author,
            "date_added": self.date_added.astimezone(UTC).isoformat(timespec="microseconds"),
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> Quote:
        """Hydrate a Quote from a stored mapping.

        Missing text or author become empty strings and a missing timestamp
        becomes the load time, so hydrated quotes never carry ``None``.
        """
        return cls(
            id=uuid.UUID(str(data.get("id") or uuid.uuid4())),
            text=str(data.get("text") or ""),
            author=str(data.get("author") or ""),
            date_added=_ensure_datetime(data.get("date_added")),
        )


PLACEHOLDER_TEXT = "Dodaj swój pierwszy cytat!"
LOADING_TEXT = "Ładowanie..."


def placeholder_quote() -> Quote:
    """Return the quote shown when the collection is empty (never persisted)."""
    return Quote.create(PLACEHOLDER_TEXT, "")


def loading_quote() -> Quote:
    """Return the quote rendered in widget placeholders while data loads."""
    return Quote.create(LOADING_TEXT, "")


__all__ = [
    "LOADING_TEXT",
    "PLACEHOLDER_TEXT",
    "Quote",
    "loading_quote",
    "placeholder_quote",
]
