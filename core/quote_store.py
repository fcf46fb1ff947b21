"""Quote store service: the single writer of the quote collection.

The store wraps a :class:`~core.repository.QuoteBackend`, translates
repository failures into :class:`~core.exceptions.QuoteStorageError`, reports
missing ids as ``None``/``False`` and publishes a :class:`QuoteEvent` after
every successful mutation so widget surfaces know to re-render.

Updates:
  v0.3.0 - 2026-09-18 - Seed sample quotes on first load of an empty collection.
  v0.2.0 - 2026-09-11 - Sample random quotes by offset instead of loading all rows.
  v0.1.0 - 2026-09-03 - Extract quote CRUD orchestration from the repository layer.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from models.quote_model import Quote

from .exceptions import QuoteStorageError
from .notifications import QuoteEvent, QuoteEventCenter, QuoteEventKind
from .repository import RepositoryError, RepositoryNotFoundError

if TYPE_CHECKING:
    import uuid
    from collections.abc import Callable

    from .notifications import Subscription
    from .repository import QuoteBackend

logger = logging.getLogger("quote_widget.store")

SAMPLE_QUOTES: tuple[tuple[str, str], ...] = (
    ("Jedynym sposobem na dobrą robotę jest kochać to, co się robi.", "Steve Jobs"),
    (
        "Życie jest tym, co dzieje się, gdy jesteś zajęty robieniem innych planów.",
        "John Lennon",
    ),
    (
        "Sukces to nie klucz do szczęścia. Szczęście jest kluczem do sukcesu.",
        "Albert Schweitzer",
    ),
    ("Nie liczy się to, ile masz lat, ale jak je przeżyłeś.", "Abraham Lincoln"),
    ("Bądź zmianą, którą chcesz widzieć w świecie.", "Mahatma Gandhi"),
)


class QuoteStore:
    """CRUD, search, and random sampling over the persisted quotes."""

    def __init__(
        self,
        backend: QuoteBackend,
        *,
        events: QuoteEventCenter | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._backend = backend
        self._events = events or QuoteEventCenter()
        self._rng = rng or random.Random()

    @property
    def events(self) -> QuoteEventCenter:
        return self._events

    def subscribe(self, callback: Callable[[QuoteEvent], None]) -> Subscription:
        """Register *callback* for change events."""
        return self._events.subscribe(callback)

    def unsubscribe(self, callback: Callable[[QuoteEvent], None]) -> None:
        self._events.unsubscribe(callback)

    # Reads ------------------------------------------------------------- #

    def fetch_all(self, search_filter: str | None = None) -> list[Quote]:
        """Return quotes newest first, filtered by text/author when requested.

        Matching ignores case and diacritics but not whitespace; only None or an
        empty filter returns everything.
        """
        try:
            return self._backend.list(search_filter)
        except RepositoryError as exc:
            logger.error("Fetching quotes failed: %s", exc)
            raise QuoteStorageError("Failed to fetch quotes") from exc

    def get(self, quote_id: uuid.UUID) -> Quote | None:
        """Return the quote with *quote_id*, or None when it does not exist."""
        try:
            return self._backend.get(quote_id)
        except RepositoryNotFoundError:
            return None
        except RepositoryError as exc:
            logger.error("Loading quote %s failed: %s", quote_id, exc)
            raise QuoteStorageError(f"Failed to load quote {quote_id}") from exc

    def count(self) -> int:
        try:
            return self._backend.count()
        except RepositoryError as exc:
            logger.error("Counting quotes failed: %s", exc)
            raise QuoteStorageError("Failed to count quotes") from exc

    def random_pick(self) -> Quote | None:
        """Return one quote chosen at random, or None when the store is empty.

        Counts rows, draws an offset in ``[0, count)`` and fetches exactly that
        row, so memory use does not grow with the collection. A concurrent
        insert or delete between the two reads skews the distribution slightly
        and may yield None when the offset no longer exists.
        """
        total = self.count()
        if total <= 0:
            return None
        offset = self._rng.randrange(total)
        try:
            return self._backend.fetch_at_offset(offset)
        except RepositoryError as exc:
            logger.error("Fetching quote at offset %s failed: %s", offset, exc)
            raise QuoteStorageError("Failed to pick a random quote") from exc

    # Mutations --------------------------------------------------------- #

    def add(self, text: str, author: str) -> Quote:
        """Persist a new quote stamped with the current time and return it."""
        quote = Quote.create(text, author)
        try:
            stored = self._backend.add(quote)
        except RepositoryError as exc:
            logger.error("Saving quote %s failed: %s", quote.id, exc)
            raise QuoteStorageError(f"Failed to persist quote {quote.id}") from exc
        logger.debug("Quote added", extra={"quote_id": str(stored.id)})
        self._events.publish(QuoteEvent(QuoteEventKind.ADDED, stored.id))
        return stored

    def update(self, quote_id: uuid.UUID, text: str, author: str) -> bool:
        """Replace text/author of an existing quote; False when the id is unknown."""
        current = self.get(quote_id)
        if current is None:
            return False
        try:
            self._backend.update(current.with_content(text, author))
        except RepositoryNotFoundError:
            return False
        except RepositoryError as exc:
            logger.error("Updating quote %s failed: %s", quote_id, exc)
            raise QuoteStorageError(f"Failed to update quote {quote_id}") from exc
        logger.debug("Quote updated", extra={"quote_id": str(quote_id)})
        self._events.publish(QuoteEvent(QuoteEventKind.UPDATED, quote_id))
        return True

    def delete(self, quote_id: uuid.UUID) -> bool:
        """Remove the quote with *quote_id*; False when the id is unknown."""
        try:
            self._backend.delete(quote_id)
        except RepositoryNotFoundError:
            return False
        except RepositoryError as exc:
            logger.error("Deleting quote %s failed: %s", quote_id, exc)
            raise QuoteStorageError(f"Failed to delete quote {quote_id}") from exc
        logger.debug("Quote deleted", extra={"quote_id": str(quote_id)})
        self._events.publish(QuoteEvent(QuoteEventKind.DELETED, quote_id))
        return True

    def ensure_seeded(self, samples: tuple[tuple[str, str], ...] = SAMPLE_QUOTES) -> int:
        """Insert *samples* when the collection is empty; return the inserted count."""
        if self.count() > 0:
            return 0
        inserted = 0
        for text, author in samples:
            quote = Quote.create(text, author)
            try:
                self._backend.add(quote)
            except RepositoryError as exc:
                logger.error("Seeding sample quote failed: %s", exc)
                raise QuoteStorageError("Failed to seed sample quotes") from exc
            inserted += 1
        logger.info("Seeded %d sample quotes", inserted)
        self._events.publish(QuoteEvent(QuoteEventKind.SEEDED))
        return inserted


__all__ = ["SAMPLE_QUOTES", "QuoteStore"]
