"""In-memory quote backend mirroring the SQLite repository contract.

Updates:
  v0.1.1 - 2026-10-20 - Stop trimming search filters.
  v0.1.0 - 2026-09-11 - Add dict-backed backend for tests and ephemeral runs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import RepositoryError, RepositoryNotFoundError, fold_text

if TYPE_CHECKING:
    import uuid

    from models.quote_model import Quote


class InMemoryQuoteRepository:
    """Keep quotes in a dict keyed by id; nothing survives the process."""

    def __init__(self) -> None:
        self._rows: dict[uuid.UUID, Quote] = {}
        self._sequence: dict[uuid.UUID, int] = {}
        self._counter = 0

    def add(self, quote: Quote) -> Quote:
        if quote.id in self._rows:
            raise RepositoryError(f"Quote {quote.id} already exists")
        self._counter += 1
        self._rows[quote.id] = quote
        self._sequence[quote.id] = self._counter
        return quote

    def get(self, quote_id: uuid.UUID) -> Quote:
        try:
            return self._rows[quote_id]
        except KeyError:
            raise RepositoryNotFoundError(f"Quote {quote_id} not found") from None

    def update(self, quote: Quote) -> Quote:
        stored = self._rows.get(quote.id)
        if stored is None:
            raise RepositoryNotFoundError(f"Quote {quote.id} not found")
        updated = stored.with_content(quote.text, quote.author)
        self._rows[quote.id] = updated
        return updated

    def delete(self, quote_id: uuid.UUID) -> None:
        if self._rows.pop(quote_id, None) is None:
            raise RepositoryNotFoundError(f"Quote {quote_id} not found")
        self._sequence.pop(quote_id, None)

    def list(self, search_filter: str | None = None) -> list[Quote]:
        needle = fold_text(search_filter)
        ordered = sorted(
            self._rows.values(),
            key=lambda quote: (quote.date_added, self._sequence[quote.id]),
            reverse=True,
        )
        if not needle:
            return ordered
        return [
            quote
            for quote in ordered
            if needle in fold_text(quote.text) or needle in fold_text(quote.author)
        ]

    def count(self) -> int:
        return len(self._rows)

    def fetch_at_offset(self, offset: int) -> Quote | None:
        ordered = self.list()
        if 0 <= offset < len(ordered):
            return ordered[offset]
        return None


__all__ = ["InMemoryQuoteRepository"]
