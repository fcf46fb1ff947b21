"""UI-agnostic list state for the quotes screen.

Updates:
  v0.1.1 - 2026-09-19 - Clear armed deletions whenever the collection changes.
  v0.1.0 - 2026-09-17 - Extract search/refresh/delete-confirm state from the list view.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import QuoteStorageError, QuoteValidationError

if TYPE_CHECKING:
    import uuid

    from models.quote_model import Quote

    from .notifications import QuoteEvent
    from .quote_store import QuoteStore

logger = logging.getLogger("quote_widget.quote_list")


def validate_quote_fields(text: str, author: str) -> tuple[str, str]:
    """Return stripped *text*/*author*, raising when either is blank."""
    cleaned_text = (text or "").strip()
    cleaned_author = (author or "").strip()
    missing = [
        name for name, value in (("text", cleaned_text), ("author", cleaned_author)) if not value
    ]
    if missing:
        raise QuoteValidationError(f"Quote {' and '.join(missing)} must not be empty")
    return cleaned_text, cleaned_author


class QuoteListModel:
    """Visible quotes for the current search plus per-row delete confirmation."""

    def __init__(self, store: QuoteStore) -> None:
        self._store = store
        self._search_text = ""
        self._quotes: list[Quote] = []
        self._armed: set[uuid.UUID] = set()
        self._subscription = store.subscribe(self._on_store_event)
        self.refresh()

    @property
    def quotes(self) -> list[Quote]:
        return list(self._quotes)

    @property
    def search_text(self) -> str:
        return self._search_text

    @search_text.setter
    def search_text(self, value: str) -> None:
        self._search_text = value or ""
        self.refresh()

    def refresh(self) -> bool:
        """Refetch the visible quotes; on failure keep the previous list."""
        try:
            self._quotes = self._store.fetch_all(self._search_text)
        except QuoteStorageError:
            logger.warning("Quote list refresh failed; keeping stale rows", exc_info=True)
            return False
        return True

    def close(self) -> None:
        self._subscription.close()

    # Editing ------------------------------------------------------------ #

    def add(self, text: str, author: str) -> Quote:
        cleaned_text, cleaned_author = validate_quote_fields(text, author)
        return self._store.add(cleaned_text, cleaned_author)

    def update(self, quote_id: uuid.UUID, text: str, author: str) -> bool:
        cleaned_text, cleaned_author = validate_quote_fields(text, author)
        return self._store.update(quote_id, cleaned_text, cleaned_author)

    # Delete confirmation ------------------------------------------------ #

    def is_armed(self, quote_id: uuid.UUID) -> bool:
        return quote_id in self._armed

    def arm_delete(self, quote_id: uuid.UUID) -> None:
        """Reveal the delete action for one row."""
        self._armed.add(quote_id)

    def disarm(self, quote_id: uuid.UUID) -> None:
        self._armed.discard(quote_id)

    def confirm_delete(self, quote_id: uuid.UUID) -> bool:
        """Delete an armed row; rows that were not armed are left alone."""
        if quote_id not in self._armed:
            return False
        self._armed.discard(quote_id)
        return self._store.delete(quote_id)

    def _on_store_event(self, event: QuoteEvent) -> None:
        if not event.kind.is_data_change:
            return
        self._armed.clear()
        self.refresh()


__all__ = ["QuoteListModel", "validate_quote_fields"]
