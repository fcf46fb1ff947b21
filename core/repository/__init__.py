"""Quote storage backends: SQLite repository plus the pluggable backend protocol.

Updates:
  v0.2.0 - 2026-09-11 - Add QuoteBackend protocol and in-memory backend.
  v0.1.0 - 2026-09-02 - SQLite repository composed from the quote mixin.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from .base import (
    RepositoryError,
    RepositoryNotFoundError,
    connect as _connect,
    ensure_directory as _ensure_directory,
    fold_text,
)
from .memory import InMemoryQuoteRepository
from .quotes import QuoteStoreMixin

if TYPE_CHECKING:
    import uuid

    from models.quote_model import Quote


class QuoteBackend(Protocol):
    """Storage operations the quote store relies on."""

    def add(self, quote: Quote) -> Quote: ...

    def get(self, quote_id: uuid.UUID) -> Quote: ...

    def update(self, quote: Quote) -> Quote: ...

    def delete(self, quote_id: uuid.UUID) -> None: ...

    def list(self, search_filter: str | None = None) -> list[Quote]: ...

    def count(self) -> int: ...

    def fetch_at_offset(self, offset: int) -> Quote | None: ...


class QuoteRepository(QuoteStoreMixin):
    """SQLite-backed quote storage living in the shared container."""

    def __init__(self, db_path: str | Path) -> None:
        """Initialise repository storage and ensure the schema exists."""
        self._db_path = Path(db_path)
        _ensure_directory(self._db_path)
        try:
            with _connect(self._db_path) as conn:
                self._ensure_schema(conn)
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to initialise SQLite schema") from exc

    @property
    def db_path(self) -> Path:
        return self._db_path


__all__ = [
    "InMemoryQuoteRepository",
    "QuoteBackend",
    "QuoteRepository",
    "RepositoryError",
    "RepositoryNotFoundError",
    "_connect",
    "fold_text",
]
