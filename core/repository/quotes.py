"""Quote persistence, search, and offset sampling helpers.

Updates:
  v0.2.1 - 2026-10-20 - Match search filters verbatim; whitespace is significant.
  v0.2.0 - 2026-09-10 - Filter searches inside SQLite through quote_fold.
  v0.1.0 - 2026-09-02 - Extract quote CRUD helpers into mixin.
"""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING, ClassVar

from models.quote_model import Quote

from .base import (
    RepositoryError,
    RepositoryNotFoundError,
    connect as _connect,
    fold_text as _fold_text,
    stringify_uuid as _stringify_uuid,
)

if TYPE_CHECKING:
    import uuid
    from pathlib import Path

_ORDER_CLAUSE = "ORDER BY date_added DESC, rowid DESC"


class QuoteStoreMixin:
    """CRUD, search, and sampling helpers for the quotes table."""

    _db_path: Path

    _COLUMNS: ClassVar[tuple[str, ...]] = ("id", "text", "author", "date_added")

    def _ensure_schema(self, conn: sqlite3.Connection) -> None:
        """Create required tables if they do not exist."""
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS quotes (
                id TEXT PRIMARY KEY,
                text TEXT NOT NULL,
                author TEXT NOT NULL,
                date_added TEXT NOT NULL
            );
            """
        )
        conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_quotes_date_added ON quotes(date_added DESC);"
        )

    def add(self, quote: Quote) -> Quote:
        """Insert a new quote record."""
        payload = quote.to_record()
        placeholders = ", ".join(f":{column}" for column in self._COLUMNS)
        query = f"INSERT INTO quotes ({', '.join(self._COLUMNS)}) VALUES ({placeholders});"
        try:
            with _connect(self._db_path) as conn:
                conn.execute(query, payload)
        except sqlite3.IntegrityError as exc:
            raise RepositoryError(f"Quote {quote.id} already exists") from exc
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to insert quote {quote.id}") from exc
        return quote

    def get(self, quote_id: uuid.UUID) -> Quote:
        """Fetch a quote by UUID."""
        try:
            with _connect(self._db_path) as conn:
                row = conn.execute(
                    "SELECT * FROM quotes WHERE id = ?;",
                    (_stringify_uuid(quote_id),),
                ).fetchone()
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to load quote {quote_id}") from exc
        if row is None:
            raise RepositoryNotFoundError(f"Quote {quote_id} not found")
        return self._row_to_quote(row)

    def update(self, quote: Quote) -> Quote:
        """Persist new text/author for an existing quote.

        Only ``text`` and ``author`` are written; the stored id and
        ``date_added`` are never touched.
        """
        try:
            with _connect(self._db_path) as conn:
                updated = conn.execute(
                    "UPDATE quotes SET text = :text, author = :author WHERE id = :id;",
                    quote.to_record(),
                ).rowcount
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to update quote {quote.id}") from exc
        if updated == 0:
            raise RepositoryNotFoundError(f"Quote {quote.id} not found")
        return quote

    def delete(self, quote_id: uuid.UUID) -> None:
        """Delete a quote by UUID."""
        try:
            with _connect(self._db_path) as conn:
                deleted = conn.execute(
                    "DELETE FROM quotes WHERE id = ?;",
                    (_stringify_uuid(quote_id),),
                ).rowcount
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to delete quote {quote_id}") from exc
        if deleted == 0:
            raise RepositoryNotFoundError(f"Quote {quote_id} not found")

    def list(self, search_filter: str | None = None) -> list[Quote]:
        """Return quotes newest first, optionally restricted by *search_filter*."""
        needle = _fold_text(search_filter)
        if needle:
            query = (
                "SELECT * FROM quotes "
                "WHERE instr(quote_fold(text), :needle) > 0 "
                "OR instr(quote_fold(author), :needle) > 0 "
                f"{_ORDER_CLAUSE};"
            )
            params: dict[str, str] = {"needle": needle}
        else:
            query = f"SELECT * FROM quotes {_ORDER_CLAUSE};"
            params = {}
        try:
            with _connect(self._db_path) as conn:
                rows = conn.execute(query, params).fetchall()
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to list quotes") from exc
        return [self._row_to_quote(row) for row in rows]

    def count(self) -> int:
        """Return the number of stored quotes."""
        try:
            with _connect(self._db_path) as conn:
                row = conn.execute("SELECT COUNT(*) FROM quotes;").fetchone()
        except sqlite3.Error as exc:
            raise RepositoryError("Failed to count quotes") from exc
        return int(row[0]) if row is not None else 0

    def fetch_at_offset(self, offset: int) -> Quote | None:
        """Return the single quote at *offset* in newest-first order."""
        if offset < 0:
            return None
        try:
            with _connect(self._db_path) as conn:
                row = conn.execute(
                    f"SELECT * FROM quotes {_ORDER_CLAUSE} LIMIT 1 OFFSET ?;",
                    (int(offset),),
                ).fetchone()
        except sqlite3.Error as exc:
            raise RepositoryError(f"Failed to fetch quote at offset {offset}") from exc
        if row is None:
            return None
        return self._row_to_quote(row)

    def _row_to_quote(self, row: sqlite3.Row) -> Quote:
        """Hydrate Quote from SQLite row."""
        payload = {column: row[column] for column in row.keys()}
        return Quote.from_record(payload)


__all__ = ["QuoteStoreMixin"]
