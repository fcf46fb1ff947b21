"""Shared repository helpers, search folding, and error hierarchy.

Updates:
  v0.2.0 - 2026-09-10 - Register the quote_fold SQL function on every connection.
  v0.1.0 - 2026-09-02 - Extract logger, connection helpers, and exceptions.
"""

from __future__ import annotations

import logging
import sqlite3
import unicodedata
import uuid
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger("quote_widget.repository")

# Letters with a stroke have no NFKD decomposition.
_STROKE_LETTERS = str.maketrans(
    {
        "ł": "l",
        "Ł": "L",
        "ø": "o",
        "Ø": "O",
        "đ": "d",
        "Đ": "D",
        "ħ": "h",
        "Ħ": "H",
    }
)


class RepositoryError(Exception):
    """Base exception for repository failures."""


class RepositoryNotFoundError(RepositoryError):
    """Raised when a requested record cannot be located."""


def fold_text(value: str | None) -> str:
    """Return *value* lower-cased with diacritics stripped for search matching."""
    if not value:
        return ""
    decomposed = unicodedata.normalize("NFKD", value.translate(_STROKE_LETTERS))
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.casefold()


def ensure_directory(path: Path) -> None:
    """Ensure the directory for the SQLite database exists."""
    path.parent.mkdir(parents=True, exist_ok=True)


def connect(db_path: Path) -> sqlite3.Connection:
    """Return a configured SQLite connection shared safely across processes."""
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.create_function("quote_fold", 1, fold_text, deterministic=True)
    conn.execute("PRAGMA journal_mode = WAL;")
    conn.execute("PRAGMA synchronous = NORMAL;")
    return conn


def stringify_uuid(value: uuid.UUID | str) -> str:
    """Return a canonical UUID string for storage."""
    if isinstance(value, uuid.UUID):
        return str(value)
    return str(uuid.UUID(str(value)))


__all__ = [
    "RepositoryError",
    "RepositoryNotFoundError",
    "connect",
    "ensure_directory",
    "fold_text",
    "logger",
    "stringify_uuid",
]
