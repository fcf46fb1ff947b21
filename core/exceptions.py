"""Common exception classes for the core package.

All exceptions ultimately inherit from :class:`QuoteWidgetError`, allowing
callers to catch a single base class for any core failure while still
distinguishing individual error categories when needed. Not-found lookups are
not errors at this level: the store reports them as ``None``/``False``.

Updates:
  v0.2.0 - 2026-09-12 - Add preference channel storage errors.
  v0.1.0 - 2026-09-02 - Created module with quote storage and validation errors.
"""

from __future__ import annotations


class QuoteWidgetError(Exception):
    """Base exception for quote widget failures."""


class QuoteStorageError(QuoteWidgetError):
    """Raised when reading or writing the quote collection fails."""


class QuoteValidationError(QuoteWidgetError, ValueError):
    """Raised when a quote form is submitted with blank text or author."""


class PreferenceStorageError(QuoteWidgetError):
    """Raised when the shared preference channel cannot be read or written."""


__all__ = [
    "PreferenceStorageError",
    "QuoteStorageError",
    "QuoteValidationError",
    "QuoteWidgetError",
]
