"""Quote list model: validation, search, delete confirmation, and refresh failures.

Updates: v0.1.0 - 2026-09-17 - Cover list state shared by presentation layers.
"""

from __future__ import annotations

import pytest

from core import (
    InMemoryQuoteRepository,
    QuoteEvent,
    QuoteEventKind,
    QuoteListModel,
    QuoteStore,
    QuoteValidationError,
    RepositoryError,
    validate_quote_fields,
)


class _FlakyBackend(InMemoryQuoteRepository):
    """Backend whose reads can be switched off mid-test."""

    def __init__(self) -> None:
        super().__init__()
        self.broken = False

    def list(self, search_filter: str | None = None):
        if self.broken:
            raise RepositoryError("database is locked")
        return super().list(search_filter)


@pytest.fixture
def store() -> QuoteStore:
    return QuoteStore(InMemoryQuoteRepository())


@pytest.mark.parametrize(
    ("text", "author"),
    [("", "Autor"), ("Cytat", ""), ("   ", "\t"), (None, "Autor")],
)
def test_validate_quote_fields_rejects_blank_values(text: str, author: str) -> None:
    with pytest.raises(QuoteValidationError):
        validate_quote_fields(text, author)


def test_validate_quote_fields_strips_whitespace() -> None:
    assert validate_quote_fields("  Cytat \n", " Autor ") == ("Cytat", "Autor")


def test_validation_error_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="text and author"):
        validate_quote_fields("", "")


def test_model_tracks_store_changes(store: QuoteStore) -> None:
    model = QuoteListModel(store)
    assert model.quotes == []

    first = model.add(" Cytat ", " Autor ")
    second = store.add("Inny", "Ktoś")

    assert [quote.id for quote in model.quotes] == [second.id, first.id]
    assert model.quotes[1].text == "Cytat"


def test_search_text_refetches_with_folding(store: QuoteStore) -> None:
    store.add("Życie jest piękne", "Anon")
    store.add("Stay hungry", "Steve Jobs")
    model = QuoteListModel(store)

    model.search_text = "ZYCIE"

    assert [quote.text for quote in model.quotes] == ["Życie jest piękne"]
    model.search_text = ""
    assert len(model.quotes) == 2


def test_update_validates_before_writing(store: QuoteStore) -> None:
    quote = store.add("before", "author")
    model = QuoteListModel(store)

    with pytest.raises(QuoteValidationError):
        model.update(quote.id, "", "author")

    assert model.update(quote.id, "after", "author") is True
    assert model.quotes[0].text == "after"


def test_confirm_delete_requires_arming(store: QuoteStore) -> None:
    quote = store.add("doomed", "author")
    model = QuoteListModel(store)

    assert model.confirm_delete(quote.id) is False
    assert store.count() == 1

    model.arm_delete(quote.id)
    assert model.is_armed(quote.id)
    assert model.confirm_delete(quote.id) is True
    assert model.quotes == []
    assert not model.is_armed(quote.id)


def test_disarm_cancels_pending_delete(store: QuoteStore) -> None:
    quote = store.add("safe", "author")
    model = QuoteListModel(store)

    model.arm_delete(quote.id)
    model.disarm(quote.id)

    assert model.confirm_delete(quote.id) is False
    assert store.count() == 1


def test_data_changes_clear_armed_rows(store: QuoteStore) -> None:
    quote = store.add("armed", "author")
    model = QuoteListModel(store)
    model.arm_delete(quote.id)

    store.events.publish(QuoteEvent(QuoteEventKind.WIDGET_RELOAD))
    assert model.is_armed(quote.id)

    store.add("another", "author")
    assert not model.is_armed(quote.id)


def test_refresh_failure_keeps_stale_rows() -> None:
    backend = _FlakyBackend()
    store = QuoteStore(backend)
    quote = store.add("stale", "author")
    model = QuoteListModel(store)

    backend.broken = True
    assert model.refresh() is False

    assert [item.id for item in model.quotes] == [quote.id]


def test_closed_model_stops_listening(store: QuoteStore) -> None:
    model = QuoteListModel(store)
    model.close()

    store.add("unseen", "author")

    assert model.quotes == []
