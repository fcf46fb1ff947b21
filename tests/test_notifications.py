"""Tests for the quote event centre."""

from __future__ import annotations

import uuid

from core.notifications import QuoteEvent, QuoteEventCenter, QuoteEventKind


def test_publish_delivers_to_subscribers_in_order() -> None:
    center = QuoteEventCenter()
    first: list[QuoteEvent] = []
    second: list[QuoteEvent] = []
    center.subscribe(first.append)
    center.subscribe(second.append)

    event = QuoteEvent(QuoteEventKind.ADDED, uuid.uuid4())
    center.publish(event)

    assert first == [event]
    assert second == [event]


def test_subscription_context_manager_detaches() -> None:
    center = QuoteEventCenter()
    events: list[QuoteEvent] = []

    with center.subscribe(events.append) as subscription:
        center.publish(QuoteEvent(QuoteEventKind.SEEDED))

    center.publish(QuoteEvent(QuoteEventKind.SEEDED))

    assert len(events) == 1
    assert subscription.closed
    subscription.close()


def test_failing_subscriber_does_not_block_others() -> None:
    center = QuoteEventCenter()
    events: list[QuoteEvent] = []

    def _explode(_: QuoteEvent) -> None:
        raise RuntimeError("boom")

    center.subscribe(_explode)
    center.subscribe(events.append)
    center.publish(QuoteEvent(QuoteEventKind.DELETED))

    assert [event.kind for event in events] == [QuoteEventKind.DELETED]


def test_history_is_bounded() -> None:
    center = QuoteEventCenter(history_limit=2)

    for kind in (QuoteEventKind.ADDED, QuoteEventKind.UPDATED, QuoteEventKind.DELETED):
        center.publish(QuoteEvent(kind))

    assert [event.kind for event in center.history()] == [
        QuoteEventKind.UPDATED,
        QuoteEventKind.DELETED,
    ]


def test_event_serialises_to_dict() -> None:
    quote_id = uuid.uuid4()

    payload = QuoteEvent(QuoteEventKind.WIDGET_RELOAD, quote_id).to_dict()

    assert payload["kind"] == "widget_reload"
    assert payload["quote_id"] == str(quote_id)
    assert QuoteEvent(QuoteEventKind.SEEDED).to_dict()["quote_id"] is None
    assert not QuoteEventKind.WIDGET_RELOAD.is_data_change
    assert QuoteEventKind.SEEDED.is_data_change
