"""Tests for the synchronous pipeline event bus."""

from __future__ import annotations

import logging
import threading

from feed_notifier.core.events import (
    DataConverted,
    EventBus,
    FeedFetched,
    LoggingObserver,
    NotificationsSent,
    SummaryGenerated,
)


def test_publish_calls_observers_in_registration_order():
    bus = EventBus()
    calls: list[tuple[str, object]] = []
    bus.subscribe(lambda e: calls.append(("first", e)))
    bus.subscribe(lambda e: calls.append(("second", e)))

    event = DataConverted(item_count=3)
    bus.publish(event)

    assert calls == [("first", event), ("second", event)]


def test_publish_with_no_observers_is_a_noop():
    EventBus().publish(NotificationsSent(count=0))


def test_failing_observer_does_not_stop_later_observers(caplog):
    bus = EventBus()
    seen: list[object] = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(broken)
    bus.subscribe(seen.append)

    with caplog.at_level(logging.ERROR, logger="feed_notifier"):
        bus.publish(FeedFetched(url="https://example.com/feed", item_count=1))

    assert len(seen) == 1
    assert "Event observer" in caplog.text
    assert "boom" in caplog.text


def test_publish_runs_on_callers_thread():
    bus = EventBus()
    threads: list[int] = []
    bus.subscribe(lambda e: threads.append(threading.get_ident()))

    bus.publish(NotificationsSent(count=1))

    assert threads == [threading.get_ident()]


def test_concurrent_subscribe_and_publish():
    bus = EventBus()
    counter: list[int] = []
    lock = threading.Lock()

    def observer(event):
        with lock:
            counter.append(1)

    def subscriber():
        for _ in range(50):
            bus.subscribe(observer)

    def publisher():
        for _ in range(50):
            bus.publish(DataConverted(item_count=0))

    threads = [threading.Thread(target=subscriber), threading.Thread(target=publisher)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(bus) == 50


def test_logging_observer_logs_every_event(caplog):
    observer = LoggingObserver()

    with caplog.at_level(logging.INFO, logger="feed_notifier"):
        observer(FeedFetched(url="https://example.com/feed", item_count=12))
        observer(DataConverted(item_count=12))
        observer(SummaryGenerated(article_count=12, category_count=3))
        observer(NotificationsSent(count=3))

    messages = [r.getMessage() for r in caplog.records]
    assert messages == [
        "Feed fetched from https://example.com/feed with 12 items",
        "Feed data converted with 12 items",
        "Summary generated with 12 articles in 3 categories",
        "3 notifications sent",
    ]
