"""
Pipeline milestone events and a synchronous in-process event bus.

Observers are plain callables taking a PipelineEvent. The registry is
guarded by a lock because concurrent pipeline runs share one bus.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import threading
from typing import Callable, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedFetched:
    url: str
    item_count: int


@dataclass(frozen=True)
class DataConverted:
    item_count: int


@dataclass(frozen=True)
class SummaryGenerated:
    article_count: int
    category_count: int = 0


@dataclass(frozen=True)
class NotificationsSent:
    count: int


PipelineEvent = Union[FeedFetched, DataConverted, SummaryGenerated, NotificationsSent]
Observer = Callable[[PipelineEvent], None]


class EventBus:
    """Broadcasts pipeline events to registered observers.

    publish() runs every observer in registration order on the caller's
    thread and returns once all of them have been invoked. An observer that
    raises is logged and skipped; the failure never reaches the publisher.
    """

    def __init__(self) -> None:
        self._observers: list[Observer] = []
        self._lock = threading.Lock()

    def subscribe(self, observer: Observer) -> None:
        with self._lock:
            self._observers.append(observer)

    def publish(self, event: PipelineEvent) -> None:
        with self._lock:
            observers = list(self._observers)
        for observer in observers:
            try:
                observer(event)
            except Exception:  # noqa: BLE001
                logger.exception(
                    "Event observer %r failed on %s", observer, type(event).__name__
                )

    def __len__(self) -> int:
        with self._lock:
            return len(self._observers)


class LoggingObserver:
    """Logs each pipeline milestone at INFO."""

    def __init__(self, target: logging.Logger | None = None):
        self.logger = target or logging.getLogger("feed_notifier.events")

    def __call__(self, event: PipelineEvent) -> None:
        if isinstance(event, FeedFetched):
            self.logger.info("Feed fetched from %s with %d items", event.url, event.item_count)
        elif isinstance(event, DataConverted):
            self.logger.info("Feed data converted with %d items", event.item_count)
        elif isinstance(event, SummaryGenerated):
            self.logger.info(
                "Summary generated with %d articles in %d categories",
                event.article_count,
                event.category_count,
            )
        elif isinstance(event, NotificationsSent):
            self.logger.info("%d notifications sent", event.count)
