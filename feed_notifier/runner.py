"""
Pipeline orchestration for the feed notifier.

This module coordinates one run of the workflow:
1. Fetch the source feed
2. Convert feed entries to FeedItem values
3. Generate a structured summary via the AI backend
4. Build bounded notifications from the summary
5. Deliver notifications to the webhook

Each stage runs once, in order. A milestone event is published after each
stage succeeds. Any stage failure aborts the run and is re-raised as one of
RssError, SummaryError or NotificationError.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Protocol, Sequence

from .config import Settings
from .core.events import (
    DataConverted,
    EventBus,
    FeedFetched,
    LoggingObserver,
    NotificationsSent,
    SummaryGenerated,
)
from .core.types import FeedItem, Notification, StructuredSummary
from .errors import NotificationError, RssError, StageError, SummaryError
from .fetch.feed import FeedSource, HttpFeedSource
from .llm.providers.factory import create_provider
from .logging_utils import log_event
from .notify.builder import build_notifications
from .notify.discord import DiscordWebhookSink
from .summarize.extractor import SummaryExtractor

logger = logging.getLogger(__name__)


class Summarizer(Protocol):
    def summarize(self, items: Sequence[FeedItem]) -> StructuredSummary: ...


class NotificationSink(Protocol):
    def send(self, notifications: Sequence[Notification]) -> int: ...


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of a successful run.

    Attributes:
        feed_url: The feed that was processed
        item_count: Number of feed items sent to the AI backend
        category_count: Number of categories in the summary
        notifications_sent: Number of notifications delivered
    """

    feed_url: str
    item_count: int
    category_count: int
    notifications_sent: int


class PipelineOrchestrator:
    """Runs fetch -> convert -> summarize -> build -> send, once per call.

    Holds no per-run state, so one instance can serve concurrent runs.
    """

    def __init__(
        self,
        feed_source: FeedSource,
        summarizer: Summarizer,
        sink: NotificationSink,
        event_bus: EventBus,
    ):
        self.feed_source = feed_source
        self.summarizer = summarizer
        self.sink = sink
        self.event_bus = event_bus

    def run(self, feed_url: str, notification_limit: int) -> PipelineResult:
        log_event(logger, "Pipeline start", event="pipeline_start", feed_url=feed_url)

        try:
            document = self.feed_source.fetch_feed(feed_url)
        except StageError as exc:
            raise self._abort(RssError, "Failed to fetch feed", exc) from exc
        self.event_bus.publish(FeedFetched(url=feed_url, item_count=len(document.entries)))

        try:
            items = self.feed_source.convert_to_items(document)
        except StageError as exc:
            raise self._abort(RssError, "Failed to convert feed", exc) from exc
        self.event_bus.publish(DataConverted(item_count=len(items)))

        try:
            summary = self.summarizer.summarize(items)
        except StageError as exc:
            raise self._abort(SummaryError, "Failed to generate summary", exc) from exc
        self.event_bus.publish(
            SummaryGenerated(article_count=summary.total, category_count=summary.category_count)
        )

        notifications = build_notifications(summary, notification_limit)

        try:
            sent = self.sink.send(notifications)
        except StageError as exc:
            raise self._abort(NotificationError, "Failed to send notifications", exc) from exc
        self.event_bus.publish(NotificationsSent(count=sent))

        log_event(
            logger,
            "Pipeline done",
            event="pipeline_done",
            feed_url=feed_url,
            notifications=sent,
        )
        return PipelineResult(
            feed_url=feed_url,
            item_count=len(items),
            category_count=summary.category_count,
            notifications_sent=sent,
        )

    @staticmethod
    def _abort(kind: type, message: str, exc: StageError):
        logger.error(
            "%s: %s: %s",
            message,
            type(exc).__name__,
            exc,
            extra={"event": "pipeline_failed", "stage_error": type(exc).__name__},
        )
        return kind(f"{message}: {exc}", stage_error=exc)


def build_orchestrator(
    settings: Settings,
    event_bus: EventBus | None = None,
) -> PipelineOrchestrator:
    """Wire the default HTTP collaborators from resolved settings."""
    if event_bus is None:
        event_bus = EventBus()
        event_bus.subscribe(LoggingObserver())

    feed_source = HttpFeedSource(
        timeout=settings.feed_timeout_seconds,
        user_agent=settings.feed_user_agent,
        trust_env=settings.feed_trust_env,
    )
    extractor = SummaryExtractor(
        create_provider(settings.provider_name, settings),
        settings.prompt_template_b64,
    )
    sink = DiscordWebhookSink(settings.webhook_url, timeout=settings.webhook_timeout_seconds)
    return PipelineOrchestrator(feed_source, extractor, sink, event_bus)
