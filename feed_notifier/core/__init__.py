"""
Core domain models and the pipeline event bus.

This package contains data types and event plumbing that are
independent of any specific pipeline stage or transport.
"""

from .events import (
    DataConverted,
    EventBus,
    FeedFetched,
    LoggingObserver,
    NotificationsSent,
    PipelineEvent,
    SummaryGenerated,
)
from .types import (
    Article,
    Category,
    FeedItem,
    Notification,
    NotificationField,
    StructuredSummary,
    parse_summary,
)

__all__ = [
    "Article",
    "Category",
    "FeedItem",
    "Notification",
    "NotificationField",
    "StructuredSummary",
    "parse_summary",
    "EventBus",
    "LoggingObserver",
    "PipelineEvent",
    "FeedFetched",
    "DataConverted",
    "SummaryGenerated",
    "NotificationsSent",
]
