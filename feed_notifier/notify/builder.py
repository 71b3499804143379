"""Conversion of a structured summary into a bounded list of notifications."""

from __future__ import annotations

import logging
from typing import Sequence

from ..core.types import Article, Category, Notification, NotificationField, StructuredSummary

logger = logging.getLogger(__name__)

LINK_LABEL = "Read this article"
DEFAULT_NOTIFICATION_LIMIT = 10


def format_field_value(article: Article) -> str:
    return f"{article.description}\n[{LINK_LABEL}]({article.link})"


def category_to_notification(category: Category) -> Notification:
    fields = tuple(
        NotificationField(name=article.title, value=format_field_value(article))
        for article in category.articles
    )
    return Notification(title=category.name, fields=fields)


def truncate_notifications(
    notifications: Sequence[Notification], limit: int
) -> list[Notification]:
    """Keep the first `limit` notifications in their original order.

    Lists already within the limit are returned unchanged.
    """
    if limit < 0:
        raise ValueError(f"Notification limit must be non-negative, got {limit}")
    if len(notifications) <= limit:
        return list(notifications)
    logger.warning(
        "Truncating notifications from %d to %d",
        len(notifications),
        limit,
        extra={"original_count": len(notifications), "limit": limit},
    )
    return list(notifications[:limit])


def build_notifications(
    summary: StructuredSummary, limit: int = DEFAULT_NOTIFICATION_LIMIT
) -> list[Notification]:
    """Build one notification per category, capped at `limit` categories."""
    notifications = [category_to_notification(c) for c in summary.categories]
    return truncate_notifications(notifications, limit)
