"""Notification building and webhook delivery."""

from .builder import (
    DEFAULT_NOTIFICATION_LIMIT,
    LINK_LABEL,
    build_notifications,
    category_to_notification,
    format_field_value,
    truncate_notifications,
)
from .discord import MAX_EMBEDS, DiscordWebhookSink, to_embed_payload

__all__ = [
    "DEFAULT_NOTIFICATION_LIMIT",
    "LINK_LABEL",
    "MAX_EMBEDS",
    "DiscordWebhookSink",
    "build_notifications",
    "category_to_notification",
    "format_field_value",
    "to_embed_payload",
    "truncate_notifications",
]
