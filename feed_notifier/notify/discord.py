"""Discord webhook delivery for notification batches."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx

from ..core.types import Notification
from ..errors import ConfigError, SinkError, TransportError
from ..logging_utils import truncate_text

logger = logging.getLogger(__name__)

# Discord rejects payloads with more than 10 embeds.
MAX_EMBEDS = 10


def to_embed_payload(notifications: Sequence[Notification]) -> dict[str, Any]:
    """Adapt notifications to the Discord embed payload shape."""
    if len(notifications) > MAX_EMBEDS:
        logger.warning(
            "Embeds exceed %d, truncating (count: %d)", MAX_EMBEDS, len(notifications)
        )
    embeds = [
        {
            "title": notification.title,
            "fields": [{"name": f.name, "value": f.value} for f in notification.fields],
        }
        for notification in notifications[:MAX_EMBEDS]
    ]
    return {"embeds": embeds}


class DiscordWebhookSink:
    """Posts a notification batch to a Discord webhook in one request."""

    def __init__(
        self,
        webhook_url: str | None,
        timeout: float = 20.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.transport = transport

    def send(self, notifications: Sequence[Notification]) -> int:
        """Deliver the batch and return the number of embeds sent.

        Raises:
            ConfigError: If the webhook URL is not configured
            TransportError: On network failure
            SinkError: If the webhook answers with a non-success status
        """
        if not self.webhook_url:
            logger.error("Webhook URL is not configured")
            raise ConfigError("Notification webhook URL is not configured")

        payload = to_embed_payload(notifications)
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                resp = client.post(self.webhook_url, json=payload)
        except httpx.HTTPError as exc:
            logger.error("Webhook request failed: %s", exc)
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc

        if not resp.is_success:
            message = f"Status: {resp.status_code}, Body: {truncate_text(resp.text, 500)}"
            logger.error("Webhook rejected payload: %s", message)
            raise SinkError(message)

        sent = len(payload["embeds"])
        logger.info("Posted %d embeds to webhook", sent)
        return sent
