"""
Source feed fetching and conversion.

The feed is fetched with httpx and parsed with feedparser, which handles
RSS 0.9x/2.0, RSS 1.0 and Atom. Conversion keeps only the fields the
summary prompt needs.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Protocol

import feedparser
import httpx

from ..core.types import FeedItem
from ..errors import ParseError, TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedDocument:
    """A parsed feed before conversion.

    Attributes:
        url: The URL the feed was fetched from
        title: Channel title, if the feed declares one
        entries: Raw feedparser entries in feed order
    """

    url: str
    title: str | None
    entries: tuple[dict[str, Any], ...]


class FeedSource(Protocol):
    def fetch_feed(self, url: str) -> FeedDocument: ...

    def convert_to_items(self, document: FeedDocument) -> list[FeedItem]: ...


class HttpFeedSource:
    """Fetches a feed over HTTP and converts entries to FeedItem values."""

    def __init__(
        self,
        timeout: float = 20.0,
        user_agent: str = "feed-notifier/0.1 (+RSS reader)",
        trust_env: bool = True,
        transport: httpx.BaseTransport | None = None,
    ):
        self.timeout = timeout
        self.user_agent = user_agent
        self.trust_env = trust_env
        self.transport = transport

    def fetch_feed(self, url: str) -> FeedDocument:
        """Fetch and parse the feed at `url`.

        Raises:
            TransportError: On network failure or a non-success status
            ParseError: If the body is not a readable feed
        """
        try:
            with httpx.Client(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
                follow_redirects=True,
                trust_env=self.trust_env,
                transport=self.transport,
            ) as client:
                resp = client.get(url)
        except httpx.HTTPError as exc:
            logger.error("Failed to fetch feed %s: %s", url, exc)
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc

        if not resp.is_success:
            logger.error("Feed %s answered with status %d", url, resp.status_code)
            raise TransportError(f"Feed request failed with status {resp.status_code}")

        return parse_feed(url, resp.content)

    def convert_to_items(self, document: FeedDocument) -> list[FeedItem]:
        return [_entry_to_item(entry) for entry in document.entries]


def parse_feed(url: str, content: bytes) -> FeedDocument:
    parsed = feedparser.parse(content)
    if parsed.bozo and not parsed.entries:
        reason = parsed.get("bozo_exception")
        logger.error("Malformed feed %s: %s", url, reason)
        raise ParseError(f"Malformed feed: {reason}")
    if parsed.bozo:
        logger.warning("Feed %s parsed with errors: %s", url, parsed.get("bozo_exception"))

    channel = parsed.get("feed") or {}
    return FeedDocument(
        url=url,
        title=channel.get("title"),
        entries=tuple(parsed.entries),
    )


def _entry_to_item(entry: dict[str, Any]) -> FeedItem:
    return FeedItem(
        title=entry.get("title"),
        description=entry.get("summary") or entry.get("description"),
        link=entry.get("link"),
    )
