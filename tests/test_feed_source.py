from __future__ import annotations

import httpx
import pytest

from feed_notifier.core.types import FeedItem
from feed_notifier.errors import ParseError, TransportError
from feed_notifier.fetch.feed import HttpFeedSource, parse_feed

FEED_URL = "https://example.com/feed"

RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Example Feed</title>
    <link>https://example.com/</link>
    <description>Example</description>
    <item>
      <title>First post</title>
      <link>https://example.com/posts/1</link>
      <description>About the first post</description>
    </item>
    <item>
      <title>Second post</title>
      <link>https://example.com/posts/2</link>
    </item>
  </channel>
</rss>
"""

ATOM = b"""<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom Feed</title>
  <entry>
    <title>Atom entry</title>
    <link href="https://example.com/atom/1"/>
    <id>urn:1</id>
    <updated>2024-01-01T00:00:00Z</updated>
    <summary>Atom summary</summary>
  </entry>
</feed>
"""


def _source(handler) -> HttpFeedSource:
    return HttpFeedSource(transport=httpx.MockTransport(handler))


def test_fetch_and_convert_rss():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["user_agent"] = request.headers["User-Agent"]
        return httpx.Response(200, content=RSS, headers={"Content-Type": "application/rss+xml"})

    source = _source(handler)

    document = source.fetch_feed(FEED_URL)
    items = source.convert_to_items(document)

    assert document.title == "Example Feed"
    assert len(document.entries) == 2
    assert items == [
        FeedItem(
            title="First post",
            description="About the first post",
            link="https://example.com/posts/1",
        ),
        FeedItem(title="Second post", description=None, link="https://example.com/posts/2"),
    ]
    assert seen["user_agent"].startswith("feed-notifier/")


def test_atom_summary_becomes_description():
    document = parse_feed(FEED_URL, ATOM)

    items = HttpFeedSource().convert_to_items(document)

    assert items == [
        FeedItem(title="Atom entry", description="Atom summary", link="https://example.com/atom/1")
    ]


def test_empty_channel_yields_no_items():
    body = b'<?xml version="1.0"?><rss version="2.0"><channel><title>t</title></channel></rss>'

    document = parse_feed(FEED_URL, body)

    assert document.entries == ()


def test_malformed_feed_raises_parse_error():
    source = _source(lambda request: httpx.Response(200, content=b"this is not a feed"))

    with pytest.raises(ParseError, match="Malformed feed"):
        source.fetch_feed(FEED_URL)


def test_non_success_status_raises_transport_error():
    source = _source(lambda request: httpx.Response(404))

    with pytest.raises(TransportError, match="404"):
        source.fetch_feed(FEED_URL)


def test_network_failure_raises_transport_error():
    def handler(request):
        raise httpx.ConnectError("no route", request=request)

    with pytest.raises(TransportError):
        _source(handler).fetch_feed(FEED_URL)
