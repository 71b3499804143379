"""Source feed fetching."""

from .feed import FeedDocument, FeedSource, HttpFeedSource, parse_feed

__all__ = ["FeedDocument", "FeedSource", "HttpFeedSource", "parse_feed"]
