"""
Core data types for the feed notification pipeline.

This module defines the values that flow between pipeline stages:
- FeedItem: One raw entry from the source feed
- StructuredSummary: Categorized summary produced by the AI backend
- Notification: Transport-agnostic message built from one category

It also owns validation at the deserialization boundary for the summary
JSON returned by the AI backend (see parse_summary).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..errors import ParseError


@dataclass(frozen=True)
class FeedItem:
    """One entry from the source feed.

    Attributes:
        title: Entry title, if present
        description: Entry description or summary, if present
        link: Entry URL, if present
    """

    title: str | None = None
    description: str | None = None
    link: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {"title": self.title, "description": self.description, "link": self.link}


@dataclass(frozen=True)
class Article:
    """A summarized article inside a category. All fields are required."""

    title: str
    description: str
    link: str


@dataclass(frozen=True)
class Category:
    """A named grouping of articles produced by the AI summarization step.

    Attributes:
        name: Category name, used as the notification title
        articles: Articles in their original order
        article_count: Optional count reported by the AI (informational only)
    """

    name: str
    articles: tuple[Article, ...] = ()
    article_count: int | None = None


@dataclass(frozen=True)
class StructuredSummary:
    """Categorized summary of a feed.

    Attributes:
        message: Free-form message from the AI
        total: Total number of summarized articles reported by the AI
        categories: Categories in the order the AI returned them
    """

    message: str
    total: int
    categories: tuple[Category, ...] = ()

    @property
    def category_count(self) -> int:
        return len(self.categories)


@dataclass(frozen=True)
class NotificationField:
    name: str
    value: str


@dataclass(frozen=True)
class Notification:
    """One deliverable message: one per category, one field per article."""

    title: str
    fields: tuple[NotificationField, ...] = ()


def parse_summary(obj: Any) -> StructuredSummary:
    """Validate decoded JSON and build a StructuredSummary.

    Expected shape:
        {
            "message": "...",
            "data": {
                "total": 12,
                "summary": [
                    {"Category Name": {"category_count": 4, "articles": [...]}}
                ]
            }
        }

    "data.categories" is accepted as an alias for "data.summary", and a
    category may also use the explicit {"name": ..., "articles": [...]} form.

    Raises:
        ParseError: If any part of the structure is missing or mistyped, or
            if a category mapping does not have exactly one key
    """
    if not isinstance(obj, dict):
        raise ParseError("Summary must be a JSON object")
    message = obj.get("message")
    if not isinstance(message, str):
        raise ParseError("Summary 'message' must be a string")
    data = obj.get("data")
    if not isinstance(data, dict):
        raise ParseError("Summary 'data' must be an object")
    total = data.get("total")
    if not isinstance(total, int) or isinstance(total, bool):
        raise ParseError("Summary 'data.total' must be an integer")

    raw_categories = data.get("summary", data.get("categories"))
    if not isinstance(raw_categories, list):
        raise ParseError("Summary 'data.summary' must be a list")

    categories = tuple(_parse_category(raw, idx) for idx, raw in enumerate(raw_categories))
    return StructuredSummary(message=message, total=total, categories=categories)


def _parse_category(raw: Any, idx: int) -> Category:
    if not isinstance(raw, dict):
        raise ParseError(f"Category {idx} must be an object")

    if "name" in raw and "articles" in raw:
        name = raw["name"]
        details = raw
    else:
        if len(raw) != 1:
            raise ParseError(
                f"Category {idx} must have exactly one name key, got {len(raw)}"
            )
        ((name, details),) = raw.items()

    if not isinstance(name, str) or not name:
        raise ParseError(f"Category {idx} name must be a non-empty string")
    if not isinstance(details, dict):
        raise ParseError(f"Category {name!r} details must be an object")

    articles_raw = details.get("articles")
    if not isinstance(articles_raw, list):
        raise ParseError(f"Category {name!r} 'articles' must be a list")

    count = details.get("category_count")
    if count is not None and (not isinstance(count, int) or isinstance(count, bool)):
        raise ParseError(f"Category {name!r} 'category_count' must be an integer")

    articles = tuple(_parse_article(a, name) for a in articles_raw)
    return Category(name=name, articles=articles, article_count=count)


def _parse_article(raw: Any, category: str) -> Article:
    if not isinstance(raw, dict):
        raise ParseError(f"Article in {category!r} must be an object")
    values = {}
    for key in ("title", "description", "link"):
        value = raw.get(key)
        if not isinstance(value, str):
            raise ParseError(f"Article in {category!r} is missing string field {key!r}")
        values[key] = value
    return Article(**values)
