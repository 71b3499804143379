from __future__ import annotations

import base64
import json
import logging

import pytest

from feed_notifier.core.types import Article, Category, StructuredSummary


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """setup_logging() detaches the package logger from root; undo it per test."""
    yield
    logger = logging.getLogger("feed_notifier")
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def make_summary(category_count: int, articles_per_category: int) -> StructuredSummary:
    categories = tuple(
        Category(
            name=f"Category {c}",
            articles=tuple(
                Article(
                    title=f"Article {c}-{a}",
                    description=f"Description {c}-{a}",
                    link=f"https://example.com/{c}/{a}",
                )
                for a in range(articles_per_category)
            ),
        )
        for c in range(category_count)
    )
    return StructuredSummary(
        message="ok",
        total=category_count * articles_per_category,
        categories=categories,
    )


def summary_json(category_count: int = 1, articles_per_category: int = 1) -> str:
    return json.dumps(
        {
            "message": "ok",
            "data": {
                "total": category_count * articles_per_category,
                "summary": [
                    {
                        f"Category {c}": {
                            "category_count": articles_per_category,
                            "articles": [
                                {
                                    "title": f"Article {c}-{a}",
                                    "description": f"Description {c}-{a}",
                                    "link": f"https://example.com/{c}/{a}",
                                }
                                for a in range(articles_per_category)
                            ],
                        }
                    }
                    for c in range(category_count)
                ],
            },
        },
        ensure_ascii=False,
    )


def encode_prompt(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")
