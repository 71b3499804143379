"""
Feed Notifier - AI-summarized RSS feed notifications.

This package fetches an RSS/Atom feed, asks an AI backend for a
categorized summary of its items, converts the summary into at most a
fixed number of notifications, and posts them to a chat webhook.

Entry points are the CLI (`feed-notifier run` / `feed-notifier serve`) and
the HTTP trigger in feed_notifier.server.

Example:
    $ feed-notifier run --feed-url https://zenn.dev/feed
"""

__all__ = [
    "__version__",
    "PipelineOrchestrator",
    "PipelineResult",
    "build_orchestrator",
    "build_notifications",
    "SummaryExtractor",
]
__version__ = "0.1.0"

from .notify.builder import build_notifications
from .runner import PipelineOrchestrator, PipelineResult, build_orchestrator
from .summarize.extractor import SummaryExtractor
