from __future__ import annotations

import json
import logging

from feed_notifier.config import LoggingConfig
from feed_notifier.logging_utils import (
    JsonlFormatter,
    log_event,
    setup_logging,
    truncate_text,
)


def test_jsonl_formatter_includes_extra_fields():
    record = logging.LogRecord(
        "feed_notifier.runner", logging.INFO, __file__, 1, "Pipeline start", None, None
    )
    record.event = "pipeline_start"
    record.feed_url = "https://example.com/feed"

    payload = json.loads(JsonlFormatter().format(record))

    assert payload["message"] == "Pipeline start"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "feed_notifier.runner"
    assert payload["event"] == "pipeline_start"
    assert payload["feed_url"] == "https://example.com/feed"
    assert "msg" not in payload


def test_setup_logging_writes_jsonl_file(tmp_path):
    cfg = LoggingConfig(level="INFO", console=False, file=True, filename="run.jsonl")
    logger = setup_logging(cfg, output_dir=tmp_path)

    log_event(logging.getLogger("feed_notifier.runner"), "Pipeline done", notifications=3)
    for handler in logger.handlers:
        handler.flush()

    lines = (tmp_path / "run.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    entry = json.loads(lines[0])
    assert entry["message"] == "Pipeline done"
    assert entry["notifications"] == 3


def test_setup_logging_respects_level(tmp_path):
    cfg = LoggingConfig(level="WARNING", console=False, file=True, format="plain")
    logger = setup_logging(cfg, output_dir=tmp_path)

    logging.getLogger("feed_notifier.events").info("hidden")
    logging.getLogger("feed_notifier.events").warning("shown")
    for handler in logger.handlers:
        handler.flush()

    text = (tmp_path / "run.jsonl").read_text(encoding="utf-8")
    assert "shown" in text
    assert "hidden" not in text


def test_log_event_without_logger_is_noop():
    log_event(None, "ignored", key="value")


def test_truncate_text():
    assert truncate_text("short", 10) == "short"
    assert truncate_text("x" * 12, 10) == "x" * 10 + "...(truncated)"
