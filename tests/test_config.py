from __future__ import annotations

import pytest

from feed_notifier.config import AppConfig, load_config, resolve_settings
from feed_notifier.errors import ConfigError


def test_load_config_without_path_returns_defaults():
    cfg = load_config(None)

    assert cfg.feed.url == "https://zenn.dev/feed"
    assert cfg.notify.limit == 10
    assert cfg.provider.prompt_env == "SUMMARY_PROMPT"
    assert cfg.provider.api_url_env == "GEMINI_API_URL"
    assert cfg.notify.webhook_url_env == "DISCORD_WEBHOOK_URL"
    assert cfg.server.port == 8080


def test_load_config_merges_sections(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "feed:\n"
        "  url: https://example.com/feed\n"
        "notify:\n"
        "  limit: 3\n"
        "logging:\n"
        "  level: DEBUG\n"
        "unknown_section:\n"
        "  ignored: true\n",
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.feed.url == "https://example.com/feed"
    assert cfg.feed.timeout_seconds == 20.0
    assert cfg.notify.limit == 3
    assert cfg.notify.webhook_url_env == "DISCORD_WEBHOOK_URL"
    assert cfg.logging.level == "DEBUG"


def test_empty_config_file_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(str(path)) == AppConfig()


def test_resolve_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("SUMMARY_PROMPT", "cHJvbXB0")
    monkeypatch.setenv("GEMINI_API_URL", "https://ai.example.com/generate")
    monkeypatch.setenv("DISCORD_WEBHOOK_URL", "https://hooks.example.com/x")

    settings = resolve_settings(load_config(None))

    assert settings.prompt_template_b64 == "cHJvbXB0"
    assert settings.ai_endpoint_url == "https://ai.example.com/generate"
    assert settings.webhook_url == "https://hooks.example.com/x"
    assert settings.missing_required() == []


def test_inline_values_take_precedence_over_environment(monkeypatch):
    monkeypatch.setenv("DISCORD_WEBHOOK_URL", "https://hooks.example.com/env")
    cfg = load_config(None)
    cfg.notify.webhook_url = "https://hooks.example.com/inline"

    assert resolve_settings(cfg).webhook_url == "https://hooks.example.com/inline"


def test_empty_environment_values_count_as_missing(monkeypatch):
    monkeypatch.setenv("SUMMARY_PROMPT", "")
    monkeypatch.delenv("GEMINI_API_URL", raising=False)
    monkeypatch.delenv("DISCORD_WEBHOOK_URL", raising=False)

    settings = resolve_settings(load_config(None))

    assert settings.prompt_template_b64 is None
    assert settings.missing_required() == [
        "prompt_template_b64",
        "ai_endpoint_url",
        "webhook_url",
    ]


def test_provider_name_is_read_from_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("provider:\n  name: foo\n", encoding="utf-8")

    settings = resolve_settings(load_config(str(path)))

    assert settings.provider_name == "foo"
    assert resolve_settings(load_config(None)).provider_name == "gemini"


def test_negative_notification_limit_is_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("notify:\n  limit: -1\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="non-negative"):
        resolve_settings(load_config(str(path)))
