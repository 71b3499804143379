"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- FeedConfig: Source feed URL and HTTP fetching settings
- ProviderConfig: AI backend endpoint and prompt template settings
- NotifyConfig: Notification webhook and limit settings
- ServerConfig: HTTP trigger surface settings
- LoggingConfig: Logging behavior
- LangfuseConfig: Langfuse tracing settings
- AppConfig: Root configuration container

Secrets (prompt template, endpoint URL, webhook URL) normally come from
environment variables named by the config. resolve_settings() reads them
once at process start and returns an immutable Settings value that is
passed into the pipeline.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import os
from typing import Any

import yaml

from .errors import ConfigError


@dataclass
class FeedConfig:
    """Configuration for fetching the source feed.

    Attributes:
        url: Feed URL fetched on every pipeline run
        timeout_seconds: HTTP request timeout
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
    """

    url: str = "https://zenn.dev/feed"
    timeout_seconds: float = 20.0
    trust_env: bool = True
    user_agent: str = "feed-notifier/0.1 (+RSS reader)"


@dataclass
class ProviderConfig:
    """Configuration for the AI backend.

    Attributes:
        name: Provider name ("gemini" currently supported)
        api_url_env: Environment variable holding the full generateContent URL
        api_url: Optional inline endpoint URL (overrides env var)
        prompt_env: Environment variable holding the base64 prompt template
        prompt_b64: Optional inline base64 prompt template (overrides env var)
        timeout_seconds: HTTP request timeout for the backend call
        trust_env: Whether to respect system proxy settings for API requests
    """

    name: str = "gemini"
    api_url_env: str = "GEMINI_API_URL"
    api_url: str | None = None
    prompt_env: str = "SUMMARY_PROMPT"
    prompt_b64: str | None = None
    timeout_seconds: float = 120.0
    trust_env: bool = True


@dataclass
class NotifyConfig:
    """Configuration for notification delivery.

    Attributes:
        webhook_url_env: Environment variable holding the webhook URL
        webhook_url: Optional inline webhook URL (overrides env var)
        limit: Maximum number of notifications built per run
        timeout_seconds: HTTP request timeout for the webhook call
    """

    webhook_url_env: str = "DISCORD_WEBHOOK_URL"
    webhook_url: str | None = None
    limit: int = 10
    timeout_seconds: float = 20.0


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8080


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the main log file
        directory: Directory for the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "run.jsonl"
    directory: str = "logs"


@dataclass
class LangfuseConfig:
    """Configuration for Langfuse tracing.

    Attributes:
        enabled: Whether to enable Langfuse tracing
        public_key: Langfuse public key (optional)
        secret_key: Langfuse secret key (optional)
        host: Langfuse host URL (optional)
        environment: Langfuse environment label (optional)
        release: Langfuse release identifier (optional)
        max_text_chars: Maximum characters for prompt/response payloads
    """

    enabled: bool = False
    public_key: str | None = None
    secret_key: str | None = None
    host: str | None = None
    environment: str | None = None
    release: str | None = None
    max_text_chars: int = 20000


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    feed: FeedConfig = field(default_factory=FeedConfig)
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    notify: NotifyConfig = field(default_factory=NotifyConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    langfuse: LangfuseConfig = field(default_factory=LangfuseConfig)


DEFAULT_CONFIG = AppConfig()


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return _fromdict(asdict(DEFAULT_CONFIG))

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(DEFAULT_CONFIG, raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        feed=FeedConfig(**data.get("feed", {})),
        provider=ProviderConfig(**data.get("provider", {})),
        notify=NotifyConfig(**data.get("notify", {})),
        server=ServerConfig(**data.get("server", {})),
        logging=LoggingConfig(**data.get("logging", {})),
        langfuse=LangfuseConfig(**data.get("langfuse", {})),
    )


@dataclass(frozen=True)
class Settings:
    """Immutable runtime settings resolved once at process start.

    Attributes:
        feed_url: Feed URL fetched on every run
        notification_limit: Maximum notifications per run
        prompt_template_b64: Base64 prompt template, None when unset
        ai_endpoint_url: AI backend generateContent URL, None when unset
        webhook_url: Notification webhook URL, None when unset
        provider_name: Registered AI provider name
    """

    feed_url: str
    notification_limit: int
    prompt_template_b64: str | None
    ai_endpoint_url: str | None
    webhook_url: str | None
    feed_timeout_seconds: float = 20.0
    feed_user_agent: str = FeedConfig.user_agent
    ai_timeout_seconds: float = 120.0
    webhook_timeout_seconds: float = 20.0
    feed_trust_env: bool = True
    ai_trust_env: bool = True
    provider_name: str = "gemini"

    def missing_required(self) -> list[str]:
        """Return the names of required settings that are absent or empty."""
        required = {
            "prompt_template_b64": self.prompt_template_b64,
            "ai_endpoint_url": self.ai_endpoint_url,
            "webhook_url": self.webhook_url,
        }
        return [name for name, value in required.items() if not value]


def resolve_settings(cfg: AppConfig) -> Settings:
    """Build Settings from config, reading secrets from the environment.

    Raises:
        ConfigError: If the notification limit is negative
    """
    if cfg.notify.limit < 0:
        raise ConfigError(f"notify.limit must be non-negative, got {cfg.notify.limit}")
    return Settings(
        feed_url=cfg.feed.url,
        notification_limit=cfg.notify.limit,
        prompt_template_b64=_coalesce(cfg.provider.prompt_b64, cfg.provider.prompt_env),
        ai_endpoint_url=_coalesce(cfg.provider.api_url, cfg.provider.api_url_env),
        webhook_url=_coalesce(cfg.notify.webhook_url, cfg.notify.webhook_url_env),
        feed_timeout_seconds=cfg.feed.timeout_seconds,
        feed_user_agent=cfg.feed.user_agent,
        ai_timeout_seconds=cfg.provider.timeout_seconds,
        webhook_timeout_seconds=cfg.notify.timeout_seconds,
        feed_trust_env=cfg.feed.trust_env,
        ai_trust_env=cfg.provider.trust_env,
        provider_name=cfg.provider.name,
    )


def _coalesce(value: str | None, env_name: str | None) -> str | None:
    """Prefer the inline value, then the environment; empty counts as unset."""
    if value:
        return value
    if env_name:
        return os.getenv(env_name) or None
    return None
