"""
Command-line interface for the feed notifier.

Uses Typer to provide `run` (one pipeline run) and `serve` (HTTP trigger
surface). Supports loading .env files for the required secrets.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console

from .config import AppConfig, Settings, load_config, resolve_settings
from .errors import ConfigError, PipelineError
from .llm.tracing import flush, setup_langfuse
from .logging_utils import setup_logging
from .runner import build_orchestrator

app = typer.Typer(add_completion=False)
console = Console()


def _bootstrap(
    config: Path | None,
    feed_url: str | None,
    limit: int | None,
    log_level: str | None,
) -> tuple[AppConfig, Settings]:
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    if feed_url:
        cfg.feed.url = feed_url
    if limit is not None:
        cfg.notify.limit = limit
    if log_level:
        cfg.logging.level = log_level

    logger = setup_logging(cfg.logging)
    setup_langfuse(cfg.langfuse)
    try:
        settings = resolve_settings(cfg)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    for name in settings.missing_required():
        logger.warning("Required setting %s is not configured", name)
    return cfg, settings


@app.command()
def run(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    feed_url: str | None = typer.Option(None, "--feed-url", help="Override the feed URL."),
    limit: int | None = typer.Option(None, "--limit", min=0, help="Notification limit."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Run the pipeline once and exit non-zero on failure."""
    _, settings = _bootstrap(config, feed_url, limit, log_level)
    orchestrator = build_orchestrator(settings)
    try:
        result = orchestrator.run(settings.feed_url, settings.notification_limit)
    except PipelineError as exc:
        console.print(f"[red]Pipeline failed:[/red] {type(exc).__name__}")
        raise typer.Exit(code=1) from exc
    finally:
        flush()
    console.print(
        f"Sent {result.notifications_sent} notifications "
        f"({result.category_count} categories, {result.item_count} feed items)"
    )


@app.command()
def serve(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    host: str | None = typer.Option(None, "--host"),
    port: int | None = typer.Option(None, "--port"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Serve the HTTP trigger surface with uvicorn."""
    import uvicorn

    from .server import create_app

    cfg, settings = _bootstrap(config, None, None, log_level)
    logging.getLogger("feed_notifier").info("Starting feed notifier server")
    uvicorn.run(
        create_app(settings),
        host=host or cfg.server.host,
        port=port or cfg.server.port,
        log_level=cfg.logging.level.lower(),
    )
    flush()


if __name__ == "__main__":
    app()
