"""
HTTP trigger surface.

GET / runs one pipeline against the configured feed URL and notification
limit. Success answers 204; any pipeline failure answers 500 with an empty
body so no internal detail reaches the caller.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Response

from .config import Settings
from .errors import PipelineError
from .runner import PipelineOrchestrator, build_orchestrator

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings,
    orchestrator: PipelineOrchestrator | None = None,
) -> FastAPI:
    app = FastAPI(title="feed-notifier")
    app.state.settings = settings
    app.state.orchestrator = orchestrator or build_orchestrator(settings)

    # Sync handler: FastAPI runs it in its threadpool, one pipeline per request.
    @app.get("/", status_code=204)
    def trigger() -> Response:
        try:
            result = app.state.orchestrator.run(
                settings.feed_url, settings.notification_limit
            )
        except PipelineError as exc:
            logger.error("Pipeline run failed: %s", exc)
            return Response(status_code=500)
        logger.info(
            "Processed feed %s: %d notifications sent",
            result.feed_url,
            result.notifications_sent,
        )
        return Response(status_code=204)

    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app
