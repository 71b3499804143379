"""Google Gemini generateContent client for feed summarization."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ...errors import BackendRequestError, ConfigError
from ...logging_utils import truncate_text
from ..tracing import record_span_error, set_span_output, start_span
from .base import Candidate, GenerateResponse, SummaryProvider

logger = logging.getLogger(__name__)


class GeminiProvider(SummaryProvider):
    """Posts a single-part prompt to a Gemini generateContent endpoint.

    The endpoint URL is used as-is, so it carries the model name and API
    key query parameter (e.g. ".../models/gemini-2.0-flash:generateContent?key=...").
    """

    def __init__(
        self,
        endpoint_url: str | None,
        timeout: float = 120.0,
        trust_env: bool = True,
        transport: httpx.BaseTransport | None = None,
    ):
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self.trust_env = trust_env
        self.transport = transport

    def generate(self, prompt: str) -> GenerateResponse:
        if not self.endpoint_url:
            logger.error("AI backend endpoint URL is not configured")
            raise ConfigError("AI backend endpoint URL is not configured")

        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        with start_span(
            "gemini.generate",
            input_value=prompt,
            attributes={"llm.provider": "gemini"},
        ) as span:
            try:
                data = self._post(payload)
                response = parse_generate_response(data)
            except BackendRequestError as exc:
                record_span_error(span, exc)
                logger.error("Gemini request failed: %s", exc)
                raise
            set_span_output(span, [list(c.parts) for c in response.candidates])

        logger.debug("Gemini returned %d candidates", len(response.candidates))
        return response

    def _post(self, payload: dict[str, Any]) -> Any:
        try:
            with httpx.Client(
                timeout=self.timeout,
                trust_env=self.trust_env,
                transport=self.transport,
            ) as client:
                resp = client.post(self.endpoint_url, json=payload)
        except httpx.HTTPError as exc:
            raise BackendRequestError(f"{type(exc).__name__}: {exc}") from exc

        if not resp.is_success:
            raise BackendRequestError(
                f"Status: {resp.status_code}, Body: {truncate_text(resp.text, 500)}"
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise BackendRequestError(f"Undecodable response body: {exc}") from exc


def parse_generate_response(data: Any) -> GenerateResponse:
    """Convert a generateContent JSON body into a GenerateResponse.

    Parts without a string "text" (e.g. inline data) are skipped. Candidates
    without content keep their place with no parts.
    """
    if not isinstance(data, dict) or not isinstance(data.get("candidates"), list):
        raise BackendRequestError("Response body has no 'candidates' list")

    candidates: list[Candidate] = []
    for raw in data["candidates"]:
        if not isinstance(raw, dict):
            continue
        content = raw.get("content") or {}
        parts_raw = content.get("parts") if isinstance(content, dict) else None
        parts: list[str] = []
        for part in parts_raw or []:
            if isinstance(part, dict) and isinstance(part.get("text"), str):
                parts.append(part["text"])
        candidates.append(
            Candidate(
                parts=tuple(parts),
                role=content.get("role") if isinstance(content, dict) else None,
                finish_reason=raw.get("finishReason"),
                avg_logprobs=raw.get("avgLogprobs"),
            )
        )
    return GenerateResponse(candidates=tuple(candidates))
