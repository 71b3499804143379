"""
Structured summary extraction from AI backend responses.

The backend returns candidates, each with ordered text parts. Parts may be
wrapped in markdown code fences. The first part, in (candidate, part) order,
that parses into a StructuredSummary wins; later parts are never consulted.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import re
from typing import Iterable, Iterator, Sequence

from ..core.types import FeedItem, StructuredSummary, parse_summary
from ..errors import ConfigDecodeError, MissingPromptConfig, NoParsableSummary, ParseError
from ..llm.providers.base import GenerateResponse, SummaryProvider
from ..logging_utils import truncate_text

logger = logging.getLogger(__name__)

_FENCE_LINE_RE = re.compile(r"^[ \t]*```[\w+-]*[ \t]*$", re.MULTILINE)
_LEADING_FENCE_RE = re.compile(r"^```[\w+-]*")
_TRAILING_FENCE_RE = re.compile(r"```$")


def decode_prompt_template(encoded: str | None) -> str:
    """Decode the base64 prompt template setting.

    Raises:
        MissingPromptConfig: If the setting is absent or empty
        ConfigDecodeError: If the value is not valid base64 or not UTF-8
    """
    if encoded is None or not encoded.strip():
        raise MissingPromptConfig("Prompt template setting is not set")
    try:
        raw = base64.b64decode(encoded.strip(), validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, ValueError) as exc:
        raise ConfigDecodeError(f"Prompt template could not be decoded: {exc}") from exc


def build_prompt(template: str, items: Sequence[FeedItem]) -> str:
    """Concatenate the template with the JSON array of feed items."""
    payload = json.dumps([item.to_dict() for item in items], ensure_ascii=False)
    return f"{template}{payload}"


def strip_code_fence(text: str) -> str:
    """Remove markdown code fence markers, keeping the fenced content."""
    stripped = _FENCE_LINE_RE.sub("", text).strip()
    stripped = _LEADING_FENCE_RE.sub("", stripped)
    stripped = _TRAILING_FENCE_RE.sub("", stripped)
    return stripped.strip()


def iter_text_blocks(response: GenerateResponse) -> Iterator[str]:
    """Flatten candidates x parts into one order-preserving sequence."""
    for candidate in response.candidates:
        yield from candidate.parts


def first_parsable_summary(blocks: Iterable[str]) -> StructuredSummary:
    """Return the first block that parses into a StructuredSummary.

    Blocks are consumed lazily, so nothing after the winning block is read.

    Raises:
        NoParsableSummary: If no block parses
    """
    scanned = 0
    for block in blocks:
        scanned += 1
        try:
            return parse_summary(json.loads(strip_code_fence(block)))
        except (json.JSONDecodeError, ParseError) as exc:
            logger.debug(
                "Skipping unparsable block %d: %s (%s)",
                scanned,
                exc,
                truncate_text(block, 200),
            )
    raise NoParsableSummary(f"No parsable summary in {scanned} response parts")


class SummaryExtractor:
    """Builds the summary prompt, calls the backend, and extracts the summary."""

    def __init__(self, provider: SummaryProvider, prompt_template_b64: str | None):
        self.provider = provider
        self.prompt_template_b64 = prompt_template_b64

    def summarize(self, items: Sequence[FeedItem]) -> StructuredSummary:
        """Decode the configured template, then extract.

        Config errors are raised before any backend call is made.
        """
        try:
            template = decode_prompt_template(self.prompt_template_b64)
        except (MissingPromptConfig, ConfigDecodeError) as exc:
            logger.error("Prompt template unavailable: %s", exc)
            raise
        return self.extract(items, template)

    def extract(self, items: Sequence[FeedItem], prompt_template: str) -> StructuredSummary:
        prompt = build_prompt(prompt_template, items)
        response = self.provider.generate(prompt)
        try:
            summary = first_parsable_summary(iter_text_blocks(response))
        except NoParsableSummary as exc:
            logger.error("Summary extraction failed: %s", exc)
            raise
        logger.debug(
            "Extracted summary with %d categories (total=%d)",
            summary.category_count,
            summary.total,
        )
        return summary
