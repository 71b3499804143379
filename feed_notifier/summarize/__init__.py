"""Summary extraction from AI backend responses."""

from .extractor import (
    SummaryExtractor,
    build_prompt,
    decode_prompt_template,
    first_parsable_summary,
    iter_text_blocks,
    strip_code_fence,
)

__all__ = [
    "SummaryExtractor",
    "build_prompt",
    "decode_prompt_template",
    "first_parsable_summary",
    "iter_text_blocks",
    "strip_code_fence",
]
