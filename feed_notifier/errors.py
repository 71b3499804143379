"""
Error taxonomy for the feed notification pipeline.

Stage-local errors (StageError subclasses) are raised by the collaborators
and the extractor. The orchestrator wraps each one into exactly one of the
coarse PipelineError categories:
- RssError: feed fetch or conversion failed
- SummaryError: prompt config, AI backend, or summary extraction failed
- NotificationError: notification delivery failed
"""

from __future__ import annotations


class FeedNotifierError(Exception):
    """Base class for all errors raised by this package."""


class StageError(FeedNotifierError):
    """Error raised inside a single pipeline stage."""


class ConfigError(StageError):
    """A required setting is missing or empty."""


class MissingPromptConfig(ConfigError):
    """The base64 prompt template setting is absent."""


class DecodeError(StageError):
    """A setting is present but cannot be decoded."""


class ConfigDecodeError(DecodeError):
    """The prompt template is not valid base64 or not valid UTF-8."""


class TransportError(StageError):
    """Network failure talking to the feed, AI backend, or sink."""


class BackendRequestError(TransportError):
    """The AI backend request failed or returned an unusable body."""


class ParseError(StageError):
    """A feed or AI response body is not in the expected shape."""


class ExtractionError(StageError):
    """An otherwise valid AI response yielded no structured summary."""


class NoParsableSummary(ExtractionError):
    """No candidate part parsed into a StructuredSummary."""


class SinkError(StageError):
    """The webhook rejected the notification payload."""


class PipelineError(FeedNotifierError):
    """Coarse failure category returned by the orchestrator."""

    def __init__(self, message: str, stage_error: Exception | None = None):
        super().__init__(message)
        self.stage_error = stage_error


class RssError(PipelineError):
    pass


class SummaryError(PipelineError):
    pass


class NotificationError(PipelineError):
    pass
