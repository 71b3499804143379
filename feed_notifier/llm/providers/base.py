"""Abstract interface and response types for the AI summarization backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Candidate:
    """One candidate answer: an ordered list of text parts."""

    parts: tuple[str, ...] = ()
    role: str | None = None
    finish_reason: str | None = None
    avg_logprobs: float | None = None


@dataclass(frozen=True)
class GenerateResponse:
    candidates: tuple[Candidate, ...] = ()


class SummaryProvider(ABC):
    """Provider interface for a single prompt-in, candidates-out call."""

    @abstractmethod
    def generate(self, prompt: str) -> GenerateResponse:
        """Send the prompt and return every candidate in backend order.

        Raises:
            BackendRequestError: On transport failure or an unusable body
        """
        raise NotImplementedError
