"""Data models for transcript acquisition."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TranscriptSource(str, Enum):
    """Where a transcript came from."""

    CAPTIONS = "captions"
    SPEECH = "speech"
    MANUAL = "manual"


@dataclass
class TranscriptSegment:
    """Uniform representation of a timed piece of text from any source."""

    text: str | None
    offset_seconds: float | None = None


@dataclass
class AcquiredTranscript:
    """A normalized transcript plus whatever metadata its source reports."""

    transcript: str
    source: TranscriptSource
    count: int | None = None  # caption items returned
    model: str | None = None  # speech-to-text model used
    bytes: int | None = None  # size of the uploaded file
