"""Collapse timed segments from any source into one canonical transcript string."""

from __future__ import annotations

import re
from collections.abc import Iterable

from src.transcripts.models import TranscriptSegment
from src.transcripts.timestamps import format_timestamp

_WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str | None) -> str:
    """Replace every whitespace run with a single space and trim."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_segment(segment: TranscriptSegment) -> str:
    """Render one segment as ``"<timestamp> <text>"`` (or bare text).

    Returns an empty string when the segment has no text, even if it carries
    an offset.
    """
    text = collapse_whitespace(segment.text)
    if not text:
        return ""
    if segment.offset_seconds is None:
        return text
    return f"{format_timestamp(segment.offset_seconds)} {text}"


def normalize_segments(segments: Iterable[TranscriptSegment]) -> str:
    """Join normalized segments with newlines, dropping empty ones.

    Example line: ``03:12 Some text...``
    """
    lines = (normalize_segment(segment) for segment in segments)
    return "\n".join(line for line in lines if line)
