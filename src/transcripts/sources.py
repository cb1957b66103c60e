"""One capability, three variants: every way of obtaining a transcript.

Callers pick the variant; each returns an AcquiredTranscript so downstream
code never cares where the text came from.
"""

from __future__ import annotations

from src.transcripts.captions import fetch_captions
from src.transcripts.models import AcquiredTranscript, TranscriptSource
from src.transcripts.speech import transcribe_file


def from_pasted_text(text: str) -> AcquiredTranscript:
    """Accept a user-pasted transcript as-is (outer whitespace trimmed)."""
    return AcquiredTranscript(transcript=(text or "").strip(), source=TranscriptSource.MANUAL)


__all__ = [
    "AcquiredTranscript",
    "TranscriptSource",
    "fetch_captions",
    "from_pasted_text",
    "transcribe_file",
]
