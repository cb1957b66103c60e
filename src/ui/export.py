"""Helpers for presenting and exporting a content pack (no Streamlit imports)."""

from __future__ import annotations

import json
import re
from typing import Any

from src.transcripts.captions import extract_video_id

_WHITESPACE_RE = re.compile(r"\s+")
_EMBED_BASE = "https://www.youtube-nocookie.com/embed"


def export_filename(title: str | None) -> str:
    """Download name for a pack: first 40 title characters, whitespace runs as ``-``."""
    stem = _WHITESPACE_RE.sub("-", (title or "video")[:40])
    return f"content-pack-{stem}.json"


def export_json(pack: dict[str, Any]) -> str:
    """The raw pack as pretty-printed JSON."""
    return json.dumps(pack, indent=2, ensure_ascii=False)


def transcript_stats(transcript: str) -> tuple[int, int]:
    """Return ``(characters, words)`` for the transcript box."""
    stripped = transcript.strip()
    return len(transcript), len(stripped.split()) if stripped else 0


def error_from_response(body: Any, fallback: str) -> str:
    """Pull the ``error`` field out of a failed API response body."""
    if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
        return str(body["error"])
    return fallback


def youtube_embed_url(url: str) -> str | None:
    """Privacy-enhanced embed URL for a YouTube link, or None if no video id resolves."""
    video_id = extract_video_id(url) if url.strip() else None
    if video_id is None:
        return None
    return f"{_EMBED_BASE}/{video_id}"
