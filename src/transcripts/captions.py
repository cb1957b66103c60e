"""Caption acquisition: fetch a video's published captions via youtube-transcript-api."""

from __future__ import annotations

import html
import logging
import re
from typing import Any
from urllib.parse import parse_qs, urlparse

from youtube_transcript_api import CouldNotRetrieveTranscript, YouTubeTranscriptApi

from src.errors import NotFoundError
from src.transcripts.models import AcquiredTranscript, TranscriptSegment, TranscriptSource
from src.transcripts.normalizer import normalize_segments

logger = logging.getLogger(__name__)

# Shorter than this after normalization means captions are disabled, blocked, or junk
MIN_CAPTION_CHARS = 50

DEFAULT_LANGUAGE = "en"

_VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")
_PATH_PREFIXES = ("shorts", "embed", "live", "v")


def extract_video_id(url: str) -> str | None:
    """Resolve a YouTube video id from a watch/short/embed URL or a bare id.

    Returns None when no id can be found.
    """
    raw = url.strip()
    if _VIDEO_ID_RE.match(raw):
        return raw

    parsed = urlparse(raw)
    host = (parsed.hostname or "").lower()

    if host.endswith("youtu.be"):
        candidate = parsed.path.lstrip("/").split("/", 1)[0]
        return candidate or None

    if host.endswith("youtube.com") or host.endswith("youtube-nocookie.com"):
        v = parse_qs(parsed.query).get("v")
        if v and v[0]:
            return v[0]
        parts = [p for p in parsed.path.split("/") if p]
        for i, part in enumerate(parts[:-1]):
            if part in _PATH_PREFIXES:
                return parts[i + 1]

    return None


def fetch_captions(
    url: str,
    lang: str | None = DEFAULT_LANGUAGE,
    api: Any | None = None,
) -> AcquiredTranscript:
    """Fetch captions for *url* and return them as a normalized transcript.

    There is no retry: caption unavailability is usually permanent for a video.

    Args:
        url: Video URL (or bare video id).
        lang: Caption language code; falls back to ``"en"`` when empty.
        api: Optional ``YouTubeTranscriptApi`` instance (injected in tests).

    Returns:
        AcquiredTranscript with the transcript and the caption item count.

    Raises:
        NotFoundError: No id in the URL, the fetch failed, no items came back,
            or the normalized text is under MIN_CAPTION_CHARS characters.
    """
    video_id = extract_video_id(url)
    if video_id is None:
        raise NotFoundError(f"Could not find a YouTube video id in {url!r}.")

    language = lang or DEFAULT_LANGUAGE
    ytt_api = api if api is not None else YouTubeTranscriptApi()

    try:
        fetched = ytt_api.fetch(video_id, languages=[language])
        snippets = list(fetched)
    except CouldNotRetrieveTranscript as exc:
        logger.info("No captions for video %s (%s): %s", video_id, language, type(exc).__name__)
        raise NotFoundError() from exc
    except Exception as exc:
        # Network failure or YouTube blocking the request; still "unavailable" to the caller.
        logger.warning("Caption fetch failed for video %s: %s", video_id, exc)
        raise NotFoundError(
            "Failed to fetch transcript. This video may not have captions "
            "or YouTube blocked the request."
        ) from exc

    if not snippets:
        raise NotFoundError()

    transcript = normalize_segments(
        TranscriptSegment(
            text=html.unescape(str(getattr(s, "text", "") or "")),
            offset_seconds=_offset(s),
        )
        for s in snippets
    )
    if len(transcript) < MIN_CAPTION_CHARS:
        raise NotFoundError()

    logger.info("Fetched %d caption items for video %s", len(snippets), video_id)
    return AcquiredTranscript(
        transcript=transcript,
        source=TranscriptSource.CAPTIONS,
        count=len(snippets),
    )


def _offset(snippet: Any) -> float | None:
    """Snippet start in seconds, or None when the library did not report one."""
    start = getattr(snippet, "start", None)
    if isinstance(start, (int, float)):
        return float(start)
    return None
