"""Instruction contract sent to the LLM for content pack generation."""

from __future__ import annotations

NO_URL_MARKER = "(none)"

SYSTEM_PROMPT = (
    "You turn long-form video transcripts into a structured content pack. "
    "Be accurate; do not invent claims. Use only info present in the transcript."
)

_USER_PROMPT_TEMPLATE = """\
INPUT
URL: {url}

TRANSCRIPT:
\"\"\"
{transcript}
\"\"\"

TASK
Return a JSON object with:
- title: string (best guess from transcript, or empty)
- key_points: array of 10-20 bullets (short, specific)
- chapters: array of 6-12 items {{ time: "MM:SS" or "HH:MM:SS" (best effort), title: string }}
- clips: array of 12-20 items {{ start: time string, end: time string, hook: string (1 line), \
caption: string (1-2 lines), why: string (short) }}
- posts: {{ linkedin: string[5], x: string[10] }}

Rules:
- If transcript has no timestamps, set time/start/end to "".
- Hooks must be punchy but not clickbait.
- Keep LinkedIn posts < 1200 chars; X posts < 280 chars.
- Output MUST be valid JSON, no markdown."""


def build_user_prompt(url: str | None, transcript: str) -> str:
    """Embed the URL (or the explicit no-URL marker) and the verbatim transcript."""
    return _USER_PROMPT_TEMPLATE.format(url=url or NO_URL_MARKER, transcript=transcript)
