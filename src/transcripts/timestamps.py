"""Offset-to-timestamp formatting."""

from __future__ import annotations

import math


def format_timestamp(seconds: float) -> str:
    """Format an offset in seconds as ``MM:SS`` or ``HH:MM:SS``.

    Fractions are floored and negative offsets clamp to zero. Hours are only
    shown once the offset reaches one hour.
    """
    total = max(0, math.floor(seconds))
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"
