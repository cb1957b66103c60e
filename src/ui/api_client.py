"""HTTP client wrapper for the Content Pack FastAPI backend."""

from __future__ import annotations

import os
from typing import Any

import httpx
import streamlit as st

from src.ui.export import error_from_response

API_URL = os.getenv("API_URL", "http://localhost:8000")


def check_health() -> bool:
    """Return True if the API server responds to /health."""
    try:
        r = httpx.get(f"{API_URL}/health", timeout=5.0)
        return r.status_code == 200
    except httpx.HTTPError:
        return False


def _post(path: str, fallback: str, timeout: float, **kwargs: Any) -> dict[str, Any]:
    """POST to the API; show the server's ``error`` message on failure and return {}."""
    try:
        r = httpx.post(f"{API_URL}{path}", timeout=timeout, **kwargs)
    except httpx.HTTPError as e:
        st.error(f"{fallback} {e}")
        return {}
    try:
        body = r.json()
    except ValueError:
        body = None
    if r.is_error:
        st.error(error_from_response(body, fallback))
        return {}
    return body if isinstance(body, dict) else {}


def fetch_transcript(url: str, lang: str | None = None) -> dict[str, Any]:
    """Fetch captions for a video URL."""
    payload: dict[str, str] = {"url": url}
    if lang:
        payload["lang"] = lang
    return _post("/api/transcript", "Failed to fetch transcript.", 60.0, json=payload)


def transcribe_upload(file_content: bytes, filename: str, lang: str | None = None) -> dict[str, Any]:
    """Send an audio/video file to the transcription endpoint."""
    data = {"lang": lang} if lang else {}
    return _post(
        "/api/transcribe",
        "Failed to transcribe.",
        600.0,
        files={"file": (filename, file_content)},
        data=data,
    )


def generate_pack(transcript: str, url: str | None = None) -> dict[str, Any]:
    """Generate a content pack; returns the pack itself (the ``data`` field)."""
    payload: dict[str, str] = {"transcript": transcript}
    if url:
        payload["url"] = url
    result = _post("/api/generate", "Generation failed.", 180.0, json=payload)
    data = result.get("data")
    return data if isinstance(data, dict) else {}
