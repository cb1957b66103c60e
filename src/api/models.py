"""Pydantic request/response schemas for the Content Pack API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, HttpUrl


class GenerateResponse(BaseModel):
    """Response body for the /api/generate endpoint."""

    data: dict[str, Any]


class TranscribeMeta(BaseModel):
    """Which model transcribed the upload and how large it was."""

    model: str
    bytes: int


class TranscribeResponse(BaseModel):
    """Response body for the /api/transcribe endpoint."""

    transcript: str
    meta: TranscribeMeta


class FetchTranscriptRequest(BaseModel):
    """Request body for the /api/transcript endpoint."""

    url: HttpUrl
    lang: str | None = None


class FetchTranscriptResponse(BaseModel):
    """Response body for the /api/transcript endpoint."""

    transcript: str
    count: int


class ErrorResponse(BaseModel):
    """Body of every failed request."""

    error: str
