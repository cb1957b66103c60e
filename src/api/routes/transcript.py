"""Fetch-transcript endpoint: pull published captions for a video URL."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter

from src.api.models import ErrorResponse, FetchTranscriptRequest, FetchTranscriptResponse
from src.transcripts.captions import fetch_captions

router = APIRouter()


@router.post(
    "/api/transcript",
    response_model=FetchTranscriptResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def fetch_transcript(request: FetchTranscriptRequest) -> FetchTranscriptResponse:
    """Fetch captions and return them as a timestamped transcript.

    Returns 404 when captions are disabled, missing, or too short.
    """
    result = await asyncio.to_thread(fetch_captions, str(request.url), request.lang)
    return FetchTranscriptResponse(transcript=result.transcript, count=result.count or 0)
