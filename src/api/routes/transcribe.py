"""Transcribe endpoint: speech-to-text for an uploaded audio/video file."""

from __future__ import annotations

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile

from src.api.dependencies import get_provider_config
from src.api.models import ErrorResponse, TranscribeMeta, TranscribeResponse
from src.errors import ValidationError
from src.pipeline_config import ProviderConfig
from src.transcripts.speech import check_upload_size, transcribe_file

router = APIRouter()


@router.post(
    "/api/transcribe",
    response_model=TranscribeResponse,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def transcribe(
    config: Annotated[ProviderConfig, Depends(get_provider_config)],
    file: Annotated[UploadFile | None, File()] = None,
    lang: Annotated[str | None, Form()] = None,
) -> TranscribeResponse:
    """Transcribe an uploaded file (multipart field ``file``, optional ``lang``).

    Files over 25 MB return 413 with instructions to export smaller audio.
    """
    config.speech_credential()
    if file is None:
        raise ValidationError("Missing file. Expected multipart/form-data with field 'file'.")

    # Reject on the declared size before reading the body into memory.
    if file.size is not None:
        check_upload_size(file.size)
    raw = await file.read()

    result = await asyncio.to_thread(
        transcribe_file, raw, file.filename or "upload", config, lang
    )
    return TranscribeResponse(
        transcript=result.transcript,
        meta=TranscribeMeta(model=result.model or config.speech_model, bytes=result.bytes or len(raw)),
    )
