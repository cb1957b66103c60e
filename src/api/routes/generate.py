"""Generate endpoint: turn a transcript into a content pack."""

from __future__ import annotations

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_provider_config
from src.api.models import ErrorResponse, GenerateResponse
from src.generation.generator import ContentPackGenerator
from src.generation.models import ContentPackRequest
from src.pipeline_config import ProviderConfig

router = APIRouter()


@router.post(
    "/api/generate",
    response_model=GenerateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def generate(
    request: ContentPackRequest,
    config: Annotated[ProviderConfig, Depends(get_provider_config)],
) -> GenerateResponse:
    """Generate chapters, clips and post drafts for a transcript.

    Rejects a missing credential (500) before calling the LLM. Upstream
    failures, invalid JSON, and schema violations are reported as 502.
    """
    config.text_credential()
    generator = ContentPackGenerator(config)
    # The SDK clients are synchronous; run in a thread to keep the event loop free.
    pack = await asyncio.to_thread(generator.generate, request)
    return GenerateResponse(data=pack.as_payload())
