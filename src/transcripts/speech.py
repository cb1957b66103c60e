"""Speech-to-text acquisition: transcribe an uploaded audio/video file.

Two providers are supported: OpenAI's transcription endpoint (default) and
AssemblyAI. Both are asked for segment-level timing so the result can go
through the same normalizer as captions.
"""

from __future__ import annotations

import logging
from typing import Any

from openai import OpenAI, OpenAIError

from src.errors import PayloadTooLargeError, UpstreamError, ValidationError
from src.pipeline_config import ProviderConfig, SpeechProvider
from src.transcripts.models import AcquiredTranscript, TranscriptSegment, TranscriptSource
from src.transcripts.normalizer import normalize_segments

logger = logging.getLogger(__name__)

# 25 MB direct-transcription limit; no chunking for larger files
MAX_UPLOAD_BYTES = 25 * 1024 * 1024

TOO_LARGE_MESSAGE = (
    "File too large for direct transcription. Export audio (mp3/m4a) and keep it "
    f"under {MAX_UPLOAD_BYTES // (1024 * 1024)}MB."
)


def check_upload_size(size: int) -> None:
    """Reject empty uploads and uploads over MAX_UPLOAD_BYTES.

    Raises:
        ValidationError: The file is empty.
        PayloadTooLargeError: The file is larger than the limit.
    """
    if size <= 0:
        raise ValidationError("Missing file. Expected multipart/form-data with field 'file'.")
    if size > MAX_UPLOAD_BYTES:
        raise PayloadTooLargeError(TOO_LARGE_MESSAGE)


def transcribe_file(
    data: bytes | None,
    filename: str,
    config: ProviderConfig,
    lang: str | None = None,
    client: Any | None = None,
) -> AcquiredTranscript:
    """Transcribe *data* with the configured speech provider.

    Args:
        data: Raw file bytes.
        filename: Original upload name; the provider sniffs the format from it.
        config: Provider configuration (credential and model).
        lang: Optional ISO language hint.
        client: Optional pre-built SDK client (injected in tests, OpenAI only).

    Returns:
        AcquiredTranscript with the transcript, model and byte size.

    Raises:
        ValidationError: No file, or the provider rejected the audio content.
        PayloadTooLargeError: File exceeds MAX_UPLOAD_BYTES.
        ConfigurationError: The provider credential is missing.
        UpstreamError: The provider call failed.
    """
    if data is None:
        raise ValidationError("Missing file. Expected multipart/form-data with field 'file'.")
    check_upload_size(len(data))

    api_key = config.speech_credential()
    language = lang.strip() if lang and lang.strip() else None

    logger.info(
        "Transcribing %s (%d bytes) with %s/%s",
        filename or "upload",
        len(data),
        config.speech_provider.value,
        config.speech_model,
    )

    if config.speech_provider is SpeechProvider.ASSEMBLYAI:
        segments, text = _transcribe_assemblyai(data, api_key, config.speech_model, language)
    else:
        segments, text = _transcribe_openai(
            data, filename, api_key, config.speech_model, language, client
        )

    transcript = normalize_segments(segments) if segments else text

    return AcquiredTranscript(
        transcript=transcript,
        source=TranscriptSource.SPEECH,
        model=config.speech_model,
        bytes=len(data),
    )


def _transcribe_openai(
    data: bytes,
    filename: str,
    api_key: str,
    model: str,
    language: str | None,
    client: Any | None,
) -> tuple[list[TranscriptSegment], str]:
    """Call OpenAI transcription with ``verbose_json`` and return (segments, flat text)."""
    openai_client = client if client is not None else OpenAI(api_key=api_key, max_retries=0)

    kwargs: dict[str, Any] = {
        "file": (filename or "upload", data),
        "model": model,
        "response_format": "verbose_json",
    }
    if language:
        kwargs["language"] = language

    try:
        result = openai_client.audio.transcriptions.create(**kwargs)
    except OpenAIError as exc:
        logger.warning("OpenAI transcription failed: %s", exc)
        raise UpstreamError(str(exc) or "Failed to transcribe.") from exc

    segments = [
        TranscriptSegment(
            text=str(getattr(seg, "text", "") or ""),
            offset_seconds=_seconds(getattr(seg, "start", None)),
        )
        for seg in (getattr(result, "segments", None) or [])
    ]
    return segments, str(getattr(result, "text", "") or "")


def _transcribe_assemblyai(
    data: bytes,
    api_key: str,
    model: str,
    language: str | None,
) -> tuple[list[TranscriptSegment], str]:
    """Transcribe via AssemblyAI SDK and return (segments, flat text).

    The SDK accepts bytes directly, no temp file needed. Utterance offsets
    are reported in milliseconds.
    """
    import assemblyai as aai  # type: ignore[import-untyped]  # no stubs

    aai.settings.api_key = api_key
    transcriber = aai.Transcriber()
    # speaker_labels=True is what makes the API return utterances with timing
    config = aai.TranscriptionConfig(
        speech_models=[model],
        speaker_labels=True,
        language_code=language,
    )

    try:
        transcript = transcriber.transcribe(data, config=config)
    except Exception as exc:
        # Infrastructure error: invalid API key, network failure, provider outage.
        logger.warning("AssemblyAI transcription failed: %s", exc)
        raise UpstreamError(f"Transcription service unavailable: {exc}") from exc

    if transcript.status == aai.TranscriptStatus.error:
        # AssemblyAI rejected the audio content (corrupted, unsupported format, etc.)
        raise ValidationError(f"Transcription failed: {transcript.error}")

    segments = [
        TranscriptSegment(text=u.text, offset_seconds=_seconds(u.start, scale=1000.0))
        for u in (transcript.utterances or [])
    ]
    return segments, transcript.text or ""


def _seconds(value: Any, scale: float = 1.0) -> float | None:
    if isinstance(value, (int, float)):
        return float(value) / scale
    return None
