"""Error taxonomy shared by the transcript adapters, the generator and the API.

Each error carries the HTTP status it maps to; the API layer renders every
one of them as ``{"error": message}``.
"""

from __future__ import annotations


class ContentPackError(Exception):
    """Base class for all expected pipeline failures."""

    status_code: int = 500
    default_message: str = "Request failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self.args[0])


class ConfigurationError(ContentPackError):
    """A required credential or setting is absent or invalid."""

    status_code = 500
    default_message = "Server is not configured."


class ValidationError(ContentPackError):
    """A request field is malformed or out of range."""

    status_code = 400
    default_message = "Invalid request."


class NotFoundError(ContentPackError):
    """Captions are absent, empty, or too short to be usable."""

    status_code = 404
    default_message = (
        "Transcript was empty/unavailable for this video. "
        "Try uploading the audio for transcription instead."
    )


class PayloadTooLargeError(ContentPackError):
    """An uploaded file exceeds the transcription size ceiling."""

    status_code = 413
    default_message = "File too large."


class UpstreamError(ContentPackError):
    """The external API failed or returned unusable output."""

    status_code = 502
    default_message = "Upstream request failed."


class SchemaViolationError(UpstreamError):
    """The model returned JSON that does not match the content pack shape."""

    default_message = "Model output does not match the content pack schema."

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        summary = "; ".join(violations[:10])
        if len(violations) > 10:
            summary += f"; ... ({len(violations) - 10} more)"
        super().__init__(f"{self.default_message} {summary}")
