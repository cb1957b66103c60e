"""Pydantic schemas for the content pack request and the generated pack.

The pack schema is what the model is instructed to produce; validating
against it turns count and length drift into a SchemaViolationError instead
of handing a malformed pack to the client.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, StringConstraints, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from src.errors import SchemaViolationError, ValidationError

MIN_TRANSCRIPT_CHARS = 200
MAX_TRANSCRIPT_CHARS = 200_000

# Hard ceilings are exclusive: LinkedIn < 1200 chars, X < 280 chars
LINKEDIN_MAX_CHARS = 1200
X_MAX_CHARS = 280

_ANY_URL = TypeAdapter(AnyUrl)


class ContentPackRequest(BaseModel):
    """Validated input to the generator."""

    url: str | None = None
    transcript: str = Field(min_length=MIN_TRANSCRIPT_CHARS, max_length=MAX_TRANSCRIPT_CHARS)

    @field_validator("url", mode="before")
    @classmethod
    def _check_url(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str) and not value.strip():
            return None
        if not isinstance(value, str):
            raise ValueError("URL must be a string")
        # Any absolute URL is accepted; the caller's exact spelling goes into the prompt.
        try:
            _ANY_URL.validate_python(value.strip())
        except PydanticValidationError:
            raise ValueError("Invalid URL") from None
        return value.strip()


class _PackModel(BaseModel):
    # Keys the model adds beyond the schema are passed through untouched.
    model_config = ConfigDict(extra="allow")


class Chapter(_PackModel):
    time: str
    title: str


class Clip(_PackModel):
    start: str
    end: str
    hook: str
    caption: str
    why: str


LinkedInPost = Annotated[str, StringConstraints(max_length=LINKEDIN_MAX_CHARS - 1)]
XPost = Annotated[str, StringConstraints(max_length=X_MAX_CHARS - 1)]


class Posts(_PackModel):
    linkedin: list[LinkedInPost] = Field(min_length=5, max_length=5)
    x: list[XPost] = Field(min_length=10, max_length=10)


class ContentPack(_PackModel):
    """Chapters, clip candidates and social drafts extracted from one transcript."""

    title: str | None = None
    key_points: list[str] = Field(min_length=10, max_length=20)
    chapters: list[Chapter] = Field(min_length=6, max_length=12)
    clips: list[Clip] = Field(min_length=12, max_length=20)
    posts: Posts

    def as_payload(self) -> dict[str, Any]:
        """Serialise exactly the fields the model produced."""
        return self.model_dump(exclude_unset=True)


def describe_errors(exc: PydanticValidationError) -> list[str]:
    """Flatten pydantic errors into ``"field.path: message"`` strings."""
    described: list[str] = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        where = ".".join(loc) or "<root>"
        described.append(f"{where}: {error.get('msg', 'invalid value')}")
    return described


def coerce_request(request: ContentPackRequest | Mapping[str, Any]) -> ContentPackRequest:
    """Return *request* as a validated ContentPackRequest.

    Raises:
        ValidationError: A field is missing, malformed, or out of range.
    """
    if isinstance(request, ContentPackRequest):
        return request
    try:
        return ContentPackRequest.model_validate(dict(request))
    except PydanticValidationError as exc:
        raise ValidationError("; ".join(describe_errors(exc))) from exc


def validate_pack(data: Any) -> ContentPack:
    """Check parsed model output against the ContentPack schema.

    Raises:
        SchemaViolationError: Missing fields, wrong types, counts outside the
            expected ranges, or posts over their character ceilings.
    """
    if not isinstance(data, dict):
        raise SchemaViolationError([f"<root>: expected a JSON object, got {type(data).__name__}"])
    try:
        return ContentPack.model_validate(data)
    except PydanticValidationError as exc:
        raise SchemaViolationError(describe_errors(exc)) from exc
