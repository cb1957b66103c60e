"""LLM-powered content pack generation from a transcript."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from anthropic import Anthropic, APIError
from anthropic.types import TextBlock
from openai import OpenAI, OpenAIError

from src.errors import UpstreamError
from src.generation.models import ContentPack, ContentPackRequest, coerce_request, validate_pack
from src.generation.prompts import SYSTEM_PROMPT, build_user_prompt
from src.pipeline_config import ProviderConfig, TextProvider

logger = logging.getLogger(__name__)

TEMPERATURE = 0.4
ANTHROPIC_MAX_TOKENS = 8192

FALLBACK_ERROR = "Content pack generation failed."


class ContentPackGenerator:
    """Turn a transcript into a validated ContentPack with one LLM call.

    Nothing is retried: a failed call or an unparseable response is reported
    to the caller as-is.
    """

    def __init__(self, config: ProviderConfig, client: Any | None = None) -> None:
        self.config = config
        self._client = client

    def generate(self, request: ContentPackRequest | Mapping[str, Any]) -> ContentPack:
        """Generate a content pack for *request*.

        Args:
            request: A ContentPackRequest or a ``{"url", "transcript"}`` mapping.

        Returns:
            The validated ContentPack.

        Raises:
            ValidationError: The request is out of bounds (no call is made).
            ConfigurationError: The provider credential is missing (no call is made).
            UpstreamError: The call failed or the output is not valid JSON.
            SchemaViolationError: The JSON does not match the pack schema.
        """
        request = coerce_request(request)
        api_key = self.config.text_credential()

        prompt = build_user_prompt(request.url, request.transcript)
        logger.info(
            "Generating content pack with %s/%s (%d transcript chars)",
            self.config.text_provider.value,
            self.config.text_model,
            len(request.transcript),
        )

        if self.config.text_provider is TextProvider.ANTHROPIC:
            text = self._complete_anthropic(api_key, prompt)
        else:
            text = self._complete_openai(api_key, prompt)

        return validate_pack(parse_pack_json(text))

    def _complete_openai(self, api_key: str, prompt: str) -> str:
        client = self._client or OpenAI(api_key=api_key, max_retries=0)
        try:
            response = client.responses.create(
                model=self.config.text_model,
                input=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=TEMPERATURE,
            )
        except OpenAIError as exc:
            logger.warning("OpenAI generation failed: %s", exc)
            raise UpstreamError(_error_message(exc)) from exc
        return str(response.output_text or "")

    def _complete_anthropic(self, api_key: str, prompt: str) -> str:
        client = self._client or Anthropic(api_key=api_key, max_retries=0)
        try:
            response = client.messages.create(
                model=self.config.text_model,
                max_tokens=ANTHROPIC_MAX_TOKENS,
                system=SYSTEM_PROMPT,
                temperature=TEMPERATURE,
                messages=[{"role": "user", "content": prompt}],
            )
        except APIError as exc:
            logger.warning("Anthropic generation failed: %s", exc)
            raise UpstreamError(_error_message(exc)) from exc

        # We always request plain text so the first text block carries the JSON.
        for block in response.content:
            if isinstance(block, TextBlock):
                return block.text
        raise UpstreamError("Model response contained no text.")


def parse_pack_json(text: str) -> Any:
    """Parse model output as JSON without any repair.

    Raises:
        UpstreamError: The text is empty or not valid JSON.
    """
    if not text or not text.strip():
        raise UpstreamError("Model returned an empty response.")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise UpstreamError(f"Model returned invalid JSON: {exc.msg} (line {exc.lineno})") from exc


def _error_message(exc: Exception) -> str:
    """Prefer the SDK's own message, fall back to a generic one."""
    message = getattr(exc, "message", None) or str(exc)
    return message or FALLBACK_ERROR
