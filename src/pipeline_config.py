"""Provider configuration: provider enums and the ProviderConfig dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from src.errors import ConfigurationError

if TYPE_CHECKING:
    from src.config import Settings


class TextProvider(str, Enum):
    """LLM backends able to generate a content pack."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class SpeechProvider(str, Enum):
    """Speech-to-text backends for uploaded audio/video."""

    OPENAI = "openai"
    ASSEMBLYAI = "assemblyai"


@dataclass(frozen=True)
class ProviderConfig:
    """Immutable configuration injected into the generator and the adapters.

    ``api_key`` is the OpenAI credential. The Anthropic and AssemblyAI keys are
    only consulted when their provider is selected. Defaults mirror the
    project's baseline models.
    """

    api_key: str = ""
    text_model: str = "gpt-4o-mini"
    speech_model: str = "whisper-1"
    text_provider: TextProvider = TextProvider.OPENAI
    speech_provider: SpeechProvider = SpeechProvider.OPENAI
    anthropic_api_key: str = ""
    assemblyai_api_key: str = ""

    @classmethod
    def from_settings(cls, settings: Settings) -> ProviderConfig:
        """Build a config from application settings.

        Raises:
            ConfigurationError: If a provider name is not recognised.
        """
        try:
            text_provider = TextProvider(settings.text_provider.lower())
            speech_provider = SpeechProvider(settings.speech_provider.lower())
        except ValueError as exc:
            raise ConfigurationError(f"Unsupported provider setting: {exc}") from exc

        text_model = settings.text_model
        if text_provider is TextProvider.ANTHROPIC:
            text_model = settings.anthropic_model
        speech_model = settings.speech_model
        if speech_provider is SpeechProvider.ASSEMBLYAI:
            speech_model = settings.assemblyai_speech_model

        return cls(
            api_key=settings.openai_api_key,
            text_model=text_model,
            speech_model=speech_model,
            text_provider=text_provider,
            speech_provider=speech_provider,
            anthropic_api_key=settings.anthropic_api_key,
            assemblyai_api_key=settings.assemblyai_api_key,
        )

    def text_credential(self) -> str:
        """Return the credential for the text provider or raise ConfigurationError."""
        if self.text_provider is TextProvider.ANTHROPIC:
            return _require(self.anthropic_api_key, "ANTHROPIC_API_KEY")
        return _require(self.api_key, "OPENAI_API_KEY")

    def speech_credential(self) -> str:
        """Return the credential for the speech provider or raise ConfigurationError."""
        if self.speech_provider is SpeechProvider.ASSEMBLYAI:
            return _require(self.assemblyai_api_key, "ASSEMBLYAI_API_KEY")
        return _require(self.api_key, "OPENAI_API_KEY")


def _require(value: str, env_name: str) -> str:
    if not value:
        raise ConfigurationError(f"Missing {env_name} in environment.")
    return value
