"""FastAPI dependencies shared by the routes."""

from __future__ import annotations

from src.config import settings
from src.pipeline_config import ProviderConfig


def get_provider_config() -> ProviderConfig:
    """Build the provider configuration from application settings.

    Routes take this via ``Depends`` so tests can override it.
    """
    return ProviderConfig.from_settings(settings)
