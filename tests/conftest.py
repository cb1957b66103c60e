"""Shared fixtures: sample transcripts, a well-formed pack, and an API client."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_provider_config
from src.api.main import app
from src.pipeline_config import ProviderConfig


def make_pack() -> dict[str, Any]:
    """A content pack that satisfies every count and length rule."""
    return {
        "title": "Shipping a side project in a weekend",
        "key_points": [f"Point {i}: keep scope small" for i in range(12)],
        "chapters": [{"time": f"0{i}:00", "title": f"Chapter {i}"} for i in range(8)],
        "clips": [
            {
                "start": f"0{i % 10}:10",
                "end": f"0{i % 10}:40",
                "hook": f"Hook {i}",
                "caption": f"Caption {i}",
                "why": "Concrete, quotable advice",
            }
            for i in range(14)
        ],
        "posts": {
            "linkedin": [f"LinkedIn draft {i}" for i in range(5)],
            "x": [f"X draft {i}" for i in range(10)],
        },
    }


def make_transcript(words: int = 500) -> str:
    """A timestamped transcript of roughly *words* words."""
    lines = []
    for i in range(0, words, 10):
        minutes, seconds = divmod(i * 3, 60)
        lines.append(f"{minutes:02d}:{seconds:02d} " + " ".join(f"word{i + j}" for j in range(10)))
    return "\n".join(lines)


@pytest.fixture
def pack() -> dict[str, Any]:
    return make_pack()


@pytest.fixture
def transcript() -> str:
    return make_transcript()


@pytest.fixture
def provider_config() -> ProviderConfig:
    return ProviderConfig(api_key="sk-test", text_model="gpt-test", speech_model="whisper-test")


@pytest.fixture
def client(provider_config: ProviderConfig) -> Iterator[TestClient]:
    """TestClient with a fake credential injected in place of the environment."""
    app.dependency_overrides[get_provider_config] = lambda: provider_config
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
