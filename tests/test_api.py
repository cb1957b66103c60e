"""Tests for API endpoints (no external API keys required)."""

from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_provider_config
from src.api.main import app
from src.pipeline_config import ProviderConfig


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_routes_registered() -> None:
    routes = [r.path for r in app.routes]  # type: ignore[union-attr]
    for path in ("/api/generate", "/api/transcribe", "/api/transcript"):
        assert path in routes


# ---------------------------------------------------------------------------
# POST /api/generate
# ---------------------------------------------------------------------------


class TestGenerateEndpoint:
    @patch("src.generation.generator.OpenAI")
    def test_success(
        self, mock_openai_cls: MagicMock, client: TestClient, pack: dict[str, Any], transcript: str
    ) -> None:
        mock_openai_cls.return_value.responses.create.return_value = SimpleNamespace(
            output_text=json.dumps(pack)
        )

        response = client.post(
            "/api/generate",
            json={"url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ", "transcript": transcript},
        )

        assert response.status_code == 200, response.text
        assert response.json() == {"data": pack}
        mock_openai_cls.return_value.responses.create.assert_called_once()

    @patch("src.generation.generator.OpenAI")
    def test_empty_url_accepted(
        self, mock_openai_cls: MagicMock, client: TestClient, pack: dict[str, Any], transcript: str
    ) -> None:
        mock_openai_cls.return_value.responses.create.return_value = SimpleNamespace(
            output_text=json.dumps(pack)
        )
        response = client.post("/api/generate", json={"url": "", "transcript": transcript})
        assert response.status_code == 200
        prompt = mock_openai_cls.return_value.responses.create.call_args.kwargs["input"][1]["content"]
        assert "URL: (none)" in prompt

    @patch("src.generation.generator.OpenAI")
    def test_short_transcript_400_without_call(
        self, mock_openai_cls: MagicMock, client: TestClient
    ) -> None:
        response = client.post("/api/generate", json={"transcript": "x" * 199})
        assert response.status_code == 400
        assert "transcript" in response.json()["error"]
        mock_openai_cls.assert_not_called()

    def test_bad_url_400(self, client: TestClient, transcript: str) -> None:
        response = client.post("/api/generate", json={"url": "nope", "transcript": transcript})
        assert response.status_code == 400
        assert "url" in response.json()["error"]

    def test_missing_body_400(self, client: TestClient) -> None:
        response = client.post("/api/generate", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "transcript: Field required"}

    @patch("src.generation.generator.OpenAI")
    def test_missing_key_500(self, mock_openai_cls: MagicMock, transcript: str) -> None:
        app.dependency_overrides[get_provider_config] = lambda: ProviderConfig(api_key="")
        try:
            response = TestClient(app).post("/api/generate", json={"transcript": transcript})
        finally:
            app.dependency_overrides.clear()
        assert response.status_code == 500
        assert response.json() == {"error": "Missing OPENAI_API_KEY in environment."}
        mock_openai_cls.assert_not_called()

    @patch("src.generation.generator.OpenAI")
    def test_invalid_json_502(
        self, mock_openai_cls: MagicMock, client: TestClient, transcript: str
    ) -> None:
        mock_openai_cls.return_value.responses.create.return_value = SimpleNamespace(
            output_text="```json\n{}\n```"
        )
        response = client.post("/api/generate", json={"transcript": transcript})
        assert response.status_code == 502
        body = response.json()
        assert set(body) == {"error"}
        assert "invalid JSON" in body["error"]

    @patch("src.generation.generator.OpenAI")
    def test_schema_violation_502(
        self, mock_openai_cls: MagicMock, client: TestClient, pack: dict[str, Any], transcript: str
    ) -> None:
        pack["posts"]["x"] = pack["posts"]["x"][:2]
        mock_openai_cls.return_value.responses.create.return_value = SimpleNamespace(
            output_text=json.dumps(pack)
        )
        response = client.post("/api/generate", json={"transcript": transcript})
        assert response.status_code == 502
        assert "posts.x" in response.json()["error"]


# ---------------------------------------------------------------------------
# POST /api/transcribe
# ---------------------------------------------------------------------------


class TestTranscribeEndpoint:
    @patch("src.transcripts.speech.OpenAI")
    def test_success(self, mock_openai_cls: MagicMock, client: TestClient) -> None:
        mock_openai_cls.return_value.audio.transcriptions.create.return_value = SimpleNamespace(
            text="Hello world",
            segments=[SimpleNamespace(start=1.2, text=" Hello "), SimpleNamespace(start=75, text="world")],
        )
        audio = b"\xff\xfb\x90\x00" + b"\x00" * 100

        response = client.post(
            "/api/transcribe",
            files={"file": ("talk.mp3", audio, "audio/mpeg")},
            data={"lang": "en"},
        )

        assert response.status_code == 200, response.text
        assert response.json() == {
            "transcript": "00:01 Hello\n01:15 world",
            "meta": {"model": "whisper-test", "bytes": len(audio)},
        }
        kwargs = mock_openai_cls.return_value.audio.transcriptions.create.call_args.kwargs
        assert kwargs["language"] == "en"

    def test_missing_file_400(self, client: TestClient) -> None:
        response = client.post("/api/transcribe", data={"lang": "en"})
        assert response.status_code == 400
        assert "Missing file" in response.json()["error"]

    @patch("src.transcripts.speech.OpenAI")
    def test_too_large_413(self, mock_openai_cls: MagicMock, client: TestClient) -> None:
        with patch("src.transcripts.speech.MAX_UPLOAD_BYTES", 16):
            response = client.post(
                "/api/transcribe",
                files={"file": ("talk.mp3", b"\x00" * 17, "audio/mpeg")},
            )
        assert response.status_code == 413
        assert "Export audio" in response.json()["error"]
        mock_openai_cls.assert_not_called()

    def test_missing_key_500(self) -> None:
        app.dependency_overrides[get_provider_config] = lambda: ProviderConfig(api_key="")
        try:
            response = TestClient(app).post(
                "/api/transcribe", files={"file": ("a.mp3", b"\x00" * 10, "audio/mpeg")}
            )
        finally:
            app.dependency_overrides.clear()
        assert response.status_code == 500
        assert "OPENAI_API_KEY" in response.json()["error"]


# ---------------------------------------------------------------------------
# POST /api/transcript
# ---------------------------------------------------------------------------


class TestFetchTranscriptEndpoint:
    @patch("src.transcripts.captions.YouTubeTranscriptApi")
    def test_success(self, mock_api_cls: MagicMock, client: TestClient) -> None:
        mock_api_cls.return_value.fetch.return_value = [
            SimpleNamespace(text="Welcome back to the channel everyone", start=0.0),
            SimpleNamespace(text="today we are building a content pack", start=3725.0),
        ]

        response = client.post(
            "/api/transcript", json={"url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ"}
        )

        assert response.status_code == 200, response.text
        assert response.json() == {
            "transcript": (
                "00:00 Welcome back to the channel everyone\n"
                "01:02:05 today we are building a content pack"
            ),
            "count": 2,
        }
        mock_api_cls.return_value.fetch.assert_called_once_with("dQw4w9WgXcQ", languages=["en"])

    @patch("src.transcripts.captions.YouTubeTranscriptApi")
    def test_no_captions_404(self, mock_api_cls: MagicMock, client: TestClient) -> None:
        mock_api_cls.return_value.fetch.return_value = []
        response = client.post("/api/transcript", json={"url": "https://youtu.be/dQw4w9WgXcQ"})
        assert response.status_code == 404
        assert "unavailable" in response.json()["error"]

    @pytest.mark.parametrize("body", [{}, {"url": "not a url"}])
    def test_invalid_request_400(self, client: TestClient, body: dict[str, str]) -> None:
        response = client.post("/api/transcript", json=body)
        assert response.status_code == 400
        assert "url" in response.json()["error"]
