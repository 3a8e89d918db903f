"""Shared fixtures for the BizBoost test suite."""

from __future__ import annotations

import os
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from core.config import AppSettings
from core.domain.models import GenerationOutcome, ImageAsset
from core.domain.schemas import OutputSchema


class FakeGenerator:
    """In-memory `GenerativeClient` that records every call."""

    def __init__(
        self,
        *,
        outcome: GenerationOutcome | None = None,
        outcomes: list[GenerationOutcome] | None = None,
        image: ImageAsset | None = None,
        image_error: Exception | None = None,
    ) -> None:
        self.outcome = outcome or GenerationOutcome.success("{}")
        self.outcomes = list(outcomes or [])
        self.image = image
        self.image_error = image_error
        self.calls: list[dict[str, Any]] = []
        self.image_prompts: list[str] = []

    async def generate(
        self,
        prompt: str,
        schema: OutputSchema,
        system_instruction: str,
        model: str | None = None,
    ) -> GenerationOutcome:
        self.calls.append(
            {"prompt": prompt, "schema": schema, "system_instruction": system_instruction, "model": model}
        )
        if self.outcomes:
            return self.outcomes.pop(0)
        return self.outcome

    async def generate_image(self, prompt: str) -> ImageAsset | None:
        self.image_prompts.append(prompt)
        if self.image_error is not None:
            raise self.image_error
        return self.image

    async def aclose(self) -> None:
        return None


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep developer env vars and .env files out of the tests."""

    for key in list(os.environ):
        if key.startswith("BIZBOOST_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, ai_api_key="test-key")


@pytest.fixture
def make_generator():
    """Factory for `FakeGenerator` with custom outcomes."""

    return FakeGenerator


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def png_asset() -> ImageAsset:
    return ImageAsset(mime_type="image/png", data="iVBORw0KGgo=")


@pytest.fixture
def mock_openai():
    """Mock `AsyncOpenAI` with chat completions and images endpoints."""

    client = MagicMock()
    client.chat.completions.create = AsyncMock(
        return_value=SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="{}"))])
    )
    client.images.generate = AsyncMock(return_value=SimpleNamespace(data=[], output_format=None))
    client.close = AsyncMock()
    return client
