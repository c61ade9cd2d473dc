# SPDX-License-Identifier: MIT
"""Shared pytest fixtures for wip-grok tests."""

import pathlib
from typing import Any

import httpx
import pytest
from PIL import Image

from wip_grok.config import get_settings

API_BASE = "https://api.x.ai/v1"


def _json_response(payload: Any, status_code: int = 200, method: str = "POST", path: str = "/") -> httpx.Response:
    """Create an httpx.Response with a dummy request attached."""
    return httpx.Response(status_code, json=payload, request=httpx.Request(method, f"{API_BASE}{path}"))


@pytest.fixture
def json_response():
    """Factory for JSON httpx responses: ``json_response(payload, status_code=200)``."""
    return _json_response


@pytest.fixture(autouse=True)
def _api_key_env(monkeypatch):
    """Provide a test API key and reset the cached settings for every test."""
    monkeypatch.setenv("XAI_API_KEY", "xai-test-key")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_client(mocker):
    """Mock AsyncOpenAI client whose post/get return httpx responses."""
    client = mocker.MagicMock()
    client.post = mocker.AsyncMock()
    client.get = mocker.AsyncMock()
    return client


@pytest.fixture
def sample_png(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create a sample 64x32 RGB PNG for testing."""
    img_path = tmp_path / "source.png"
    Image.new("RGB", (64, 32), color=(255, 0, 0)).save(img_path, "PNG")
    return img_path


class FakeClock:
    """Simulated monotonic clock; ``sleep`` advances time instead of waiting."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
