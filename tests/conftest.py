"""Shared pytest fixtures for prompt enhancer tests."""

import json
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Dict

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


class FakeClock:
    """Manually advanced clock for cache expiry tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeModels:
    """Stands in for ``client.aio.models``.

    Each call consumes the next outcome; the last outcome repeats. An
    exception outcome is raised, a string becomes ``response.text``.
    """

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    async def generate_content(self, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return SimpleNamespace(text=outcome, candidates=None)

    @property
    def models_called(self) -> list:
        return [call["model"] for call in self.calls]


class FakeGeminiClient:
    """Minimal async Gemini client double."""

    def __init__(self, *outcomes):
        self.aio = SimpleNamespace(models=FakeModels(outcomes))

    @property
    def calls(self) -> list:
        return self.aio.models.calls

    @property
    def models_called(self) -> list:
        return self.aio.models.models_called


class SleepRecorder:
    """Async sleep replacement that records waits instead of sleeping."""

    def __init__(self):
        self.waits = []

    async def __call__(self, seconds: float) -> None:
        self.waits.append(seconds)


@pytest.fixture
def fake_clock() -> FakeClock:
    """Clock starting at t=1000s."""
    return FakeClock()


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    """Records retry waits without sleeping."""
    return SleepRecorder()


@pytest.fixture
def make_client():
    """Factory for FakeGeminiClient instances with scripted outcomes."""
    return FakeGeminiClient


@pytest.fixture
def model_json() -> str:
    """A well-formed model answer."""
    return json.dumps(
        {
            "clean": "A red dragon emblem, flat vector logo",
            "detailed": "A coiled red dragon emblem, flat vector shapes, strong silhouette",
            "extreme": "A coiled red dragon emblem with sharp wing geometry, two-tone palette",
            "negative": "blurry, photorealistic",
            "params": {"aspectRatio": "1:1", "notes": "keep it readable at small sizes"},
        }
    )


@pytest.fixture
def sample_config() -> Dict:
    """Sample configuration for testing."""
    return {
        "gemini_api_key": "test_gemini_key",
        "gemini_models": ["gemini-2.5-flash-lite", "gemini-2.5-flash", "gemini-2.0-flash"],
        "cache_max_entries": 200,
        "cache_ttl_seconds": 600.0,
        "log_level": "INFO",
        "log_json": False,
        "cors_origins": ["http://localhost:3000"],
        "host": "0.0.0.0",
        "port": 8000,
    }


@pytest.fixture
def png_bytes() -> bytes:
    """Tiny stand-in for an uploaded PNG."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
