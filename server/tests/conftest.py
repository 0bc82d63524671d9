# ─────────────────────────────────────────────────────────────────────────────
# Test Fixtures — shared across all tests
# ─────────────────────────────────────────────────────────────────────────────


import json
from typing import Any, Sequence

import pytest
from fastapi.testclient import TestClient

from scrapwood.config import Settings
from scrapwood.main import create_app
from scrapwood.services.assembly import AssemblyGenerator
from scrapwood.services.gemini import ProviderReply

STOOL_ASSEMBLY = {
    "objectName": "stool",
    "parts": [
        {
            "id": "leg_1",
            "origin": {"x": 0.0, "y": 0.25, "z": 0.0},
            "dimensions": {"width": 0.1, "height": 0.5, "depth": 0.05},
            "connections": ["seat"],
        },
        {
            "id": "leg_1_offcut",
            "origin": {"x": 1.0, "y": 0.75, "z": 0.0},
            "dimensions": {"width": 0.1, "height": 1.5, "depth": 0.05},
            "connections": [],
            "status": "discarded",
        },
    ],
}


class FakeProvider:
    """In-memory ContentProvider that records every call."""

    def __init__(self, reply: ProviderReply | None = None, error: Exception | None = None):
        self.reply = reply or ProviderReply(status_code=200, body=json.dumps(STOOL_ASSEMBLY))
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def generate_content(
        self, fragments: Sequence[str], temperature: float
    ) -> ProviderReply:
        self.calls.append({"fragments": list(fragments), "temperature": temperature})
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def test_settings() -> Settings:
    """Settings configured for testing — fake key, console logs."""
    return Settings(
        gemini_api_key="test-key",
        enable_debug_routes=True,
        log_json=False,
        log_level="DEBUG",
    )


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


def build_client(settings: Settings, provider: Any, **kwargs: Any) -> TestClient:
    """FastAPI TestClient with app.state wired by hand (lifespan not run)."""
    app = create_app()
    app.state.settings = settings
    app.state.http_client = None
    app.state.assembly_generator = AssemblyGenerator(provider, settings)
    return TestClient(app, **kwargs)


@pytest.fixture
def client(test_settings: Settings, fake_provider: FakeProvider) -> TestClient:
    """FastAPI TestClient with a fake Gemini provider."""
    return build_client(test_settings, fake_provider)


@pytest.fixture
def unconfigured_client(fake_provider: FakeProvider) -> TestClient:
    """TestClient whose settings carry no Gemini API key."""
    settings = Settings(gemini_api_key="", log_json=False)
    return build_client(settings, fake_provider)
