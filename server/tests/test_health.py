# ─────────────────────────────────────────────────────────────────────────────
# Tests — health probes and debug routes
# ─────────────────────────────────────────────────────────────────────────────

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from conftest import FakeProvider, build_client
from scrapwood.config import Settings
from scrapwood.main import _parse_origins
from scrapwood.pipeline.prompt_templates import SYSTEM_PROMPT


class TestLiveness:
    def test_liveness_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestReadiness:
    @pytest.mark.asyncio
    async def test_ready_with_key_and_open_client(self, test_settings):
        app = build_client(test_settings, FakeProvider()).app
        async with httpx.AsyncClient() as http:
            app.state.http_client = http
            async with AsyncClient(
                transport=ASGITransport(app=app), base_url="http://test"
            ) as ac:
                response = await ac.get("/health/ready")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["api_key_configured"] is True
        assert data["model"] == "gemini-1.5-pro-latest"

    def test_not_ready_without_http_client(self, client):
        response = client.get("/health/ready")
        assert response.status_code == 503
        assert response.json()["http_client_open"] is False

    def test_not_ready_without_key(self, unconfigured_client):
        response = unconfigured_client.get("/health/ready")
        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "not_ready"
        assert data["api_key_configured"] is False


class TestDebugRoutes:
    def test_prompt_preview_makes_no_outbound_call(self, client, fake_provider):
        response = client.post(
            "/debug/prompt",
            json={"prompt": "a lamp", "scrapwood": [{"width": 0.2}], "freakyness": 1.1},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["temperature"] == 1.1
        assert data["fragments"][0] == SYSTEM_PROMPT
        assert '"a lamp"' in data["fragments"][1]
        assert fake_provider.calls == []

    def test_prompt_preview_works_without_key(self, unconfigured_client):
        response = unconfigured_client.post(
            "/debug/prompt", json={"prompt": "a lamp", "scrapwood": [{"width": 0.2}]}
        )
        assert response.status_code == 200
        assert response.json()["temperature"] == 0.5

    def test_config_hides_key(self, client):
        response = client.get("/debug/config")
        assert response.status_code == 200
        data = response.json()
        assert data["api_key_configured"] is True
        assert "test-key" not in response.text

    def test_debug_routes_can_be_disabled(self, monkeypatch):
        monkeypatch.setenv("ENABLE_DEBUG_ROUTES", "false")
        from scrapwood.config import get_settings

        get_settings.cache_clear()
        try:
            client = build_client(Settings(gemini_api_key="k"), FakeProvider())
            assert client.get("/debug/config").status_code == 404
        finally:
            get_settings.cache_clear()


class TestParseOrigins:
    def test_empty_means_any(self):
        assert _parse_origins("  ") == ["*"]

    def test_comma_separated(self):
        assert _parse_origins("https://a.dev, https://b.dev,") == [
            "https://a.dev",
            "https://b.dev",
        ]
