# ─────────────────────────────────────────────────────────────────────────────
# Settings — Pydantic v2 BaseSettings
# ─────────────────────────────────────────────────────────────────────────────


from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Server configuration sourced from environment variables.

    Uses pydantic-settings v2 (separate package from pydantic).
    The Gemini key is read from ``GEMINI_API_KEY``; an empty value is
    allowed at startup and rejected at request time.
    """

    model_config = SettingsConfigDict(env_prefix="", env_file=".env")

    # ── Provider ─────────────────────────────────────────────────────────────
    gemini_api_key: SecretStr = SecretStr("")
    gemini_model: str = "gemini-1.5-pro-latest"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"

    # ── Generation ───────────────────────────────────────────────────────────
    default_freakyness: float = 0.5
    provider_timeout_seconds: float = 120.0  # matches the hosting platform's max duration

    # ── Infrastructure ───────────────────────────────────────────────────────
    port: int = 8080
    allowed_origins: str = ""
    otel_exporter: str = ""

    # ── Feature flags ────────────────────────────────────────────────────────
    enable_debug_routes: bool = True

    # ── Logging ──────────────────────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool = True  # JSON logs for Cloud Logging

    @property
    def api_key_configured(self) -> bool:
        """Whether a non-empty Gemini API key is present."""
        return bool(self.gemini_api_key.get_secret_value())


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
