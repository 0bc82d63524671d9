# ─────────────────────────────────────────────────────────────────────────────
# API Schemas — request / response models
# ─────────────────────────────────────────────────────────────────────────────
# Scrapwood pieces and the Gemini reply stay untyped (Any): they are relayed,
# never inspected.
# ─────────────────────────────────────────────────────────────────────────────


from typing import Any

from pydantic import BaseModel, Field

# Gemini's accepted temperature range.
MIN_FREAKYNESS = 0.0
MAX_FREAKYNESS = 2.0


class GenerationRequest(BaseModel):
    """Body of POST /api/generate-from-scrapwood."""

    prompt: str = Field(min_length=1, description="What to build, e.g. 'a simple stool'")
    scrapwood: list[Any] = Field(min_length=1, description="Available pieces, in meters")
    freakyness: float | None = Field(
        default=None,
        strict=True,  # no bools or numeric strings; ints still pass
        ge=MIN_FREAKYNESS,
        le=MAX_FREAKYNESS,
        description="Sampling temperature; the server default applies when omitted",
    )


class LivenessResponse(BaseModel):
    status: str


class ReadinessResponse(BaseModel):
    status: str
    api_key_configured: bool
    http_client_open: bool
    model: str


class PromptPreviewResponse(BaseModel):
    """What would be sent to Gemini for a request (debug only)."""

    model: str
    temperature: float
    fragments: list[str]


class ConfigResponse(BaseModel):
    model: str
    base_url: str
    api_key_configured: bool
    default_freakyness: float
    provider_timeout_seconds: float
