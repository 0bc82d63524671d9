# ─────────────────────────────────────────────────────────────────────────────
# Health Check Routes — split into liveness and readiness
# ─────────────────────────────────────────────────────────────────────────────
#   /health        → Liveness probe. "Is the process alive?" Near-zero cost.
#                    Returns 200 always.
#
#   /health/ready  → Readiness probe. "Can it serve traffic?"
#                    Checks the Gemini key is set and the HTTP client is open.
#                    Returns 503 if not ready.
# ─────────────────────────────────────────────────────────────────────────────

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from scrapwood.config import Settings
from scrapwood.dependencies import get_http_client, get_settings_dep
from scrapwood.schemas import LivenessResponse, ReadinessResponse

router = APIRouter()


@router.get("/health", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """Liveness probe — is the process alive?

    Keep it absolutely minimal: no deps, no I/O.
    """
    return LivenessResponse(status="ok")


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness(
    settings: Settings = Depends(get_settings_dep),
    http: httpx.AsyncClient | None = Depends(get_http_client),
) -> JSONResponse:
    """Readiness probe — can this instance serve generation requests?

    Does not call Gemini; a reachable provider is not a readiness condition.
    """
    api_key_configured = settings.api_key_configured
    http_client_open = http is not None and not http.is_closed
    ready = api_key_configured and http_client_open

    response = ReadinessResponse(
        status="ready" if ready else "not_ready",
        api_key_configured=api_key_configured,
        http_client_open=http_client_open,
        model=settings.gemini_model,
    )

    return JSONResponse(
        status_code=200 if ready else 503,
        content=response.model_dump(),
    )
