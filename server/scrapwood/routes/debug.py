# ─────────────────────────────────────────────────────────────────────────────
# Debug Routes — for development and prompt debugging
# ─────────────────────────────────────────────────────────────────────────────
# Only mounted when settings.enable_debug_routes is True.
# Nothing here calls Gemini or exposes the API key.
# ─────────────────────────────────────────────────────────────────────────────

from fastapi import APIRouter, Depends

from scrapwood.config import Settings
from scrapwood.dependencies import get_assembly_generator, get_settings_dep
from scrapwood.schemas import ConfigResponse, GenerationRequest, PromptPreviewResponse
from scrapwood.services.assembly import AssemblyGenerator

router = APIRouter()


@router.post("/prompt", response_model=PromptPreviewResponse)
async def preview_prompt(
    body: GenerationRequest,
    generator: AssemblyGenerator = Depends(get_assembly_generator),
    settings: Settings = Depends(get_settings_dep),
) -> PromptPreviewResponse:
    """Return the exact fragments and temperature a request would send.

    Works without an API key, so prompt wording can be iterated on locally.
    """
    fragments, temperature = generator.prepare(body)
    return PromptPreviewResponse(
        model=settings.gemini_model,
        temperature=temperature,
        fragments=fragments,
    )


@router.get("/config", response_model=ConfigResponse)
async def show_config(
    settings: Settings = Depends(get_settings_dep),
) -> ConfigResponse:
    """Non-secret configuration currently in effect."""
    return ConfigResponse(
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
        api_key_configured=settings.api_key_configured,
        default_freakyness=settings.default_freakyness,
        provider_timeout_seconds=settings.provider_timeout_seconds,
    )
