# ─────────────────────────────────────────────────────────────────────────────
# POST /api/generate-from-scrapwood — assembly generation endpoint (THIN)
# ─────────────────────────────────────────────────────────────────────────────


from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from scrapwood.dependencies import get_configured_generator
from scrapwood.schemas import GenerationRequest
from scrapwood.services.assembly import AssemblyGenerator

router = APIRouter()


@router.post("/api/generate-from-scrapwood")
async def generate_from_scrapwood(
    body: GenerationRequest,
    generator: AssemblyGenerator = Depends(get_configured_generator),
) -> JSONResponse:
    """Design an object from the caller's scrapwood inventory via Gemini.

    Any method other than POST is answered with 405 by the router.
    Validation is Pydantic. Errors are exceptions. Logic is in the generator.
    The Gemini reply is relayed as-is.
    """
    data = await generator.generate(body)
    return JSONResponse(status_code=200, content=data)
