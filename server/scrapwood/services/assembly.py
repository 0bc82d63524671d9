# ─────────────────────────────────────────────────────────────────────────────
# Assembly Generator — request → Gemini → relayed JSON
# ─────────────────────────────────────────────────────────────────────────────
# Endpoints delegate here. This owns:
#   - API key presence check
#   - Temperature resolution (freakyness → default)
#   - Prompt assembly
#   - The single provider call and its failure mapping
# No retries, no caching: each request is one independent attempt.
# ─────────────────────────────────────────────────────────────────────────────


import time
from typing import Any

import httpx
import structlog
from opentelemetry import trace

from scrapwood.config import Settings
from scrapwood.exceptions import GenerationFailedError, MisconfiguredError, ProviderError
from scrapwood.pipeline.prompt_templates import build_prompt_fragments
from scrapwood.schemas import GenerationRequest
from scrapwood.services.gemini import ContentProvider

logger = structlog.get_logger(__name__)
tracer = trace.get_tracer(__name__)


class AssemblyGenerator:
    """Turns a GenerationRequest into Gemini's raw JSON reply.

    The provider is anything implementing ContentProvider, so tests can
    swap GeminiClient for an in-memory fake.
    """

    def __init__(self, provider: ContentProvider, settings: Settings) -> None:
        self._provider = provider
        self._settings = settings

    @property
    def is_configured(self) -> bool:
        return self._settings.api_key_configured

    def ensure_configured(self) -> None:
        """Raise MisconfiguredError unless a Gemini API key is set."""
        if not self.is_configured:
            raise MisconfiguredError()

    def resolve_temperature(self, request: GenerationRequest) -> float:
        if request.freakyness is None:
            return self._settings.default_freakyness
        return request.freakyness

    def prepare(self, request: GenerationRequest) -> tuple[list[str], float]:
        """Prompt fragments and temperature for a request, without calling out."""
        fragments = build_prompt_fragments(request.prompt, request.scrapwood)
        return fragments, self.resolve_temperature(request)

    async def generate(self, request: GenerationRequest) -> Any:
        """Full flow: config check → prompt → Gemini → parsed reply."""
        self.ensure_configured()
        with tracer.start_as_current_span("generate_assembly") as span:
            fragments, temperature = self.prepare(request)
            span.set_attribute("prompt_length", len(request.prompt))
            span.set_attribute("pieces", len(request.scrapwood))
            span.set_attribute("temperature", temperature)

            logger.info(
                "generating_assembly",
                prompt=request.prompt,
                pieces=len(request.scrapwood),
                temperature=temperature,
            )
            start = time.perf_counter()

            try:
                reply = await self._provider.generate_content(fragments, temperature)
            except httpx.HTTPError as e:
                raise GenerationFailedError(str(e) or type(e).__name__) from e

            if not reply.ok:
                logger.error(
                    "gemini_api_error",
                    status=reply.status_code,
                    body=reply.body,
                )
                span.set_attribute("provider_error", True)
                raise ProviderError(reply.status_code, reply.body)

            try:
                data = reply.json()
            except ValueError as e:
                raise GenerationFailedError(f"Gemini API returned invalid JSON: {e}") from e

            logger.info(
                "assembly_generated",
                elapsed_ms=int((time.perf_counter() - start) * 1000),
            )
            return data
