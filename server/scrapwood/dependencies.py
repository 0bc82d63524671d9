# ─────────────────────────────────────────────────────────────────────────────
# Dependency Injection — FastAPI Depends() providers
# ─────────────────────────────────────────────────────────────────────────────
# State flows: lifespan creates → app.state stores → Depends() injects.
# No global variables. Every dependency is explicit in endpoint signatures.
# ─────────────────────────────────────────────────────────────────────────────


import httpx
from fastapi import Request

from scrapwood.config import Settings
from scrapwood.services.assembly import AssemblyGenerator


def get_settings_dep(request: Request) -> Settings:
    """Inject Settings into endpoints via Depends()."""
    return request.app.state.settings


def get_http_client(request: Request) -> httpx.AsyncClient | None:
    """Inject the shared outbound HTTP client, if the lifespan created one."""
    return getattr(request.app.state, "http_client", None)


def get_assembly_generator(request: Request) -> AssemblyGenerator:
    """Inject AssemblyGenerator into endpoints via Depends()."""
    return request.app.state.assembly_generator


def get_configured_generator(request: Request) -> AssemblyGenerator:
    """Inject AssemblyGenerator, refusing to proceed without an API key.

    FastAPI resolves dependencies before validating the body, so a missing
    key is reported even when required fields are missing.
    """
    generator = get_assembly_generator(request)
    generator.ensure_configured()
    return generator
