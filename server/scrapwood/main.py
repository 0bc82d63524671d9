# ─────────────────────────────────────────────────────────────────────────────
# FastAPI Application Factory + Lifespan
# ─────────────────────────────────────────────────────────────────────────────
# Entrypoint: uvicorn scrapwood.main:create_app --factory --host 0.0.0.0 --port 8080
# The --factory flag tells uvicorn to call create_app() for the app instance.
# ─────────────────────────────────────────────────────────────────────────────

from contextlib import asynccontextmanager

import httpx
import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scrapwood.config import get_settings
from scrapwood.exceptions import register_exception_handlers
from scrapwood.logging_config import configure_logging
from scrapwood.middleware import REQUEST_ID_HEADER, RequestContextMiddleware
from scrapwood.routes import debug, generate, health
from scrapwood.services.assembly import AssemblyGenerator
from scrapwood.services.gemini import GeminiClient

logger = structlog.get_logger(__name__)


def _configure_otel(exporter_type: str) -> None:
    """Configure OpenTelemetry tracing.

    Supports "console" for dev and "gcp" for Cloud Trace.
    No-op if the exporter type is unknown.
    """
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor

    provider = TracerProvider()

    if exporter_type == "console":
        from opentelemetry.sdk.trace.export import ConsoleSpanExporter

        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    elif exporter_type == "gcp":
        try:
            from opentelemetry.exporter.cloud_trace import CloudTraceSpanExporter

            provider.add_span_processor(
                BatchSpanProcessor(CloudTraceSpanExporter())
            )
        except ImportError:
            logger.warning("gcp_trace_exporter_not_available")
            return
    else:
        logger.warning("unknown_otel_exporter", exporter=exporter_type)
        return

    from opentelemetry import trace

    trace.set_tracer_provider(provider)
    logger.info("otel_configured", exporter=exporter_type)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage startup and shutdown lifecycle.

    The shared httpx.AsyncClient, the Gemini client and the generator are
    created here and stored in app.state for injection via Depends().
    A missing API key does not stop startup; generation requests answer
    500 and /health/ready answers 503 until it is set.
    """
    settings = get_settings()

    if settings.otel_exporter:
        _configure_otel(settings.otel_exporter)

    http = httpx.AsyncClient(timeout=settings.provider_timeout_seconds)
    gemini = GeminiClient(http, settings)

    app.state.settings = settings
    app.state.http_client = http
    app.state.assembly_generator = AssemblyGenerator(gemini, settings)

    if not settings.api_key_configured:
        logger.warning("gemini_api_key_missing", reason="GEMINI_API_KEY env var not set")
    logger.info("startup_complete", model=settings.gemini_model)

    yield  # App is running, serving requests

    # Shutdown
    await http.aclose()


def _parse_origins(allowed_origins: str) -> list[str]:
    """Parse comma-separated origin string into a list.

    Returns ``["*"]`` if the input is empty (development mode).
    Strips whitespace from each origin.
    """
    if not allowed_origins.strip():
        return ["*"]
    return [origin.strip() for origin in allowed_origins.split(",") if origin.strip()]


def create_app() -> FastAPI:
    """Application factory. Invoked by: uvicorn scrapwood.main:create_app --factory

    The --factory flag tells uvicorn to call this function to get the app,
    rather than importing a module-level variable. This avoids side effects
    at import time and makes testing cleaner.
    """
    settings = get_settings()
    configure_logging(log_level=settings.log_level, json_output=settings.log_json)

    app = FastAPI(
        title="Scrapwood Assembly Generator",
        description="Designs objects from scrapwood inventories via Gemini",
        version="0.1.0",
        lifespan=lifespan,
    )

    # ── Middleware stack ─────────────────────────────────────────────────────
    # Starlette applies middleware in reverse order of add_middleware calls.
    # The execution order for an incoming request is:
    #   CORS → RequestContext → route handler

    # Innermost — logs timing + request ID
    app.add_middleware(RequestContextMiddleware)

    # Outermost — CORS headers + preflight handling
    origins = _parse_origins(settings.allowed_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )

    # ── Exception handlers ───────────────────────────────────────────────────
    register_exception_handlers(app)

    # ── Routes ───────────────────────────────────────────────────────────────
    app.include_router(health.router, tags=["health"])
    app.include_router(generate.router, tags=["generate"])
    if settings.enable_debug_routes:
        app.include_router(debug.router, prefix="/debug", tags=["debug"])

    return app
