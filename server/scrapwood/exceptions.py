# ─────────────────────────────────────────────────────────────────────────────
# Custom Exceptions + FastAPI Exception Handlers
# ─────────────────────────────────────────────────────────────────────────────
# Every error body has a human-readable "message"; server-side failures add
# an "error" field with the diagnostic detail.
# ─────────────────────────────────────────────────────────────────────────────


import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)

SERVER_ERROR_MESSAGE = "An error occurred on the server."


# ── Exception hierarchy ──────────────────────────────────────────────────────


class ScrapwoodError(Exception):
    """Base exception for all scrapwood generation errors."""

    def __init__(self, message: str, status_code: int = 500, error: str | None = None):
        self.message = message
        self.status_code = status_code
        self.error = error
        super().__init__(error or message)

    def to_content(self) -> dict:
        content = {"message": self.message}
        if self.error is not None:
            content["error"] = self.error
        return content


class MisconfiguredError(ScrapwoodError):
    """Raised when the Gemini API key is missing from the settings."""

    def __init__(self):
        super().__init__("API key is not configured on the server.", status_code=500)


class BadRequestError(ScrapwoodError):
    """Raised when the request body lacks a prompt or a non-empty scrapwood list."""

    def __init__(self):
        super().__init__(
            "Missing 'prompt' or 'scrapwood' list in the request.",
            status_code=400,
        )


class InvalidFreakynessError(ScrapwoodError):
    """Raised when freakyness falls outside the provider's temperature range."""

    def __init__(self, minimum: float = 0.0, maximum: float = 2.0):
        super().__init__(
            f"'freakyness' must be a number between {minimum} and {maximum}.",
            status_code=400,
        )


class ProviderError(ScrapwoodError):
    """Raised when Gemini answers with a non-success status."""

    def __init__(self, provider_status: int, body: str):
        self.provider_status = provider_status
        self.body = body
        super().__init__(
            SERVER_ERROR_MESSAGE,
            status_code=500,
            error=f"Gemini API responded with status {provider_status}: {body}",
        )


class GenerationFailedError(ScrapwoodError):
    """Raised when the outbound call fails for any reason besides a provider status."""

    def __init__(self, reason: str):
        super().__init__(SERVER_ERROR_MESSAGE, status_code=500, error=reason)


# ── Validation mapping ──────────────────────────────────────────────────────


def error_for_validation(exc: RequestValidationError) -> ScrapwoodError:
    """Translate a Pydantic body validation failure into a client error.

    Only a freakyness-only failure gets its own message; anything touching
    prompt, scrapwood or the body as a whole is a missing-field request.
    """
    fields: set[str] = set()
    for err in exc.errors():
        loc = err.get("loc", ())
        fields.add(str(loc[1]) if len(loc) > 1 else "body")
    if fields == {"freakyness"}:
        return InvalidFreakynessError()
    return BadRequestError()


# ── Handler registration ────────────────────────────────────────────────────


def _render(exc: ScrapwoodError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers on the FastAPI app.

    Endpoints raise ScrapwoodError subclasses; these handlers catch them
    and return structured JSON — no inline try/except in endpoints.
    """

    @app.exception_handler(ScrapwoodError)
    async def scrapwood_error_handler(request: Request, exc: ScrapwoodError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "scrapwood_error",
                error=exc.error or exc.message,
                error_type=type(exc).__name__,
                path=request.url.path,
                exc_info=exc,
            )
        else:
            logger.warning(
                "client_error",
                error=exc.message,
                error_type=type(exc).__name__,
                path=request.url.path,
            )
        return _render(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        error = error_for_validation(exc)
        logger.warning(
            "request_validation_failed",
            error=error.message,
            path=request.url.path,
            details=exc.errors(),
        )
        return _render(error)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        logger.warning(
            "http_error",
            status_code=exc.status_code,
            method=request.method,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_error", error=str(exc), exc_info=True)
        # Runs outside RequestContextMiddleware, which never sees this response.
        request_id = getattr(request.state, "request_id", None)
        return JSONResponse(
            status_code=500,
            content={"message": SERVER_ERROR_MESSAGE, "error": str(exc)},
            headers={"X-Request-ID": request_id} if request_id else None,
        )
