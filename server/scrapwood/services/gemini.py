# ─────────────────────────────────────────────────────────────────────────────
# Gemini Client — the only outbound network call
# ─────────────────────────────────────────────────────────────────────────────
# One method: send prompt fragments + temperature, get status + body back.
# The reply is never interpreted here; AssemblyGenerator decides what a
# status means. Transport failures surface as httpx.HTTPError.
# ─────────────────────────────────────────────────────────────────────────────


import json
import math
from dataclasses import dataclass
from typing import Any, Protocol, Sequence

import httpx
import structlog
from opentelemetry import trace

from scrapwood.config import Settings

logger = structlog.get_logger(__name__)
tracer = trace.get_tracer(__name__)


@dataclass(frozen=True)
class ProviderReply:
    """Raw HTTP outcome of a generateContent call."""

    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Parse the body; NaN, Infinity and overflowing floats raise ValueError."""
        return json.loads(
            self.body,
            parse_float=_finite_float,
            parse_constant=_reject_constant,
        )


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Out of range float value: {text}")
    return value


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-finite JSON constant: {name}")


class ContentProvider(Protocol):
    """Anything that can turn prompt fragments into a ProviderReply."""

    async def generate_content(
        self, fragments: Sequence[str], temperature: float
    ) -> ProviderReply: ...


class GeminiClient:
    """Calls Gemini's ``models/{model}:generateContent`` REST endpoint.

    The httpx.AsyncClient is owned by the app lifespan; this class only
    borrows it. The API key is read from Settings on every call and sent
    as the ``key`` query parameter.
    """

    def __init__(self, http: httpx.AsyncClient, settings: Settings) -> None:
        self._http = http
        self._settings = settings

    @property
    def model(self) -> str:
        return self._settings.gemini_model

    @property
    def endpoint(self) -> str:
        base = self._settings.gemini_base_url.rstrip("/")
        return f"{base}/models/{self.model}:generateContent"

    @staticmethod
    def build_payload(fragments: Sequence[str], temperature: float) -> dict:
        """Request body: one content turn with ordered text parts, JSON output."""
        return {
            "contents": [{"parts": [{"text": text} for text in fragments]}],
            "generationConfig": {
                "temperature": temperature,
                "responseMimeType": "application/json",
            },
        }

    async def generate_content(
        self, fragments: Sequence[str], temperature: float
    ) -> ProviderReply:
        with tracer.start_as_current_span("gemini_generate_content") as span:
            span.set_attribute("gemini.model", self.model)
            span.set_attribute("gemini.temperature", temperature)
            span.set_attribute("gemini.fragments", len(fragments))

            response = await self._http.post(
                self.endpoint,
                params={"key": self._settings.gemini_api_key.get_secret_value()},
                json=self.build_payload(fragments, temperature),
            )

            span.set_attribute("http.status_code", response.status_code)
            logger.debug(
                "gemini_response",
                model=self.model,
                status=response.status_code,
                bytes=len(response.content),
            )
            return ProviderReply(status_code=response.status_code, body=response.text)
