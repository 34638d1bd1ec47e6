"""Provider clients (Gemini, LibreTranslate) and model-response decoding."""
import asyncio
import json
import re as _re
import time
from typing import Any, Dict, Optional, Protocol

import httpx

from config import Settings
from errors import MissingCredential, TransportError
from log import get_logger

logger = get_logger("kotoba.llm")

_FENCE_OPEN = _re.compile(r"^```[A-Za-z]*\s*")
_FENCE_CLOSE = _re.compile(r"\s*```$")


def decode_json_payload(raw) -> Optional[Any]:
    """Parse a model reply as JSON, tolerating a ``` fence around it.

    Returns None for non-string input or anything that does not parse.
    """
    if not isinstance(raw, str):
        return None
    trimmed = raw.strip()
    if trimmed.startswith("```"):
        trimmed = _FENCE_OPEN.sub("", trimmed)
        trimmed = _FENCE_CLOSE.sub("", trimmed).strip()
    try:
        return json.loads(trimmed)
    except (ValueError, RecursionError):
        return None


class ProviderClient(Protocol):
    id: str

    @property
    def available(self) -> bool: ...

    async def call(self, prompt: str, **options) -> str: ...


class _HTTPProvider:
    """Shared POST-and-check plumbing for the HTTP providers."""

    id = "provider"

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    async def _post(self, url: str, payload: dict, headers: Optional[Dict[str, str]] = None) -> httpx.Response:
        start = time.monotonic()
        timeout = self.settings.provider_timeout
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                # httpx timeouts are per connect/read/write step; bound the whole call.
                resp = await asyncio.wait_for(client.post(url, json=payload, headers=headers), timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException):
            raise TransportError(self.id, f"timed out after {timeout}s")
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(self.id, f"{type(exc).__name__}: {exc}")

        duration_ms = round((time.monotonic() - start) * 1000)
        if not 200 <= resp.status_code < 300:
            raise TransportError(self.id, f"HTTP {resp.status_code}", status_code=resp.status_code)
        logger.debug("Provider HTTP call ok", extra={
            "provider": self.id, "status_code": resp.status_code, "duration_ms": duration_ms,
        })
        return resp


def extract_gemini_text(data: Any) -> str:
    """Pull candidates[0].content.parts[*].text out of a generateContent reply."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates") or []
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content") or {}
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""
    texts = [p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)]
    return "".join(texts).strip()


class GeminiClient(_HTTPProvider):
    """Google generative-language API, `generateContent` endpoint."""

    id = "gemini"

    @property
    def available(self) -> bool:
        return self.settings.has_gemini

    async def call(self, prompt: str, **options) -> str:
        if not self.settings.gemini_api_key:
            raise MissingCredential(self.id, "GEMINI_API_KEY is not configured")

        model = options.get("model") or self.settings.gemini_model
        url = f"{self.settings.gemini_base_url}/models/{model}:generateContent"
        payload: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
        if "temperature" in options:
            payload["generationConfig"] = {"temperature": options["temperature"]}

        # Key goes in a header so it never shows up in logged URLs.
        resp = await self._post(url, payload, headers={"x-goog-api-key": self.settings.gemini_api_key})
        try:
            data = resp.json()
        except ValueError:
            raise TransportError(self.id, "response body is not JSON", status_code=resp.status_code)
        return extract_gemini_text(data)


class LibreTranslateClient(_HTTPProvider):
    """LibreTranslate `/translate` endpoint.

    The prompt is the text to translate. The raw JSON body is returned as-is
    so the decoder sees `{"translatedText": ...}` like any other provider reply.
    """

    id = "libretranslate"

    @property
    def available(self) -> bool:
        return self.settings.has_libretranslate

    async def call(self, prompt: str, **options) -> str:
        if not self.settings.libretranslate_url:
            raise MissingCredential(self.id, "LIBRETRANSLATE_URL is not configured")

        payload = {
            "q": prompt,
            "source": options.get("source") or self.settings.source_language,
            "target": options.get("target") or self.settings.target_language,
            "format": "text",
        }
        if self.settings.libretranslate_api_key:
            payload["api_key"] = self.settings.libretranslate_api_key

        resp = await self._post(self.settings.libretranslate_url, payload,
                                headers={"accept": "application/json"})
        return resp.text or ""


def default_providers(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> Dict[str, ProviderClient]:
    return {
        GeminiClient.id: GeminiClient(settings, transport=transport),
        LibreTranslateClient.id: LibreTranslateClient(settings, transport=transport),
    }
