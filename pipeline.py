"""Ordered provider fallback for classify / translate / vocabLookup.

Each operation tries its providers one at a time, in a fixed order. The first
reply that decodes and passes the operation's shaper wins; unavailable
providers are skipped, failing or malformed ones are passed over, and when
nothing is left a deterministic placeholder is returned instead. Callers
always get exactly one result, tagged with the `provider` that produced it.
"""
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from config import Settings
from errors import ClientInputError, ProviderError
from llm import ProviderClient, decode_json_payload, default_providers
from log import get_logger
import placeholders
import prompts
import shaping

logger = get_logger("kotoba.pipeline")

FALLBACK_PROVIDER = "fallback"


@dataclass(frozen=True)
class Route:
    """One provider slot in an operation's priority list."""
    provider: ProviderClient
    build_prompt: Callable[[Any], str]
    options: Mapping[str, Any] = field(default_factory=dict)


class FallbackPipeline:
    def __init__(
        self,
        operation: str,
        routes: List[Route],
        shape: Callable[[Any, Any], Optional[dict]],
        placeholder: Callable[[Any], dict],
        empty_message: str = "No text provided",
    ):
        self.operation = operation
        self.routes = list(routes)
        self.shape = shape
        self.placeholder = placeholder
        self.empty_message = empty_message

    @property
    def provider_ids(self) -> List[str]:
        return [route.provider.id for route in self.routes]

    async def run(self, subject: Any) -> dict:
        """Produce the shaped result for `subject` (text or list of sentences)."""
        if not subject:
            raise ClientInputError(self.empty_message)

        for route in self.routes:
            result = await self._attempt(route, subject)
            if result is not None:
                return result

        logger.warning("All providers failed, using placeholder", extra={
            "operation": self.operation, "provider": FALLBACK_PROVIDER,
        })
        result = dict(self.placeholder(subject))
        result["provider"] = FALLBACK_PROVIDER
        return result

    async def _attempt(self, route: Route, subject: Any) -> Optional[dict]:
        provider = route.provider
        extra = {"operation": self.operation, "provider": provider.id}
        if not provider.available:
            logger.debug("Provider unavailable, skipped", extra=extra)
            return None

        prompt = route.build_prompt(subject)
        start = time.monotonic()
        try:
            raw = await provider.call(prompt, **route.options)
        except ProviderError as exc:
            logger.warning("Provider call failed", extra={**extra, "detail": exc.detail})
            return None
        duration_ms = round((time.monotonic() - start) * 1000)

        decoded = decode_json_payload(raw)
        if decoded is None:
            logger.warning("Provider reply is not JSON", extra={
                **extra, "duration_ms": duration_ms, "detail": (raw or "")[:200],
            })
            return None

        shaped = self.shape(decoded, subject)
        if shaped is None:
            return None

        logger.info("Provider succeeded", extra={**extra, "duration_ms": duration_ms})
        result = dict(shaped)
        result["provider"] = provider.id
        return result


def build_pipelines(settings: Settings, providers: Optional[Mapping[str, ProviderClient]] = None) -> Dict[str, FallbackPipeline]:
    """Wire the three operations to their providers in priority order."""
    if providers is None:
        providers = default_providers(settings)
    gemini = providers["gemini"]
    libretranslate = providers["libretranslate"]
    language_pair = {"source": settings.source_language, "target": settings.target_language}

    return {
        "classify": FallbackPipeline(
            "classify",
            [Route(gemini, prompts.classify_prompt)],
            shaping.shape_classification,
            placeholders.placeholder_classification,
        ),
        "translate": FallbackPipeline(
            "translate",
            [
                Route(gemini, prompts.translate_prompt),
                Route(libretranslate, prompts.passthrough, language_pair),
            ],
            shaping.shape_translation,
            placeholders.placeholder_translation,
        ),
        "vocabLookup": FallbackPipeline(
            "vocabLookup",
            [Route(gemini, prompts.vocab_prompt)],
            shaping.shape_vocabulary,
            placeholders.placeholder_vocabulary,
            empty_message="No input provided",
        ),
    }
