"""API route handlers for Kotoba Bridge."""
import time

from fastapi import APIRouter, Request

from log import get_logger
from models import ClassifyRequest, TranslateRequest, VocabLookupRequest
from text_utils import normalize, split_sentences

logger = get_logger("kotoba.routes")

router = APIRouter()


def _pipeline(request: Request, operation: str):
    return request.app.state.pipelines[operation]


# The /api/... paths only alias the older client's URLs. Responses use the
# canonical shapes below, not that client's jp/vi or sentence-array bodies.

@router.get("/health", tags=["System"], summary="Liveness and provider availability")
@router.get("/api/ping", tags=["System"], include_in_schema=False)
async def health(request: Request):
    providers = request.app.state.providers
    availability = {pid: provider.available for pid, provider in providers.items()}
    return {
        "ok": True,
        "time": int(time.time() * 1000),
        "providerAvailability": availability,
        "hasGemini": availability.get("gemini", False),
    }


@router.post("/classify", tags=["Learning"], summary="Classify each sentence as command, question or statement")
@router.post("/api/classify", tags=["Learning"], include_in_schema=False)
async def classify(request: Request, req: ClassifyRequest):
    sentences = split_sentences(normalize(req.text))
    return await _pipeline(request, "classify").run(sentences)


@router.post("/translate", tags=["Learning"], summary="Translate Japanese text into Vietnamese")
@router.post("/api/translate", tags=["Learning"], include_in_schema=False)
async def translate(request: Request, req: TranslateRequest):
    return await _pipeline(request, "translate").run(normalize(req.text))


@router.post("/vocabLookup", tags=["Learning"], summary="Vocabulary breakdown of a word or sentence")
@router.post("/api/vocab/lookup", tags=["Learning"], include_in_schema=False)
async def vocab_lookup(request: Request, req: VocabLookupRequest):
    return await _pipeline(request, "vocabLookup").run(normalize(req.input))
