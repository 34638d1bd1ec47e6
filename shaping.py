"""Validation and normalization of decoded provider output.

Provider replies are untrusted. Each `shape_*` function either returns the
canonical result dict for its operation (without the `provider` tag) or None
when the payload does not have the required shape. Field names that providers
use interchangeably are listed in the alias tables below, tried in order.
"""
from typing import Any, List, Optional, Sequence

from log import get_logger
from models import SENTENCE_TYPES, type_label

logger = get_logger("kotoba.shaping")

# --- Alias tables ---
SENTENCE_LIST_FIELDS = ("sentences", "results")
TRANSLATED_FIELDS = ("translated", "translation", "vi", "translatedText")
MAIN_TRANSLATION_FIELDS = ("mainTranslation", "translation", "meaning")
VOCAB_LIST_FIELDS = ("vocabList", "vocabulary", "words")
SINGLE_ENTRY_FIELDS = ("meaning", "synonyms", "examples")


class ShapeError(ValueError):
    pass


def lookup(payload: dict, aliases: Sequence[str]) -> Any:
    """Value of the first alias present with a non-null value, else None."""
    for key in aliases:
        value = payload.get(key)
        if value is not None:
            return value
    return None


def _require_object(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise ShapeError(f"{what} is not an object")
    return value


def _require_text(value: Any, what: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ShapeError(f"{what} must be a non-empty string")
    return value.strip()


def _optional_text(item: dict, key: str, default: str = "") -> str:
    value = item.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ShapeError(f"{key} must be a string")
    return value.strip()


def _require_list(value: Any, what: str) -> list:
    if not isinstance(value, list) or not value:
        raise ShapeError(f"{what} must be a non-empty list")
    return value


def _rejected(operation: str, exc: ShapeError) -> None:
    logger.info("Provider payload rejected", extra={"operation": operation, "detail": str(exc)})
    return None


# --- classify ---

def _shape_sentence(item: Any, fallback_original: str) -> Optional[dict]:
    item = _require_object(item, "sentence item")
    sentence_type = _require_text(item.get("type"), "type")
    if sentence_type not in SENTENCE_TYPES:
        raise ShapeError(f"unknown sentence type {sentence_type!r}")
    original = _optional_text(item, "original", fallback_original)
    if not original:
        return None
    return {
        "original": original,
        "normalized": _optional_text(item, "normalized") or original,
        "type": sentence_type,
        "typeLabel": type_label(sentence_type),
        "mainIdea": _optional_text(item, "mainIdea"),
        "actionSuggestion": _optional_text(item, "actionSuggestion"),
    }


def shape_classification(decoded: Any, sentences: List[str]) -> Optional[dict]:
    try:
        payload = _require_object(decoded, "payload")
        items = _require_list(lookup(payload, SENTENCE_LIST_FIELDS), "sentences")
        shaped = []
        for idx, item in enumerate(items):
            fallback_original = sentences[idx] if idx < len(sentences) else ""
            sentence = _shape_sentence(item, fallback_original)
            if sentence:
                shaped.append(sentence)
        if not shaped:
            raise ShapeError("no sentence with text")
    except ShapeError as exc:
        return _rejected("classify", exc)
    return {"sentences": shaped}


# --- translate ---

def shape_translation(decoded: Any, text: str) -> Optional[dict]:
    try:
        payload = _require_object(decoded, "payload")
        translated = _require_text(lookup(payload, TRANSLATED_FIELDS), "translated")
    except ShapeError as exc:
        return _rejected("translate", exc)
    return {"source": text, "translated": translated}


# --- vocabLookup ---

def _shape_example(value: Any) -> dict:
    example = _require_object(value, "example")
    return {
        "jp": _require_text(example.get("jp"), "example.jp"),
        "vi": _optional_text(example, "vi"),
    }


def _shape_vocab_entry(value: Any, default_reading: Optional[str] = None) -> dict:
    entry = _require_object(value, "vocab entry")
    if default_reading is None:
        reading = _require_text(entry.get("reading"), "reading")
    else:
        reading = _optional_text(entry, "reading") or default_reading
    synonyms = _require_list(entry.get("synonyms"), "synonyms")
    examples = _require_list(entry.get("examples"), "examples")
    return {
        "kanji": _optional_text(entry, "kanji"),
        "reading": reading,
        "hanViet": _optional_text(entry, "hanViet"),
        "meaning": _require_text(entry.get("meaning"), "meaning"),
        "synonyms": [_require_text(s, "synonym") for s in synonyms],
        "examples": [_shape_example(e) for e in examples],
    }


def shape_vocabulary(decoded: Any, text: str) -> Optional[dict]:
    try:
        payload = _require_object(decoded, "payload")
        main_translation = _require_text(lookup(payload, MAIN_TRANSLATION_FIELDS), "mainTranslation")
        entries = lookup(payload, VOCAB_LIST_FIELDS)
        if entries is None and any(key in payload for key in SINGLE_ENTRY_FIELDS):
            # Single-word reply: the payload itself is the only entry.
            vocab_list = [_shape_vocab_entry(payload, default_reading=text)]
        else:
            vocab_list = [_shape_vocab_entry(e) for e in _require_list(entries, "vocabList")]
    except ShapeError as exc:
        return _rejected("vocabLookup", exc)
    return {"input": text, "mainTranslation": main_translation, "vocabList": vocab_list}
